"""SQLite schema reader backed by sqlite_master and the table-valued PRAGMA functions."""
import re
from typing import Optional, Sequence

from dbschema.core.readers.base import SchemaReader, select_fields, to_bool
from dbschema.models.schema import Column, ForeignKey, Index, Table, size_from_catalog

_SIZE_SUFFIX = re.compile(r"\(.*?\)")
_LENGTH = re.compile(r"\((\d+)\)")
_PRECISION_SCALE = re.compile(r"\((\d+),\s*(\d+)\)")

TABLES_SQL = """
    SELECT name, 'BASE TABLE' AS type
    FROM sqlite_master
    WHERE type = 'table'
      AND name NOT LIKE 'sqlite_%'
    ORDER BY name
"""

COLUMNS_SQL = """
    SELECT cid, name, type, "notnull" AS not_null, dflt_value, pk
    FROM pragma_table_info(:table)
    ORDER BY cid
"""

INDEX_LIST_SQL = """
    SELECT name, "unique" AS is_unique, origin
    FROM pragma_index_list(:table)
    ORDER BY name
"""

INDEX_INFO_SQL = """
    SELECT seqno, name
    FROM pragma_index_info(:index)
    ORDER BY seqno
"""

FOREIGN_KEYS_SQL = """
    SELECT id, seq, "table" AS ref_table, "from" AS from_col, "to" AS to_col, on_update, on_delete
    FROM pragma_foreign_key_list(:table)
    ORDER BY id, seq
"""


def parse_declared_type(declared: str) -> tuple[str, Optional[int], Optional[int], Optional[int]]:
    """
    Split a declared SQLite type into (base_type, length, precision, scale).

    varchar(50)    -> ('varchar', 50, None, None)
    decimal(10,2)  -> ('decimal', None, 10, 2)
    numeric(5)     -> ('numeric', None, 5, 0)
    """
    raw = (declared or "").lower()
    base_type = _SIZE_SUFFIX.sub("", raw).strip()
    length = precision = scale = None

    m = _PRECISION_SCALE.search(raw)
    if m:
        precision, scale = int(m.group(1)), int(m.group(2))
    else:
        m = _LENGTH.search(raw)
        if m and base_type in ("decimal", "numeric"):
            precision, scale = int(m.group(1)), 0
        elif m:
            length = int(m.group(1))
    return base_type, length, precision, scale


class SqliteReader(SchemaReader):
    FIELD_TYPES = {
        # Integer (flexible typing)
        "integer": "int", "int": "int", "tinyint": "int", "smallint": "int", "mediumint": "int",
        "bigint": "int",
        # Boolean (stored as integer)
        "boolean": "bool", "bool": "bool",
        # Real
        "real": "float", "double": "float", "float": "float", "decimal": "float", "numeric": "float",
        # Text
        "text": "string", "varchar": "string", "char": "string", "character": "string",
        "nchar": "string", "nvarchar": "string", "clob": "string",
        # Date/Time (stored as text or integer)
        "date": "date", "datetime": "datetime", "timestamp": "datetime", "time": "time",
        # Binary
        "blob": "string", "binary": "string", "varbinary": "string",
        # JSON is plain text in SQLite
        "json": "string",
    }

    def tables(self) -> Optional[list[Table]]:
        rows = self._fetch(TABLES_SQL)
        return [Table(name=r["name"], type=r["type"]) for r in rows] or None

    def columns(self, table: str, fields: Optional[Sequence[str]] = None) -> list[Column]:
        rows = self._fetch(COLUMNS_SQL, table=table)
        pk_count = sum(1 for r in rows if r["pk"])
        columns = []
        for r in rows:
            base_type, length, precision, scale = parse_declared_type(r["type"])
            primary = bool(r["pk"])
            columns.append(Column(
                name=r["name"],
                type=base_type,
                size=size_from_catalog(length, precision, scale),
                nullable=not to_bool(r["not_null"]),
                default=r["dflt_value"],
                primary=primary,
                # INTEGER PRIMARY KEY aliases the rowid
                auto_increment=primary and pk_count == 1 and base_type == "integer",
            ))
        return select_fields(columns, fields)

    def indexes(self, table: str) -> Optional[list[Index]]:
        results = []
        for index in self._fetch(INDEX_LIST_SQL, table=table):
            is_unique = to_bool(index["is_unique"])
            if index["origin"] == "pk":
                index_type = "primary"
            else:
                index_type = "unique" if is_unique else "index"
            for col in self._fetch(INDEX_INFO_SQL, index=index["name"]):
                results.append(Index(
                    name=index["name"],
                    column_name=col["name"],
                    is_unique=is_unique,
                    index_type=index_type,
                    sequence=int(col["seqno"]) + 1,
                ))
        return results or None

    def foreign_keys(self, table: str) -> Optional[list[ForeignKey]]:
        rows = self._fetch(FOREIGN_KEYS_SQL, table=table)
        # SQLite keeps constraints unnamed; name each one after its first column.
        names: dict[int, str] = {}
        for fk in rows:
            names.setdefault(fk["id"], f"fk_{table}_{fk['from_col']}_{fk['ref_table']}")

        results = []
        for fk in rows:
            ref_column = fk["to_col"] or self._implicit_ref_column(fk["ref_table"], int(fk["seq"]))
            results.append(ForeignKey(
                container=table,
                constraint_name=names[fk["id"]],
                constraint_column=fk["from_col"],
                ref_container=fk["ref_table"],
                ref_column=ref_column,
                on_update=fk["on_update"],
                on_delete=fk["on_delete"],
                sequence=int(fk["seq"]) + 1,
            ))
        return results or None

    def _implicit_ref_column(self, ref_table: str, seq: int) -> str:
        """`REFERENCES parent` without a column list points at the parent's primary key."""
        pk_cols = [c.name for c in self.columns(ref_table) if c.primary]
        return pk_cols[seq] if seq < len(pk_cols) else ""
