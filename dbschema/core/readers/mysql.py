"""MySQL / MariaDB schema reader backed by information_schema."""
import re
from typing import Optional, Sequence

from dbschema.core.readers.base import SchemaReader, select_fields, to_bool, to_int_or_none
from dbschema.models.schema import Column, ForeignKey, Index, Table, size_from_catalog

_ENUM_BODY = re.compile(r"^enum\((.*)\)$", re.IGNORECASE | re.DOTALL)
_ENUM_VALUE = re.compile(r"['\"]([^'\"]*)['\"]")

TABLES_SQL = """
    SELECT TABLE_NAME AS name,
           TABLE_TYPE AS type
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = DATABASE()
      AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

COLUMNS_SQL = """
    SELECT COLUMN_NAME AS name,
           DATA_TYPE AS type,
           COLUMN_TYPE AS column_type,
           CHARACTER_MAXIMUM_LENGTH AS length,
           NUMERIC_PRECISION AS `precision`,
           NUMERIC_SCALE AS scale,
           IS_NULLABLE = 'YES' AS nullable,
           COLUMN_DEFAULT AS `default`,
           COLUMN_KEY = 'PRI' AS `primary`,
           LOCATE('auto_increment', EXTRA) > 0 AS auto_increment
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = DATABASE()
      AND TABLE_NAME = :table
    ORDER BY ORDINAL_POSITION
"""

INDEXES_SQL = """
    SELECT INDEX_NAME AS name,
           COLUMN_NAME AS column_name,
           NON_UNIQUE = 0 AS is_unique,
           SEQ_IN_INDEX AS sequence,
           CASE
               WHEN INDEX_NAME = 'PRIMARY' THEN 'primary'
               WHEN NON_UNIQUE = 0 THEN 'unique'
               ELSE 'index'
           END AS index_type
    FROM information_schema.STATISTICS
    WHERE TABLE_SCHEMA = DATABASE()
      AND TABLE_NAME = :table
    ORDER BY INDEX_NAME, SEQ_IN_INDEX
"""

FOREIGN_KEYS_SQL = """
    SELECT kcu.TABLE_NAME AS container,
           kcu.CONSTRAINT_NAME AS constraint_name,
           kcu.COLUMN_NAME AS constraint_column,
           kcu.REFERENCED_TABLE_NAME AS ref_container,
           kcu.REFERENCED_COLUMN_NAME AS ref_column,
           rc.UPDATE_RULE AS on_update,
           rc.DELETE_RULE AS on_delete,
           kcu.ORDINAL_POSITION AS sequence
    FROM information_schema.KEY_COLUMN_USAGE kcu
    JOIN information_schema.REFERENTIAL_CONSTRAINTS rc
      ON kcu.CONSTRAINT_NAME = rc.CONSTRAINT_NAME
     AND kcu.TABLE_SCHEMA = rc.CONSTRAINT_SCHEMA
    WHERE kcu.TABLE_SCHEMA = DATABASE()
      AND kcu.TABLE_NAME = :table
      AND kcu.REFERENCED_TABLE_NAME IS NOT NULL
    ORDER BY kcu.CONSTRAINT_NAME, kcu.ORDINAL_POSITION
"""


def extract_enum_values(column_type: str) -> Optional[list[str]]:
    """enum('draft','published') -> ['draft', 'published']"""
    match = _ENUM_BODY.match(column_type.strip())
    if not match:
        return None
    values = _ENUM_VALUE.findall(match.group(1))
    return values or None


class MySqlReader(SchemaReader):
    FIELD_TYPES = {
        # Date/Time
        "datetime": "datetime", "timestamp": "datetime", "date": "date", "time": "time", "year": "int",
        # Integer
        "int": "int", "tinyint": "int", "smallint": "int", "mediumint": "int", "bigint": "int",
        "integer": "int",
        # Boolean
        "bool": "bool", "boolean": "bool", "bit": "string",
        # Float/Decimal
        "double": "float", "float": "float", "real": "float", "decimal": "float", "numeric": "float",
        # String
        "char": "string", "varchar": "string", "text": "string", "tinytext": "string",
        "mediumtext": "string", "longtext": "string", "enum": "string", "set": "string",
        # Binary
        "binary": "string", "varbinary": "string", "blob": "string", "tinyblob": "string",
        "mediumblob": "string", "longblob": "string",
        # JSON
        "json": "array",
        # Spatial
        "geometry": "string", "point": "string", "linestring": "string", "polygon": "string",
        "multipoint": "string", "multilinestring": "string", "multipolygon": "string",
        "geometrycollection": "string",
    }

    def tables(self) -> Optional[list[Table]]:
        rows = self._fetch(TABLES_SQL)
        return [Table(name=r["name"], type=r["type"]) for r in rows] or None

    def columns(self, table: str, fields: Optional[Sequence[str]] = None) -> list[Column]:
        columns = [self._to_column(r) for r in self._fetch(COLUMNS_SQL, table=table)]
        return select_fields(columns, fields)

    def _to_column(self, row: dict) -> Column:
        data_type = str(row["type"]).lower()
        enum_values = None
        if data_type == "enum" and row.get("column_type"):
            enum_values = extract_enum_values(str(row["column_type"]))
        return Column(
            name=row["name"],
            type=data_type,
            size=size_from_catalog(
                to_int_or_none(row["length"]),
                to_int_or_none(row["precision"]),
                to_int_or_none(row["scale"]),
            ),
            nullable=to_bool(row["nullable"]),
            default=None if row["default"] is None else str(row["default"]),
            primary=to_bool(row["primary"]),
            auto_increment=to_bool(row["auto_increment"]),
            enum_values=enum_values,
        )

    def indexes(self, table: str) -> Optional[list[Index]]:
        rows = self._fetch(INDEXES_SQL, table=table)
        return [
            Index(
                name=r["name"],
                column_name=r["column_name"],
                is_unique=to_bool(r["is_unique"]),
                index_type=r["index_type"],
                sequence=int(r["sequence"]),
            )
            for r in rows
        ] or None

    def foreign_keys(self, table: str) -> Optional[list[ForeignKey]]:
        rows = self._fetch(FOREIGN_KEYS_SQL, table=table)
        return [ForeignKey(**r) for r in rows] or None
