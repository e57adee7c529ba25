"""PostgreSQL schema reader backed by information_schema and pg_catalog."""
import logging
from typing import Optional, Sequence

from sqlalchemy.engine import Connection

from dbschema.config import settings
from dbschema.core.readers.base import SchemaReader, select_fields, to_bool, to_int_or_none
from dbschema.models.schema import Column, ForeignKey, Index, Table, size_from_catalog

logger = logging.getLogger(__name__)

# information_schema reports SQL-standard spellings; the canonical model uses short tokens.
TYPE_ALIASES = {
    "character varying": "varchar",
    "character": "char",
    "timestamp without time zone": "timestamp",
    "timestamp with time zone": "timestamptz",
    "time without time zone": "time",
    "time with time zone": "timetz",
}

TABLES_SQL = """
    SELECT t.table_name AS name,
           t.table_type AS type
    FROM information_schema.tables t
    WHERE t.table_schema = :schema
      AND t.table_type = 'BASE TABLE'
    ORDER BY t.table_name
"""

COLUMNS_SQL = """
    SELECT cols.column_name              AS name,
           cols.data_type                AS type,
           cols.udt_name                 AS udt_name,
           cols.character_maximum_length AS length,
           cols.numeric_precision        AS "precision",
           cols.numeric_scale            AS scale,
           (cols.is_nullable = 'YES')    AS nullable,
           cols.column_default           AS "default",
           COALESCE(pk.is_primary, false) AS "primary",
           (COALESCE(left(cols.column_default, 8) = 'nextval(', false)
            OR cols.is_identity = 'YES') AS auto_increment
    FROM information_schema.columns cols
    LEFT JOIN (
        SELECT kcu.table_schema, kcu.table_name, kcu.column_name, TRUE AS is_primary
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
          ON tc.constraint_name = kcu.constraint_name
         AND tc.table_schema = kcu.table_schema
         AND tc.table_name = kcu.table_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
    ) pk
      ON pk.table_schema = cols.table_schema
     AND pk.table_name = cols.table_name
     AND pk.column_name = cols.column_name
    WHERE cols.table_schema = :schema
      AND cols.table_name = :table
    ORDER BY cols.ordinal_position
"""

ENUM_VALUES_SQL = """
    SELECT e.enumlabel AS label
    FROM pg_type t
    JOIN pg_enum e ON t.oid = e.enumtypid
    WHERE t.typname = :typname
    ORDER BY e.enumsortorder
"""

INDEXES_SQL = """
    SELECT ic.relname AS name,
           a.attname AS column_name,
           ix.indisunique AS is_unique,
           k.ord AS sequence,
           CASE
               WHEN ix.indisprimary THEN 'primary'
               WHEN ix.indisunique THEN 'unique'
               ELSE 'index'
           END AS index_type
    FROM pg_index ix
    JOIN pg_class t ON t.oid = ix.indrelid
    JOIN pg_namespace n ON n.oid = t.relnamespace
    JOIN pg_class ic ON ic.oid = ix.indexrelid
    CROSS JOIN LATERAL unnest(ix.indkey::int2[]) WITH ORDINALITY AS k(attnum, ord)
    JOIN pg_attribute a ON a.attrelid = t.oid AND a.attnum = k.attnum
    WHERE n.nspname = :schema
      AND t.relname = :table
    ORDER BY ic.relname, k.ord
"""

FOREIGN_KEYS_SQL = """
    SELECT kcu.table_name AS container,
           kcu.constraint_name AS constraint_name,
           kcu.column_name AS constraint_column,
           ref.table_name AS ref_container,
           ref.column_name AS ref_column,
           rc.update_rule AS on_update,
           rc.delete_rule AS on_delete,
           kcu.ordinal_position AS sequence
    FROM information_schema.referential_constraints rc
    JOIN information_schema.key_column_usage kcu
      ON kcu.constraint_name = rc.constraint_name
     AND kcu.constraint_schema = rc.constraint_schema
    JOIN information_schema.key_column_usage ref
      ON ref.constraint_name = rc.unique_constraint_name
     AND ref.constraint_schema = rc.unique_constraint_schema
     AND ref.ordinal_position = kcu.position_in_unique_constraint
    WHERE kcu.table_schema = :schema
      AND kcu.table_name = :table
    ORDER BY kcu.constraint_name, kcu.ordinal_position
"""


class PostgresReader(SchemaReader):
    FIELD_TYPES = {
        # Date/Time
        "timestamp": "datetime", "timestamptz": "datetime",
        "timestamp with time zone": "datetime", "timestamp without time zone": "datetime",
        "date": "date", "time": "time", "timetz": "time",
        "time with time zone": "time", "time without time zone": "time", "interval": "string",
        # Integer
        "integer": "int", "int": "int", "int4": "int", "smallint": "int", "int2": "int",
        "bigint": "int", "int8": "int", "serial": "int", "bigserial": "int", "smallserial": "int",
        # Boolean
        "boolean": "bool", "bool": "bool",
        # Float/Decimal
        "real": "float", "float4": "float", "double precision": "float", "float8": "float",
        "numeric": "float", "decimal": "float", "money": "string",
        # String
        "character varying": "string", "varchar": "string", "character": "string", "char": "string",
        "text": "string", "name": "string", "bytea": "string", "uuid": "string",
        # JSON
        "json": "array", "jsonb": "array",
        "array": "string",
        # Network / geometric / range / other
        "inet": "string", "cidr": "string", "macaddr": "string", "macaddr8": "string",
        "point": "string", "line": "string", "lseg": "string", "box": "string", "path": "string",
        "polygon": "string", "circle": "string",
        "int4range": "string", "int8range": "string", "numrange": "string", "tsrange": "string",
        "tstzrange": "string", "daterange": "string",
        "xml": "string", "tsvector": "string", "tsquery": "string",
    }

    def __init__(self, connection: Connection, schema: Optional[str] = None):
        super().__init__(connection)
        self.schema = schema or settings.POSTGRES_SCHEMA

    def tables(self) -> Optional[list[Table]]:
        rows = self._fetch(TABLES_SQL, schema=self.schema)
        return [Table(name=r["name"], type=r["type"]) for r in rows] or None

    def columns(self, table: str, fields: Optional[Sequence[str]] = None) -> list[Column]:
        rows = self._fetch(COLUMNS_SQL, schema=self.schema, table=table)
        return select_fields([self._to_column(r) for r in rows], fields)

    def _to_column(self, row: dict) -> Column:
        raw_type = str(row["type"]).lower()
        data_type = TYPE_ALIASES.get(raw_type, raw_type)
        enum_values = None
        if raw_type == "user-defined":
            # Only pg_enum types are enums; extension types such as citext keep their own name.
            enum_values = self._fetch_enum_values(row["udt_name"])
            data_type = "enum" if enum_values else str(row["udt_name"]).lower()
            if not enum_values:
                logger.debug("Column %s has non-enum user-defined type %s", row["name"], data_type)
        return Column(
            name=row["name"],
            type=data_type,
            size=size_from_catalog(
                to_int_or_none(row["length"]),
                to_int_or_none(row["precision"]),
                to_int_or_none(row["scale"]),
            ),
            nullable=bool(row["nullable"]),
            default=row["default"],
            primary=bool(row["primary"]),
            auto_increment=bool(row["auto_increment"]),
            enum_values=enum_values,
        )

    def _fetch_enum_values(self, type_name: str) -> Optional[list[str]]:
        rows = self._fetch(ENUM_VALUES_SQL, typname=type_name)
        return [r["label"] for r in rows] or None

    def indexes(self, table: str) -> Optional[list[Index]]:
        rows = self._fetch(INDEXES_SQL, schema=self.schema, table=table)
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
        rows = self._fetch(FOREIGN_KEYS_SQL, schema=self.schema, table=table)
        return [ForeignKey(**r) for r in rows] or None
