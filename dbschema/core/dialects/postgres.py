"""PostgreSQL DDL dialect."""
from dbschema.core.dialects.base import DdlDialect
from dbschema.models.schema import Column

SERIAL_TYPES = {
    "int": "SERIAL", "integer": "SERIAL", "int4": "SERIAL",
    "bigint": "BIGSERIAL", "int8": "BIGSERIAL",
    "smallint": "SMALLSERIAL", "int2": "SMALLSERIAL",
}

TYPE_MAP = {
    "TEXT": "TEXT",
    "SMALLINT": "SMALLINT", "INT2": "SMALLINT",
    "INTEGER": "INTEGER", "INT": "INTEGER", "INT4": "INTEGER",
    "BIGINT": "BIGINT", "INT8": "BIGINT",
    "SERIAL": "SERIAL", "SERIAL4": "SERIAL",
    "BIGSERIAL": "BIGSERIAL", "SERIAL8": "BIGSERIAL",
    "SMALLSERIAL": "SMALLSERIAL", "SERIAL2": "SMALLSERIAL",
    "REAL": "REAL", "FLOAT4": "REAL",
    "DOUBLE PRECISION": "DOUBLE PRECISION", "FLOAT8": "DOUBLE PRECISION", "DOUBLE": "DOUBLE PRECISION",
    "DATE": "DATE",
    "TIME": "TIME",
    "TIMESTAMP": "TIMESTAMP",
    "TIMESTAMPTZ": "TIMESTAMP WITH TIME ZONE", "TIMESTAMP WITH TIME ZONE": "TIMESTAMP WITH TIME ZONE",
    "TIMETZ": "TIME WITH TIME ZONE", "TIME WITH TIME ZONE": "TIME WITH TIME ZONE",
    "INTERVAL": "INTERVAL",
    "BOOL": "BOOLEAN", "BOOLEAN": "BOOLEAN",
    "JSON": "JSON", "JSONB": "JSONB",
    "BYTEA": "BYTEA",
    "UUID": "UUID",
}


class PostgresDialect(DdlDialect):
    name = "postgresql"
    DROP_SUFFIX = " CASCADE"
    QUOTED_DEFAULT_TYPES = frozenset({"varchar", "char", "text", "character", "character varying", "enum"})

    def column_type(self, column: Column) -> str:
        if column.auto_increment and column.type.lower() in SERIAL_TYPES:
            return SERIAL_TYPES[column.type.lower()]
        return super().column_type(column)

    def type_mapping(self, db_type, length=None, precision=None, scale=None) -> str:
        t = db_type.upper()
        if t in ("VARCHAR", "CHARACTER VARYING"):
            return f"VARCHAR({length})" if length else "VARCHAR"
        if t in ("CHAR", "CHARACTER"):
            return f"CHAR({length})" if length else "CHAR"
        if t in ("DECIMAL", "NUMERIC"):
            if precision and scale:
                return f"{t}({precision},{scale})"
            return f"{t}({precision})" if precision else t
        return TYPE_MAP.get(t, t)
