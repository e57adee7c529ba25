"""MySQL / MariaDB DDL dialect."""
from typing import Optional

from dbschema.config import settings
from dbschema.core.dialects.base import DdlDialect, is_function_call
from dbschema.models.schema import Column

# Functions MySQL accepts as a bare DEFAULT; any other call must be written as (expr).
BARE_DEFAULT_FUNCTIONS = {"CURRENT_TIMESTAMP", "NOW", "LOCALTIME", "LOCALTIMESTAMP"}


class MySqlDialect(DdlDialect):
    name = "mysql"
    IDENTIFIER_QUOTE = "`"
    BEGIN = "START TRANSACTION;"
    AUTO_INCREMENT_KEYWORD = "AUTO_INCREMENT"
    QUOTED_DEFAULT_TYPES = frozenset({
        "char", "varchar", "text", "tinytext", "mediumtext", "longtext", "enum", "set",
        "date", "datetime", "timestamp", "time",
    })

    def __init__(self, table_options: Optional[str] = None):
        self._table_options = settings.MYSQL_TABLE_OPTIONS if table_options is None else table_options

    def quote_literal(self, value: str) -> str:
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"

    def render_default(self, column: Column) -> str:
        rendered = super().render_default(column)
        if is_function_call(rendered) and rendered.split("(", 1)[0].upper() not in BARE_DEFAULT_FUNCTIONS:
            return f"({rendered})"
        return rendered

    def table_options(self) -> str:
        return self._table_options

    def enum_column_type(self, column: Column) -> str:
        return "ENUM(" + ",".join(self.quote_literal(v) for v in column.enum_values) + ")"

    def type_mapping(self, db_type, length=None, precision=None, scale=None) -> str:
        t = db_type.upper()
        if t in ("VARCHAR", "CHAR", "VARBINARY", "BINARY"):
            return f"{t}({length or 255})"
        if t in ("TEXT", "TINYTEXT", "MEDIUMTEXT", "LONGTEXT", "BLOB", "TINYBLOB", "MEDIUMBLOB", "LONGBLOB"):
            return t
        if t in ("INT", "INTEGER"):
            return "INT"
        if t in ("TINYINT", "SMALLINT", "MEDIUMINT", "BIGINT"):
            return t
        if t in ("DECIMAL", "NUMERIC"):
            if precision and scale:
                return f"{t}({precision},{scale})"
            return f"{t}({precision})" if precision else t
        if t == "FLOAT":
            return f"FLOAT({precision})" if precision else "FLOAT"
        if t in ("DOUBLE", "REAL"):
            return "DOUBLE"
        if t in ("BOOL", "BOOLEAN"):
            return "TINYINT(1)"
        # DATE, TIME, DATETIME, TIMESTAMP, YEAR, JSON, ENUM, SET and anything unknown
        return t
