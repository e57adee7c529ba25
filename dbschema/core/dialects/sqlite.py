"""SQLite DDL dialect.

SQLite only has storage affinities (INTEGER, TEXT, REAL, NUMERIC, BLOB), so most
declared types collapse onto one of them; dates and booleans become TEXT and
INTEGER respectively. See https://www.sqlite.org/datatype3.html
"""
from dbschema.core.dialects.base import DdlDialect
from dbschema.models.schema import ForeignKey, Index

AFFINITY = {
    # Integer affinity
    "INT": "INTEGER", "INTEGER": "INTEGER", "TINYINT": "INTEGER", "SMALLINT": "INTEGER",
    "MEDIUMINT": "INTEGER", "BIGINT": "INTEGER", "UNSIGNED BIG INT": "INTEGER",
    "INT2": "INTEGER", "INT8": "INTEGER", "SERIAL": "INTEGER",
    # Text affinity
    "CHARACTER": "TEXT", "VARCHAR": "TEXT", "VARYING CHARACTER": "TEXT", "NCHAR": "TEXT",
    "NATIVE CHARACTER": "TEXT", "NVARCHAR": "TEXT", "TEXT": "TEXT", "CLOB": "TEXT",
    # Real affinity
    "REAL": "REAL", "DOUBLE": "REAL", "DOUBLE PRECISION": "REAL", "FLOAT": "REAL", "NUMERIC": "REAL",
    # Blob affinity
    "BLOB": "BLOB", "BYTEA": "BLOB",
    # Temporal values are stored as TEXT
    "DATE": "TEXT", "DATETIME": "TEXT", "TIMESTAMP": "TEXT", "TIME": "TEXT",
    # Booleans are stored as 0/1
    "BOOL": "INTEGER", "BOOLEAN": "INTEGER",
}


class SqliteDialect(DdlDialect):
    name = "sqlite"
    BEGIN = "BEGIN TRANSACTION;"
    supports_inline_primary_key = True
    QUOTED_DEFAULT_TYPES = frozenset({"text", "varchar", "char", "date", "datetime", "timestamp", "time", "enum"})

    def type_mapping(self, db_type, length=None, precision=None, scale=None) -> str:
        t = db_type.upper()
        if t == "DECIMAL":
            if precision and scale:
                return f"DECIMAL({precision},{scale})"
            return f"DECIMAL({precision})" if precision else "NUMERIC"
        return AFFINITY.get(t, t)

    def create_index_statement(self, table_name, index: Index, columns=None) -> str:
        # Names starting with "sqlite_" are reserved, e.g. sqlite_autoindex_users_1
        # backing a UNIQUE column constraint.
        if index.name.lower().startswith("sqlite_") and index.index_type != "primary":
            cols = list(columns or [index.column_name])
            prefix = "uq" if index.is_unique else "idx"
            index = index.model_copy(update={"name": f"{prefix}_{table_name}_{'_'.join(cols)}"})
        return super().create_index_statement(table_name, index, columns)

    def create_foreign_key_statement(self, table_name, foreign_key: ForeignKey, column_pairs=None) -> str:
        """
        SQLite cannot add a constraint to an existing table, so the intended
        foreign key is emitted as a comment instead of an ALTER TABLE.
        """
        local, remote = self._fk_columns(foreign_key, column_pairs)
        return (
            f"-- Foreign key constraint for {self.quote_identifier(table_name)}({local}) -> "
            f"{self.quote_identifier(foreign_key.ref_container)}({remote}) "
            f"ON UPDATE {foreign_key.on_update} ON DELETE {foreign_key.on_delete}"
        )
