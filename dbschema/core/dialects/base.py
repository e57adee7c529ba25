"""
DDL dialect base: statement synthesis shared by every target backend.

Subclasses supply the type mapping plus a handful of class-level literals
(identifier quote, transaction keywords, drop suffix). Identifier quoting and
literal escaping live here and nowhere else, so every statement a dialect
emits goes through quote_identifier() / quote_literal().
"""
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from dbschema.models.schema import Column, ForeignKey, Index

_FUNCTION_CALL = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*\(.*\)$", re.DOTALL)
_KEYWORD_DEFAULTS = {
    "NULL", "TRUE", "FALSE",
    "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "LOCALTIME", "LOCALTIMESTAMP",
}


def is_function_call(value: str) -> bool:
    return bool(_FUNCTION_CALL.match(value.strip()))


class DdlDialect(ABC):
    name: str = ""
    IDENTIFIER_QUOTE = '"'
    BEGIN = "BEGIN;"
    COMMIT = "COMMIT;"
    DROP_SUFFIX = ""
    AUTO_INCREMENT_KEYWORD: Optional[str] = None
    #: column types whose literal defaults must be quoted
    QUOTED_DEFAULT_TYPES: frozenset = frozenset()
    #: True when a single-column key is declared inline as `col TYPE PRIMARY KEY`
    supports_inline_primary_key = False

    # ── Quoting ───────────────────────────────────────────────────────────────

    def quote_identifier(self, name: str) -> str:
        q = self.IDENTIFIER_QUOTE
        return f"{q}{name.replace(q, q + q)}{q}"

    def quote_literal(self, value: str) -> str:
        return "'" + value.replace("'", "''") + "'"

    def render_default(self, column: Column) -> str:
        default = column.default.strip()
        # Already a literal (e.g. 'pending'::character varying) or an expression.
        if default.startswith("'") or default.upper() in _KEYWORD_DEFAULTS or is_function_call(default):
            return default
        if column.type.lower() in self.QUOTED_DEFAULT_TYPES:
            return self.quote_literal(default)
        return default

    # ── Types ─────────────────────────────────────────────────────────────────

    @abstractmethod
    def type_mapping(
        self,
        db_type: str,
        length: Optional[int] = None,
        precision: Optional[int] = None,
        scale: Optional[int] = None,
    ) -> str:
        """Map a canonical type to this dialect's type; unknown types are returned uppercased."""

    def column_type(self, column: Column) -> str:
        if column.type == "enum" and column.enum_values:
            return self.enum_column_type(column)
        return self.type_mapping(column.type, column.length, column.precision, column.scale)

    def enum_column_type(self, column: Column) -> str:
        values = ", ".join(self.quote_literal(v) for v in column.enum_values)
        return f"TEXT CHECK ({self.quote_identifier(column.name)} IN ({values}))"

    # ── Statements ────────────────────────────────────────────────────────────

    def column_definition(self, column: Column, primary_keys: Sequence[str]) -> str:
        parts = [self.quote_identifier(column.name), self.column_type(column)]
        inline_pk = self.supports_inline_primary_key and list(primary_keys) == [column.name]
        if inline_pk:
            parts.append("PRIMARY KEY AUTOINCREMENT" if column.auto_increment else "PRIMARY KEY")
        if not column.nullable and not inline_pk:
            parts.append("NOT NULL")
        if column.auto_increment and self.AUTO_INCREMENT_KEYWORD:
            parts.append(self.AUTO_INCREMENT_KEYWORD)
        if column.default is not None and not column.auto_increment:
            parts.append("DEFAULT " + self.render_default(column))
        return "  " + " ".join(parts)

    def table_options(self) -> str:
        return ""

    def create_table_statement(self, table_name: str, columns: Sequence[Column], primary_keys: Sequence[str]) -> str:
        definitions = [self.column_definition(c, primary_keys) for c in columns]
        if len(primary_keys) > 1 or (primary_keys and not self.supports_inline_primary_key):
            pk_cols = ", ".join(self.quote_identifier(c) for c in primary_keys)
            definitions.append(f"  PRIMARY KEY ({pk_cols})")
        options = self.table_options()
        return (
            f"CREATE TABLE {self.quote_identifier(table_name)} (\n"
            + ",\n".join(definitions)
            + "\n)"
            + (f" {options}" if options else "")
            + ";"
        )

    def create_index_statement(self, table_name: str, index: Index, columns: Optional[Sequence[str]] = None) -> str:
        """
        Render one index. `columns` carries every column of a multi-column index in
        sequence order; without it only the row's own column is used.
        Returns "" for the primary key index, which CREATE TABLE already covers.
        """
        if index.name == "PRIMARY" or index.index_type == "primary":
            return ""
        cols = ", ".join(self.quote_identifier(c) for c in (columns or [index.column_name]))
        unique = "UNIQUE " if index.is_unique else ""
        return (
            f"CREATE {unique}INDEX {self.quote_identifier(index.name)} "
            f"ON {self.quote_identifier(table_name)} ({cols});"
        )

    def _fk_columns(self, fk: ForeignKey, column_pairs: Optional[Sequence[tuple[str, str]]]) -> tuple[str, str]:
        pairs = column_pairs or [(fk.constraint_column, fk.ref_column)]
        local = ", ".join(self.quote_identifier(a) for a, _ in pairs)
        remote = ", ".join(self.quote_identifier(b) for _, b in pairs)
        return local, remote

    def create_foreign_key_statement(
        self,
        table_name: str,
        foreign_key: ForeignKey,
        column_pairs: Optional[Sequence[tuple[str, str]]] = None,
    ) -> str:
        """ALTER TABLE ... ADD CONSTRAINT; `column_pairs` covers composite keys."""
        local, remote = self._fk_columns(foreign_key, column_pairs)
        return (
            f"ALTER TABLE {self.quote_identifier(table_name)} "
            f"ADD CONSTRAINT {self.quote_identifier(foreign_key.constraint_name)} "
            f"FOREIGN KEY ({local}) REFERENCES {self.quote_identifier(foreign_key.ref_container)} ({remote}) "
            f"ON UPDATE {foreign_key.on_update} ON DELETE {foreign_key.on_delete};"
        )

    def drop_table_statement(self, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {self.quote_identifier(table_name)}{self.DROP_SUFFIX};"

    def begin_transaction(self) -> str:
        return self.BEGIN

    def commit_transaction(self) -> str:
        return self.COMMIT
