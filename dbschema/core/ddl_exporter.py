"""
DDL exporter: builds a complete, dependency-ordered creation script.

Per table: columns, indexes and foreign keys are read through a SchemaReader,
the tables are ordered by DependencyResolver, and a DdlDialect renders each
statement. The script is returned as text; nothing is executed.
"""
import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Optional, Sequence

from dbschema.config import settings
from dbschema.core.dependency_resolver import DependencyResolver
from dbschema.core.dialects.base import DdlDialect
from dbschema.core.readers.base import SchemaReader
from dbschema.models.schema import ForeignKey, Index, TableMetadata

logger = logging.getLogger(__name__)

RULE = "-- " + "=" * 76


class DdlExporter:
    """Generates DROP / CREATE / INDEX / FOREIGN KEY scripts wrapped in a transaction."""

    def __init__(self, reader: SchemaReader, dialect: DdlDialect, resolver: Optional[DependencyResolver] = None):
        self.reader = reader
        self.dialect = dialect
        self.resolver = resolver or DependencyResolver()

    def generate(self, tables: Sequence[str]) -> str:
        tables = list(tables)
        output = [self._header(tables), self.dialect.begin_transaction(), ""]

        metadata = self._collect_metadata(tables)
        ordered = self.resolver.sort_by_dependency(
            {name: meta.foreign_keys for name, meta in metadata.items()}
        )
        logger.info("Exporting %d tables as %s DDL in order: %s", len(ordered), self.dialect.name, ", ".join(ordered))

        output.append("-- Drop existing tables")
        for table in reversed(ordered):
            output.append(self.dialect.drop_table_statement(table))
        output.append("")

        output.append("-- Create tables")
        for table in ordered:
            meta = metadata[table]
            output.append(self.dialect.create_table_statement(table, meta.columns, meta.primary_keys))
            output.append("")

        output.append("-- Create indexes")
        for table in ordered:
            statements = self._index_statements(table, metadata[table].indexes or [])
            if statements:
                output.append("\n".join(statements))
                output.append("")

        output.append("-- Add foreign key constraints")
        for table in ordered:
            statements = self._foreign_key_statements(table, metadata[table].foreign_keys or [])
            if statements:
                output.extend(statements)
                output.append("")

        output.append(self.dialect.commit_transaction())
        return "\n".join(output)

    def _header(self, tables: list[str]) -> str:
        timestamp = datetime.now(timezone.utc).strftime(settings.EXPORT_TIMESTAMP_FORMAT)
        return "\n".join([
            RULE,
            "-- SQL DDL Export",
            f"-- Generated: {timestamp}",
            f"-- Dialect: {self.dialect.name}",
            f"-- Tables: {len(tables)} ({', '.join(tables)})",
            RULE,
            "",
        ])

    def _collect_metadata(self, tables: list[str]) -> "OrderedDict[str, TableMetadata]":
        metadata: "OrderedDict[str, TableMetadata]" = OrderedDict()
        for table in tables:
            columns = self.reader.columns(table) or []
            if not columns:
                logger.warning("Table %s has no columns (missing from schema?)", table)
            metadata[table] = TableMetadata(
                columns=columns,
                indexes=self.reader.indexes(table),
                foreign_keys=self.reader.foreign_keys(table),
            )
        return metadata

    def _index_statements(self, table: str, indexes: list[Index]) -> list[str]:
        """One statement per index name; multi-column rows are merged in sequence order."""
        grouped: "OrderedDict[str, list[Index]]" = OrderedDict()
        for index in indexes:
            grouped.setdefault(index.name, []).append(index)

        statements = []
        for rows in grouped.values():
            rows = sorted(rows, key=lambda r: r.sequence)
            statement = self.dialect.create_index_statement(table, rows[0], [r.column_name for r in rows])
            if statement:
                statements.append(statement)
        return statements

    def _foreign_key_statements(self, table: str, foreign_keys: list[ForeignKey]) -> list[str]:
        """One statement per constraint; composite keys are merged in sequence order."""
        grouped: "OrderedDict[str, list[ForeignKey]]" = OrderedDict()
        for fk in foreign_keys:
            grouped.setdefault(fk.constraint_name, []).append(fk)

        statements = []
        for rows in grouped.values():
            rows = sorted(rows, key=lambda r: r.sequence)
            pairs = [(r.constraint_column, r.ref_column) for r in rows]
            statements.append(self.dialect.create_foreign_key_statement(table, rows[0], pairs))
        return statements
