import logging
import sqlite3

import pytest

from dbschema.core.ddl_exporter import RULE, DdlExporter
from dbschema.core.dialects import MySqlDialect, PostgresDialect, SqliteDialect
from dbschema.core.exceptions import CircularDependencyError
from dbschema.core.readers.base import SchemaReader
from dbschema.core.readers.sqlite import SqliteReader
from dbschema.models.schema import Column, ForeignKey, Index


class StubReader(SchemaReader):
    """Serves canned metadata keyed by table name."""

    def __init__(self, columns=None, indexes=None, foreign_keys=None):
        super().__init__(connection=None)
        self._columns = columns or {}
        self._indexes = indexes or {}
        self._foreign_keys = foreign_keys or {}

    def tables(self):
        return None

    def columns(self, table, fields=None):
        return self._columns.get(table, [])

    def indexes(self, table):
        return self._indexes.get(table)

    def foreign_keys(self, table):
        return self._foreign_keys.get(table)


def id_column():
    return Column(name="id", type="integer", primary=True, auto_increment=True)


def fk(table, column, ref, name=None, sequence=1, ref_column="id"):
    return ForeignKey(
        container=table, constraint_name=name or f"fk_{table}_{ref}", constraint_column=column,
        ref_container=ref, ref_column=ref_column, sequence=sequence,
    )


@pytest.fixture
def sqlite_script(sqlite_conn):
    return DdlExporter(SqliteReader(sqlite_conn), SqliteDialect()).generate(["orders", "users"])


def test_header(sqlite_script):
    lines = sqlite_script.splitlines()
    assert lines[0] == RULE
    assert lines[1] == "-- SQL DDL Export"
    assert lines[2].startswith("-- Generated: ")
    assert lines[3] == "-- Dialect: sqlite"
    assert lines[4] == "-- Tables: 2 (orders, users)"
    assert lines[5] == RULE
    assert lines[7] == "BEGIN TRANSACTION;"
    assert lines[-1] == "COMMIT;"


def test_sections_in_order(sqlite_script):
    markers = ["-- Drop existing tables", "-- Create tables", "-- Create indexes", "-- Add foreign key constraints"]
    positions = [sqlite_script.index(m) for m in markers]
    assert positions == sorted(positions)


def test_dependency_order(sqlite_script):
    assert sqlite_script.index('DROP TABLE IF EXISTS "orders";') < sqlite_script.index('DROP TABLE IF EXISTS "users";')
    assert sqlite_script.index('CREATE TABLE "users"') < sqlite_script.index('CREATE TABLE "orders"')


def test_sqlite_script_content(sqlite_script):
    assert '  "id" INTEGER PRIMARY KEY AUTOINCREMENT,' in sqlite_script
    assert '  "status" TEXT DEFAULT \'pending\',' in sqlite_script
    assert 'CREATE UNIQUE INDEX "uq_users_email" ON "users" ("email");' in sqlite_script
    assert 'CREATE INDEX "idx_orders_user_id" ON "orders" ("user_id");' in sqlite_script
    assert (
        '-- Foreign key constraint for "orders"("user_id") -> "users"("id") ON UPDATE CASCADE ON DELETE CASCADE'
        in sqlite_script
    )


def test_sqlite_script_executes(sqlite_script):
    conn = sqlite3.connect(":memory:")
    try:
        conn.executescript(sqlite_script)
        names = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type IN ('table', 'index')")}
    finally:
        conn.close()
    assert {"users", "orders", "uq_users_email", "idx_orders_user_id", "idx_orders_status"} <= names


def test_cross_dialect_export(sqlite_conn):
    reader = SqliteReader(sqlite_conn)

    mysql = DdlExporter(reader, MySqlDialect(table_options="ENGINE=InnoDB")).generate(["users", "orders"])
    assert "START TRANSACTION;" in mysql
    assert "  `id` INT NOT NULL AUTO_INCREMENT," in mysql
    assert ") ENGINE=InnoDB;" in mysql
    assert (
        "ALTER TABLE `orders` ADD CONSTRAINT `fk_orders_user_id_users` FOREIGN KEY (`user_id`) "
        "REFERENCES `users` (`id`) ON UPDATE CASCADE ON DELETE CASCADE;"
    ) in mysql

    pg = DdlExporter(reader, PostgresDialect()).generate(["users", "orders"])
    assert 'DROP TABLE IF EXISTS "orders" CASCADE;' in pg
    assert '  "id" SERIAL NOT NULL,' in pg
    assert '  "balance" DECIMAL(10,2) DEFAULT 0.00,' in pg


def test_composite_index_and_foreign_key_are_merged():
    reader = StubReader(
        columns={
            "parents": [
                Column(name="a", type="integer", primary=True),
                Column(name="b", type="integer", primary=True),
            ],
            "children": [id_column(), Column(name="pa", type="integer"), Column(name="pb", type="integer")],
        },
        indexes={
            "children": [
                Index(name="idx_pair", column_name="pb", sequence=2),
                Index(name="idx_pair", column_name="pa", sequence=1),
            ],
        },
        foreign_keys={
            "children": [
                fk("children", "pb", "parents", "fk_pair", sequence=2, ref_column="b"),
                fk("children", "pa", "parents", "fk_pair", sequence=1, ref_column="a"),
            ],
        },
    )
    script = DdlExporter(reader, PostgresDialect()).generate(["children", "parents"])
    assert script.count("CREATE INDEX") == 1
    assert 'CREATE INDEX "idx_pair" ON "children" ("pa", "pb");' in script
    assert script.count("ADD CONSTRAINT") == 1
    assert 'FOREIGN KEY ("pa", "pb") REFERENCES "parents" ("a", "b")' in script
    assert '  PRIMARY KEY ("a", "b")' in script
    assert script.index('CREATE TABLE "parents"') < script.index('CREATE TABLE "children"')


def test_primary_index_not_emitted():
    reader = StubReader(
        columns={"users": [id_column()]},
        indexes={"users": [Index(name="PRIMARY", column_name="id", is_unique=True, index_type="primary")]},
    )
    script = DdlExporter(reader, MySqlDialect()).generate(["users"])
    assert "CREATE UNIQUE INDEX" not in script
    assert "CREATE INDEX" not in script


def test_cycle_raises():
    reader = StubReader(
        columns={"a": [id_column()], "b": [id_column()]},
        foreign_keys={"a": [fk("a", "b_id", "b")], "b": [fk("b", "a_id", "a")]},
    )
    with pytest.raises(CircularDependencyError) as exc:
        DdlExporter(reader, SqliteDialect()).generate(["a", "b"])
    assert exc.value.tables == ["a", "b"]


def test_missing_table_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="dbschema.core.ddl_exporter"):
        script = DdlExporter(StubReader(), SqliteDialect()).generate(["ghost"])
    assert "ghost has no columns" in caplog.text
    assert 'CREATE TABLE "ghost"' in script


def test_empty_table_list():
    script = DdlExporter(StubReader(), SqliteDialect()).generate([])
    assert "-- Tables: 0 ()" in script
    assert script.endswith("-- Add foreign key constraints\nCOMMIT;")
