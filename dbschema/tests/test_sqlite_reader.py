import pytest

from dbschema.core.readers.sqlite import SqliteReader, parse_declared_type
from dbschema.models.schema import FixedPoint, Sized, Unsized


@pytest.fixture
def reader(sqlite_conn):
    return SqliteReader(sqlite_conn)


@pytest.mark.parametrize("declared, expected", [
    ("VARCHAR(50)", ("varchar", 50, None, None)),
    ("DECIMAL(10,2)", ("decimal", None, 10, 2)),
    ("numeric(5)", ("numeric", None, 5, 0)),
    ("INTEGER", ("integer", None, None, None)),
    ("", ("", None, None, None)),
])
def test_parse_declared_type(declared, expected):
    assert parse_declared_type(declared) == expected


def test_tables_skip_internal(reader):
    names = [t.name for t in reader.tables()]
    assert names == ["orders", "users"]
    assert all(t.type == "BASE TABLE" for t in reader.tables())


def test_columns(reader):
    cols = {c.name: c for c in reader.columns("users")}
    assert list(cols) == ["id", "name", "email", "age", "is_active", "balance", "created_at", "updated_at"]

    assert cols["id"].primary and cols["id"].auto_increment
    assert cols["id"].nullable is False
    assert cols["name"].nullable is False
    assert cols["age"].nullable is True
    assert cols["is_active"].default == "1"
    assert cols["balance"].type == "decimal"
    assert cols["balance"].size == FixedPoint(precision=10, scale=2)
    assert cols["created_at"].default == "CURRENT_TIMESTAMP"
    assert cols["updated_at"].size == Unsized()


def test_columns_varchar_length_and_quoted_default(reader):
    status = next(c for c in reader.columns("orders") if c.name == "status")
    assert status.type == "varchar"
    assert status.size == Sized(length=20)
    assert status.default == "'pending'"


def test_columns_field_selection(reader):
    cols = reader.columns("users", ["email", "id", "missing", "email"])
    assert [c.name for c in cols] == ["email", "id"]


def test_columns_unknown_table(reader):
    assert reader.columns("nope") == []


def test_indexes(reader):
    indexes = reader.indexes("orders")
    assert [i.name for i in indexes] == ["idx_orders_status", "idx_orders_user_id"]
    assert all(i.index_type == "index" and not i.is_unique for i in indexes)
    assert indexes[1].column_name == "user_id"
    assert indexes[1].sequence == 1


def test_unique_constraint_index(reader):
    (email_index,) = reader.indexes("users")
    assert email_index.column_name == "email"
    assert email_index.is_unique
    assert email_index.index_type == "unique"


def test_text_primary_key_index_is_primary(sqlite_conn):
    sqlite_conn.exec_driver_sql("CREATE TABLE tags (slug TEXT PRIMARY KEY, label TEXT)")
    (pk_index,) = SqliteReader(sqlite_conn).indexes("tags")
    assert pk_index.index_type == "primary"
    assert pk_index.column_name == "slug"


def test_no_indexes_is_none(reader, sqlite_conn):
    sqlite_conn.exec_driver_sql("CREATE TABLE plain (a INTEGER)")
    assert reader.indexes("plain") is None
    assert reader.foreign_keys("plain") is None


def test_foreign_keys(reader):
    (fk,) = reader.foreign_keys("orders")
    assert fk.container == "orders"
    assert fk.constraint_name == "fk_orders_user_id_users"
    assert (fk.constraint_column, fk.ref_container, fk.ref_column) == ("user_id", "users", "id")
    assert (fk.on_update, fk.on_delete) == ("CASCADE", "CASCADE")
    assert fk.sequence == 1


def test_foreign_key_without_column_list_targets_primary_key(reader, sqlite_conn):
    sqlite_conn.exec_driver_sql("CREATE TABLE notes (id INTEGER PRIMARY KEY, user_id INTEGER REFERENCES users)")
    (fk,) = reader.foreign_keys("notes")
    assert fk.ref_column == "id"
    assert fk.on_delete == "NO ACTION"


def test_field_type(reader):
    assert reader.field_type("VARCHAR(255)") == "string"
    assert reader.field_type("integer") == "int"
    assert reader.field_type("datetime") == "datetime"
    assert reader.field_type("geography") is None
