import os
import sqlite3
import tempfile
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from dbschema.main import app

SQLITE_SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT UNIQUE NOT NULL,
        age INTEGER,
        is_active INTEGER DEFAULT 1,
        balance DECIMAL(10,2) DEFAULT 0.00,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        updated_at TEXT
    )""",
    """
    CREATE TABLE orders (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        order_number VARCHAR(50) NOT NULL,
        total REAL NOT NULL,
        status VARCHAR(20) DEFAULT 'pending',
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE ON UPDATE CASCADE
    )""",
    "CREATE INDEX idx_orders_user_id ON orders(user_id)",
    "CREATE INDEX idx_orders_status ON orders(status)",
]


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        for stmt in SQLITE_SCHEMA:
            cur.execute(stmt)
        cur.execute("INSERT INTO users (name, email) VALUES ('Test User', 'test@example.com');")
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)


@pytest.fixture
def sqlite_conn(temp_sqlite_db):
    engine = create_engine(f"sqlite:///{temp_sqlite_db}")
    with engine.connect() as conn:
        yield conn
    engine.dispose()


# ── Driver-less connection for MySQL / PostgreSQL readers ─────────────────────

class FakeResult:
    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return list(self._rows)


class FakeConnection:
    """Answers each query with the rows registered for the first matching SQL fragment."""

    def __init__(self, responses, dialect_name="mysql"):
        self.responses = responses
        self.dialect = SimpleNamespace(name=dialect_name)
        self.calls = []

    def execute(self, clause, params=None):
        sql = str(clause)
        self.calls.append((sql, params or {}))
        for fragment, rows in self.responses:
            if fragment in sql:
                return FakeResult(rows(params or {}) if callable(rows) else rows)
        return FakeResult([])


@pytest.fixture
def fake_connection():
    return FakeConnection
