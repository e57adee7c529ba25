"""
Database connector: SQLAlchemy engine factory and backend selection.
Supports MySQL/MariaDB, PostgreSQL and SQLite. Picks the schema reader and DDL
dialect that match a connection's driver.
"""
import logging
from enum import Enum
from typing import Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import OperationalError

from dbschema.core.dialects import DdlDialect, MySqlDialect, PostgresDialect, SqliteDialect
from dbschema.core.exceptions import UnsupportedDriverError
from dbschema.core.readers import MySqlReader, PostgresReader, SchemaReader, SqliteReader
from dbschema.models.connection import ConnectionRequest

logger = logging.getLogger(__name__)


class Backend(str, Enum):
    MYSQL = "mysql"
    POSTGRES = "postgresql"
    SQLITE = "sqlite"


DRIVER_ALIASES = {
    "mysql": Backend.MYSQL,
    "mariadb": Backend.MYSQL,
    "postgresql": Backend.POSTGRES,
    "postgres": Backend.POSTGRES,
    "pgsql": Backend.POSTGRES,
    "sqlite": Backend.SQLITE,
}

_READERS = {
    Backend.MYSQL: MySqlReader,
    Backend.POSTGRES: PostgresReader,
    Backend.SQLITE: SqliteReader,
}

_DIALECTS = {
    Backend.MYSQL: MySqlDialect,
    Backend.POSTGRES: PostgresDialect,
    Backend.SQLITE: SqliteDialect,
}


def resolve_backend(driver: Union[str, Backend]) -> Backend:
    """Map a driver identifier (case-insensitive) onto a supported backend."""
    if isinstance(driver, Backend):
        return driver
    backend = DRIVER_ALIASES.get(str(driver).strip().lower())
    if backend is None:
        raise UnsupportedDriverError(str(driver), sorted(DRIVER_ALIASES))
    return backend


def get_reader(connection: Connection) -> SchemaReader:
    """
    Build the schema reader for an open connection.
    The caller owns the returned reader and should reuse it for its session.
    """
    backend = resolve_backend(connection.dialect.name)
    logger.debug("Using %s reader for driver %s", backend.value, connection.dialect.name)
    return _READERS[backend](connection)


def get_dialect(driver: Union[str, Backend]) -> DdlDialect:
    return _DIALECTS[resolve_backend(driver)]()


def create_engine_from_request(req: ConnectionRequest):
    """Build and test a SQLAlchemy engine from a ConnectionRequest."""
    url = req.get_sqlalchemy_url()
    engine = create_engine(url, pool_pre_ping=True)
    # Validate the connection immediately
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        engine.dispose()
        raise ValueError(f"Could not connect to database: {e}") from e
    return engine
