"""
Schema reader base: shared plumbing for the per-backend catalog readers.

A reader wraps an already-open SQLAlchemy connection and turns the backend's
introspection results into canonical Table / Column / Index / ForeignKey
records. Readers only ever issue SELECTs; they never open, configure or close
the connection they were given.

Return conventions:
    tables(), indexes(), foreign_keys()  -> None when there is nothing to report
    columns()                            -> [] for an unknown table
"""
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection

from dbschema.models.schema import Column, ForeignKey, Index, Table

logger = logging.getLogger(__name__)

_SIZE_SUFFIX = re.compile(r"\([^)]*\)")


def to_bool(value: Any) -> bool:
    """Coerce the backend's truthy encoding (1/0, '1'/'0', native bool) to bool."""
    if isinstance(value, bool):
        return value
    return value in (1, "1")


def to_int_or_none(value: Any) -> Optional[int]:
    """
    Coerce a catalog number to int.

    The string '0' is treated like NULL / empty; a native integer 0 is kept.
    Downstream consumers rely on this, so it is preserved as-is.
    """
    if value is None or value == "" or value == "0":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def select_fields(columns: list[Column], fields: Optional[Sequence[str]]) -> list[Column]:
    """Keep only the requested columns, in the caller's order; unknown names are dropped."""
    if fields is None:
        return columns
    by_name = {c.name: c for c in columns}
    return [by_name[f] for f in dict.fromkeys(fields) if f in by_name]


class SchemaReader(ABC):
    """Read-only metadata reader over one backend's catalog."""

    #: raw type name (lowercase, size suffix stripped) -> generic semantic kind
    FIELD_TYPES: dict[str, str] = {}

    def __init__(self, connection: Connection):
        self.connection = connection

    @abstractmethod
    def tables(self) -> Optional[list[Table]]:
        ...

    @abstractmethod
    def columns(self, table: str, fields: Optional[Sequence[str]] = None) -> list[Column]:
        ...

    @abstractmethod
    def indexes(self, table: str) -> Optional[list[Index]]:
        ...

    @abstractmethod
    def foreign_keys(self, table: str) -> Optional[list[ForeignKey]]:
        ...

    def field_type(self, raw_type: str) -> Optional[str]:
        """Map a raw type name such as 'varchar(255)' to int/float/bool/string/date/time/datetime/array."""
        clean = _SIZE_SUFFIX.sub("", raw_type.strip().lower())
        clean = " ".join(clean.split())
        return self.FIELD_TYPES.get(clean)

    def _fetch(self, sql: str, **params: Any) -> list[dict]:
        result = self.connection.execute(text(sql), params)
        rows = [dict(row) for row in result.mappings()]
        logger.debug("%s fetched %d catalog rows", type(self).__name__, len(rows))
        return rows
