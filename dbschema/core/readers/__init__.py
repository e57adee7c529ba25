from dbschema.core.readers.base import SchemaReader  # noqa: F401
from dbschema.core.readers.mysql import MySqlReader  # noqa: F401
from dbschema.core.readers.postgres import PostgresReader  # noqa: F401
from dbschema.core.readers.sqlite import SqliteReader  # noqa: F401
