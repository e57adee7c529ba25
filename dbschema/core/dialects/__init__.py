from dbschema.core.dialects.base import DdlDialect  # noqa: F401
from dbschema.core.dialects.mysql import MySqlDialect  # noqa: F401
from dbschema.core.dialects.postgres import PostgresDialect  # noqa: F401
from dbschema.core.dialects.sqlite import SqliteDialect  # noqa: F401
