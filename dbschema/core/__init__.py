from dbschema.core.db_connector import Backend, create_engine_from_request, get_dialect, get_reader, resolve_backend  # noqa: F401
from dbschema.core.ddl_exporter import DdlExporter  # noqa: F401
from dbschema.core.dependency_resolver import DependencyResolver  # noqa: F401
from dbschema.core.exceptions import CircularDependencyError, DbSchemaError, UnsupportedDriverError  # noqa: F401
