"""Error kinds raised by the schema readers and the DDL export pipeline."""


class DbSchemaError(Exception):
    """Base class for every error raised by dbschema."""


class UnsupportedDriverError(DbSchemaError):
    def __init__(self, driver: str, supported: list[str]):
        self.driver = driver
        self.supported = supported
        super().__init__(
            f"Unsupported database driver: {driver}. Supported: {', '.join(supported)}"
        )


class CircularDependencyError(DbSchemaError):
    """Foreign keys among the requested tables form a cycle."""

    def __init__(self, tables: list[str]):
        self.tables = tables
        super().__init__(f"Circular dependency detected in tables: {', '.join(tables)}")
