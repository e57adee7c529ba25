from dbschema.models.connection import ConnectionRequest, DdlExportRequest  # noqa: F401
from dbschema.models.schema import Table, Column, Index, ForeignKey  # noqa: F401
from dbschema.models.schema import Sized, FixedPoint, Unsized, TableMetadata, size_from_catalog  # noqa: F401
