"""POST /api/export/ddl — generate a dependency-ordered DDL script."""
import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from dbschema.api.schema import open_engine
from dbschema.core.db_connector import get_dialect, get_reader
from dbschema.core.ddl_exporter import DdlExporter
from dbschema.core.exceptions import CircularDependencyError, UnsupportedDriverError
from dbschema.models.connection import DdlExportRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/export/ddl", response_class=PlainTextResponse)
def export_ddl(req: DdlExportRequest):
    engine = open_engine(req.connection)
    try:
        with engine.connect() as conn:
            reader = get_reader(conn)
            dialect = get_dialect(req.target_dialect or conn.dialect.name)
            tables = req.tables
            if tables is None:
                tables = [t.name for t in reader.tables() or []]
            script = DdlExporter(reader, dialect).generate(tables)
    except UnsupportedDriverError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CircularDependencyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    finally:
        engine.dispose()

    logger.info("Generated %s DDL for %d tables", dialect.name, len(tables))
    return PlainTextResponse(content=script, media_type="text/plain")
