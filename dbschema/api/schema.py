"""POST /api/schema/... — read canonical table metadata from a live connection."""
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from dbschema.core.db_connector import create_engine_from_request, get_reader
from dbschema.core.exceptions import UnsupportedDriverError
from dbschema.core.readers.base import select_fields
from dbschema.models.connection import ConnectionRequest
from dbschema.models.schema import Column, ForeignKey, Index, Table

router = APIRouter()
logger = logging.getLogger(__name__)


class TableDetail(BaseModel):
    table: str
    columns: list[Column]
    indexes: Optional[list[Index]] = None
    foreign_keys: Optional[list[ForeignKey]] = None


def open_engine(req: ConnectionRequest):
    try:
        return create_engine_from_request(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/schema/tables", response_model=list[Table])
def list_tables(req: ConnectionRequest):
    engine = open_engine(req)
    try:
        with engine.connect() as conn:
            tables = get_reader(conn).tables()
    except UnsupportedDriverError as e:
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        engine.dispose()
    logger.info("Listed %d tables", len(tables or []))
    return tables or []


@router.post("/schema/tables/{table_name}", response_model=TableDetail)
def describe_table(
    table_name: str,
    req: ConnectionRequest,
    fields: Optional[list[str]] = Query(None, description="Only these columns, in this order"),
):
    engine = open_engine(req)
    try:
        with engine.connect() as conn:
            reader = get_reader(conn)
            columns = reader.columns(table_name)
            if not columns:
                raise HTTPException(404, detail=f"Table '{table_name}' not found.")
            detail = TableDetail(
                table=table_name,
                columns=select_fields(columns, fields),
                indexes=reader.indexes(table_name),
                foreign_keys=reader.foreign_keys(table_name),
            )
    except UnsupportedDriverError as e:
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        engine.dispose()
    return detail
