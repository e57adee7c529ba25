"""GET /api/health — liveness and supported backends."""
import logging
from fastapi import APIRouter

from dbschema.core.db_connector import Backend

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "backends": [b.value for b in Backend],
    }
