"""
dbschema — schema introspection and portable DDL export.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dbschema import __version__
from dbschema.api import export, health, schema
from dbschema.config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("dbschema")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("dbschema starting up…")
    yield
    logger.info("dbschema shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="dbschema — Schema Introspection & DDL Export",
    description="Reads table metadata from MySQL, PostgreSQL and SQLite and generates portable DDL scripts.",
    version=__version__,
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router, prefix="/api")
app.include_router(schema.router, prefix="/api")
app.include_router(export.router, prefix="/api")
