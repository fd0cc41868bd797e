"""FastAPI application wiring for the exercise tracker."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from psycopg_pool import ConnectionPool

from .api.routes import router as api_router
from .config import get_settings
from .domain.service import ActivityLogger, IdentityService, LogQueryEngine
from .logging_config import setup_logging
from .repository import TrackerRepository

settings = get_settings()
logger = logging.getLogger(__name__)


def install_services(app: FastAPI, repository: TrackerRepository) -> None:
    """Attach the tracker services built on ``repository`` to the app state."""
    identity = IdentityService(repository)
    app.state.identity_service = identity
    app.state.activity_logger = ActivityLogger(repository, identity)
    app.state.log_query_engine = LogQueryEngine(repository, identity)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Postgres pool and build the services for the app lifecycle."""
    setup_logging(settings.log_level)
    pool = ConnectionPool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )
    pool.open()
    app.state.pool = pool
    repository = TrackerRepository(pool)
    repository.ensure_schema()
    install_services(app, repository)
    logger.info("%s %s ready", settings.app_name, settings.version)
    try:
        yield
    finally:
        pool.close()


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz", tags=["health"])
def healthz() -> dict[str, str]:
    """Return a minimal readiness indicator used by orchestration systems."""
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(api_router)


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.http_host, port=settings.http_port)
