"""HOA Scout HTTP API.

`create_app` wires routers, CORS and error handling; the lifespan owns the
analysis worker, the search client and the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hoa_scout import __version__
from hoa_scout.infrastructure.persistence.sqlalchemy.init_db import create_tables
from hoa_scout.presentation.api.dependencies import (
    get_analysis_worker,
    get_engine,
    get_search_provider,
)
from hoa_scout.presentation.api.exception_handlers import setup_exception_handlers
from hoa_scout.presentation.api.routers import (
    cities_router,
    hoa_router,
    reports_router,
)
from hoa_scout.presentation.api.schemas import HealthResponse
from hoa_scout_config.settings import Settings, get_settings

_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Send log records to stdout once per process.

    `LOG_LEVEL` applies to the `hoa_scout` loggers; HTTP and database client
    libraries stay at WARNING.
    """
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("hoa_scout").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__

OPENAPI_TAGS = [
    {
        "name": "Cities",
        "description": "Distinct cities with HOA profiles, cached for one hour.",
    },
    {
        "name": "HOA",
        "description": """Search, browse, analysis and enrichment of HOA profiles.

**Analysis:** `POST /{id}/analyze` queues a background job; poll
`/{id}/status` until `isComplete` is true.

**Enrichment:** `POST /{id}/enrich` looks the HOA up on the web.
Results younger than 30 days are reused unless `force=true`.
""",
    },
    {
        "name": "Reports",
        "description": "Per-HOA report documents.",
    },
    {"name": "Health", "description": "Liveness check."},
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Create tables and run the analysis worker while the app serves."""
    logger.info("HOA Scout API %s starting", API_VERSION)
    engine = get_engine()
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Database is unreachable, aborting startup")
        raise SystemExit(1) from None

    worker = get_analysis_worker()
    worker.start()
    yield

    logger.info("HOA Scout API shutting down")
    await worker.stop()
    await get_search_provider().close()
    await engine.dispose()
    logger.info("Analysis worker stopped, connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    settings
        Settings to use instead of `get_settings()`; tests pass their own.
    """
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Search homeowners associations, read their reports and enrich "
            "them with data found on the web."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(cities_router, prefix="/api", tags=["Cities"])
    app.include_router(hoa_router, prefix="/api/hoa", tags=["HOA"])
    app.include_router(reports_router, prefix="/reports", tags=["Reports"])

    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", version=API_VERSION)

    return app


app = create_app()
