"""FastAPI application entrypoint: lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agro.config import get_settings
from agro.database import async_session_factory, engine
from agro.logging import configure_structured_logging
from agro.migrations import MigrationRunner
from agro.routes import cities, dashboard, farms, producers
from agro.seeds import seed_database

logger = structlog.get_logger("agro")

SERVICE_NAME = "agro-admin"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Apply pending schema migrations (when ``RUN_DB_MIGRATIONS``)
      3. Seed the reference dataset (when ``SEED_DATABASE``)

    Any migration or seeding failure aborts startup.

    Shutdown:
      1. Dispose SQLAlchemy engine
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "agro_admin_starting",
        log_level=settings.log_level,
        run_db_migrations=settings.run_db_migrations,
        seed_database=settings.seed_database,
        seed_scale=settings.seed_scale.value,
    )

    try:
        if settings.run_db_migrations:
            app.state.applied_migrations = await MigrationRunner(engine).apply()
        else:
            app.state.applied_migrations = []
        app.state.seed_report = await seed_database(settings, async_session_factory)
    except Exception as exc:
        logger.exception("startup_failure", error=str(exc))
        raise

    yield

    logger.info("agro_admin_shutting_down")
    await engine.dispose()


app = FastAPI(
    title="Agro Admin API",
    description=(
        "Administration API for rural producers, their farms, harvests and "
        "crops, backed by a migrated and seeded SQLite store."
    ),
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check: verifies the API process is alive."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(producers.router, prefix="/api/v1")
app.include_router(farms.router, prefix="/api/v1")
app.include_router(cities.router, prefix="/api/v1")
app.include_router(dashboard.router, prefix="/api/v1")
