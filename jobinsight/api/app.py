"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobinsight.api.middleware.error_handler import ErrorHandlerMiddleware
from jobinsight.api.middleware.logging import LoggingMiddleware
from jobinsight.api.routes import analytics, customers, health, jobs
from jobinsight.background.scheduler import PrecomputationScheduler, build_triggers
from jobinsight.background.tasks.precompute_metrics import run_precomputation
from jobinsight.config.database import close_database_connections
from jobinsight.config.logging import configure_logging, get_logger
from jobinsight.config.settings import settings

logger = get_logger(__name__)


def create_scheduler() -> PrecomputationScheduler:
    return PrecomputationScheduler(
        triggers=build_triggers(settings),
        run=run_precomputation,
        tz=settings.reporting_tz,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the embedded scheduler and release connections on shutdown."""
    logger.info("Application startup", environment=settings.ENVIRONMENT)

    scheduler = None
    if settings.ENABLE_PRECOMPUTATION and settings.SCHEDULER_BACKEND == "embedded":
        scheduler = create_scheduler()
        await scheduler.start()
    app.state.scheduler = scheduler

    try:
        yield
    finally:
        logger.info("Application shutdown")
        if scheduler is not None:
            await scheduler.stop()
        await close_database_connections()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Job analytics for field-service operations dashboards",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.scheduler = None

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    ErrorHandlerMiddleware(app)
    LoggingMiddleware(app)

    # Add routes
    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(jobs.router, prefix=settings.API_PREFIX)
    app.include_router(analytics.router, prefix=settings.API_PREFIX)
    app.include_router(customers.router, prefix=settings.API_PREFIX)

    return app
