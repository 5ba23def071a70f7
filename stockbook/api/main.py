"""
FastAPI application for Stockbook.

``create_app`` wires middleware, error handlers and the resource routers;
the lifespan migrates the database, refuses to serve a schema that
``check_schema`` reports as unusable, and owns the connection pool.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockbook import __version__
from stockbook.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockbook.api.middleware.error_handler import setup_exception_handlers
from stockbook.api.routes import (
    analytics_router,
    categories_router,
    customers_router,
    data_router,
    health_router,
    invoices_router,
    products_router,
)
from stockbook.config import configure_logging, get_logger, get_settings
from stockbook.core.exceptions import DatabaseError

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    products_router,
    categories_router,
    customers_router,
    invoices_router,
    analytics_router,
    data_router,
)


async def prepare_database() -> None:
    """Migrate, then verify the schema before any request is served."""
    from stockbook.infrastructure.storage.sqlite.migrations import (
        check_schema,
        run_migrations,
    )

    results = await run_migrations()
    report = await check_schema()
    if not report.ok:
        logger.error(
            "database_schema_unusable",
            pending=report.pending,
            missing_tables=report.missing_tables,
            integrity=report.integrity,
        )
        raise DatabaseError("startup", "schema is not at the latest migration")

    logger.info(
        "database_ready",
        version=report.current_version,
        migrations_applied=len(results),
        categories=report.category_count,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    from stockbook.infrastructure.storage.sqlite import close_pool, get_pool

    settings = get_settings()
    logger.info("application_starting", db_path=str(settings.storage.db_path))

    await prepare_database()
    await get_pool()
    logger.info("application_started")

    try:
        yield
    finally:
        await close_pool()
        logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Stockbook API",
        description="Inventory, invoicing and sales analytics for small shops",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    # Unprefixed liveness check for container health checks
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockbook.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    run()
