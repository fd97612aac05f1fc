"""FastAPI application factory and lifecycle.

Startup verifies the database, optionally creates the schema and loads the
budget weight table; any of these failing aborts startup. The table is kept
on ``app.state.weight_table`` for the proportional flow. Shutdown closes the
database engine.

Middleware run in reverse order of registration, so the request context
(correlation ID) wraps request logging.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any, cast

from fastapi import Depends, FastAPI, Request
from loguru import logger

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routes import auth_router, budget_router, tax_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.exceptions import WeightSourceError
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.domain.weights import WeightTable
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_tables,
    get_engine,
)


def load_weight_table(settings: Settings) -> WeightTable:
    """Load the budget weight table configured in ``budget_config``.

    Raises:
        WeightSourceError: If the document is unreadable or malformed.
    """
    budget_file = settings.budget_config.budget_file
    try:
        return WeightTable.load(budget_file)
    except WeightSourceError as e:
        logger.critical(
            "Budget weight table could not be loaded: {}",
            e.message,
            source=str(budget_file),
            error_code=e.error_code,
        )
        raise


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.

    Raises:
        RuntimeError: If database connection fails during startup.
        WeightSourceError: If the budget weight table cannot be loaded.
    """
    settings: Settings = app_instance.state.settings

    is_healthy, error_msg = await check_database_connection()
    if is_healthy:
        logger.info("Database connection successful")
    else:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    if settings.database_config.create_tables:
        await create_tables()

    app_instance.state.weight_table = load_weight_table(settings)

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_database()
    logger.info("Application shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    application.state.settings = settings

    # Exception handlers before middleware
    register_exception_handlers(application)

    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(auth_router)
    application.include_router(budget_router)
    application.include_router(tax_router)

    @application.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning a welcome message."""
        return {"message": f"Welcome to {settings.app_name}!"}

    @application.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Report database connectivity and whether the weight table is loaded.

        A failing dependency marks the service ``degraded`` instead of
        failing the probe.
        """
        health_status: dict[str, object] = {"status": "healthy", "database": False}

        is_healthy, error_msg = await check_database_connection()
        health_status["database"] = is_healthy

        if is_healthy:
            pool = get_engine().pool
            logger.bind(
                metric_type="db.pool.health",
                checked_out=cast("Any", pool).checkedout(),
                size=cast("Any", pool).size(),
                overflow=cast("Any", pool).overflow(),
            ).info("Database pool health check")
        else:
            logger.warning("Database health check failed: {}", error_msg)
            health_status["status"] = "degraded"

        table: WeightTable | None = getattr(request.app.state, "weight_table", None)
        health_status["weight_table"] = {
            "loaded": table is not None,
            "categories": len(table) if table is not None else 0,
        }
        if table is None:
            health_status["status"] = "degraded"

        return health_status

    @application.get("/info")
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        """Get application name, version, environment and debug flag."""
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    instrument_app(application, settings)

    return application


app = create_app()
