"""FastAPI application assembly.

``create_app`` wires configuration, logging, tracing, exception handlers,
the middleware stack and the routers into one application. Middleware
run in reverse order of registration, so the access policy is added first
(innermost) and CORS last (outermost), letting CORS answer preflight
requests before any route rule is consulted.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.api.middleware.access_policy import (
    AccessPolicyMiddleware,
    build_default_rules,
)
from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.middleware.security_headers import SecurityHeadersMiddleware
from src.api.routes import health
from src.api.routes.router import api_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.database import check_database_connection, close_database


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Verify the document store on startup and close the client on shutdown.

    Raises:
        RuntimeError: If the store cannot be reached during startup.
    """
    is_healthy, error_msg = await check_database_connection()
    if not is_healthy:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    logger.info("Database connection successful")
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
        settings: Optional settings instance. Defaults to ``get_settings()``.

    Returns:
        FastAPI: Configured application.
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

    register_exception_handlers(application)

    # Innermost first
    application.add_middleware(
        AccessPolicyMiddleware, rules=build_default_rules(settings)
    )
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        SecurityHeadersMiddleware,
        hsts_enabled=settings.environment == "production",
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_config.frontend_url],
        allow_credentials=settings.cors_config.allow_credentials,
        allow_methods=settings.cors_config.allowed_methods,
        allow_headers=["*"],
        max_age=settings.cors_config.max_age,
    )

    application.include_router(api_router, prefix=settings.api_prefix)
    application.include_router(health.router, tags=["health"])

    instrument_app(application, settings)

    return application


app = create_app()
