"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, maps domain
exceptions to error responses and configures lifespan.

Dependencies: fastapi, nomnom.api, nomnom.observability, nomnom.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nomnom.api.routers import chat_router, health_router
from nomnom.application.service_context import ServiceContext
from nomnom.configs import get_settings
from nomnom.core.exceptions import (
    ConfigurationError,
    NomnomException,
    QueryValidationError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from nomnom.models.common import ErrorResponse
from nomnom.observability.log_utils import log_exception_with_context
from nomnom.observability.logger import configure_logging
from nomnom.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

# Most specific first; first isinstance match wins.
ERROR_STATUS: list[tuple[type[NomnomException], int, str]] = [
    (QueryValidationError, 422, "QUERY_VALIDATION_ERROR"),
    (UpstreamTimeoutError, 503, "UPSTREAM_TIMEOUT"),
    (UpstreamUnavailableError, 503, "UPSTREAM_UNAVAILABLE"),
    (ConfigurationError, 500, "CONFIGURATION_ERROR"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Loads settings, builds the shared service context and verifies the
    vector index. Any failure aborts startup.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        context = ServiceContext.from_settings(settings)
    except Exception as e:
        log_exception_with_context(logger, "Failed to initialize application resources", e)
        raise

    try:
        await context.verify(settings)
    except Exception as e:
        log_exception_with_context(logger, "Vector index verification failed", e)
        await context.aclose()
        raise

    app.state.service_context = context
    logger.info("Application startup complete: all resources initialized")

    yield

    # Shutdown
    await context.aclose()
    logger.info("Application shutdown")


def error_status(exc: NomnomException) -> tuple[int, str]:
    """Map a domain exception to its HTTP status and error code."""
    for exc_type, status_code, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, code
    return 500, "INTERNAL_ERROR"


async def nomnom_exception_handler(request: Request, exc: NomnomException) -> JSONResponse:
    """Return a JSON ErrorResponse for failures raised before streaming began."""
    status_code, code = error_status(exc)
    level = logging.WARNING if status_code < 500 or isinstance(exc, UpstreamTimeoutError) else logging.ERROR
    log_exception_with_context(
        logger,
        f"{request.method} {request.url.path} - {code}",
        exc,
        level=level,
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(code=code, error=exc.message, details=exc.details or None).model_dump(),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return malformed request bodies in the same error shape."""
    logger.warning(f"{request.method} {request.url.path} - request validation failed")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            code="REQUEST_VALIDATION_ERROR",
            error="Request body is invalid",
            details={"errors": [
                {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        ).model_dump(),
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="NOMNOM Recipe Assistant API",
        description="Retrieval-grounded recipe Q&A with streamed answers",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # MidStreamFailureError is left unhandled: the body has started, so the
    # server must abort the connection instead of writing an error response.
    for exc_type, _, _ in ERROR_STATUS:
        app.add_exception_handler(exc_type, nomnom_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "nomnom.main:app",
        host="0.0.0.0",
        port=8000,
    )
