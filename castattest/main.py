"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from castattest import __version__
from castattest.config import Settings, get_settings
from castattest.errors import (
    AuthenticationError,
    ConfigurationError,
    MethodError,
    SubmissionError,
)
from castattest.routers import health_router, mint_router
from castattest.services.attestation import build_attestation_service
from castattest.services.eas import BaseAttestationClient
from castattest.utils.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    configure_logging(settings)

    # Missing credentials abort startup
    if app.state.attestation_service is None:
        logger.info("Initializing attestation service...")
        try:
            app.state.attestation_service = build_attestation_service(
                settings, app.state.attestation_client
            )
        except ConfigurationError as e:
            logger.error("Attestation service misconfigured", error=str(e))
            raise

    # Initialize Sentry if configured
    if settings.sentry_dsn:
        import sentry_sdk

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment.value,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down...")
    if app.state.attestation_service is not None:
        await app.state.attestation_service.client.close()
    logger.info("Shutdown complete")


def _error(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    content = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _public_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the submitted input, which carries the token."""
    return [
        {k: v for k, v in err.items() if k not in ("input", "ctx")}
        for err in exc.errors()
    ]


def create_app(
    settings: Settings | None = None,
    attestation_client: BaseAttestationClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``attestation_client`` replaces the web3 EAS client, mainly for tests.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="castattest",
        description="""
## Cast Attestation Webhook

Receives "cast published" notifications and records their provenance
(author FID, cast hash, text, image link, brand, timestamp) as an
Ethereum Attestation Service attestation on Base.

### Authentication

The webhook body carries a shared-secret `token`.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.attestation_client = attestation_client
    app.state.attestation_service = None

    # Prometheus metrics
    if settings.prometheus_enabled:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # Include routers
    app.include_router(health_router)
    app.include_router(mint_router)

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        logger.warning("Rejected webhook call", path=request.url.path, reason=str(exc))
        return _error(status.HTTP_401_UNAUTHORIZED, "invalid_token", "Invalid token")

    @app.exception_handler(MethodError)
    async def method_error_handler(request: Request, exc: MethodError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "invalid_request", "Invalid request")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Malformed webhook body", path=request.url.path)
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "invalid_request",
            "Invalid request",
            details=jsonable_encoder(_public_errors(exc)),
        )

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("Attestation service misconfigured", error=str(exc))
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An unexpected error occurred",
        )

    @app.exception_handler(SubmissionError)
    async def submission_error_handler(
        request: Request, exc: SubmissionError
    ) -> JSONResponse:
        logger.error("Attestation submission failed", exc_info=exc)
        message = str(exc) if settings.debug else "Attestation submission failed"
        return _error(status.HTTP_502_BAD_GATEWAY, "submission_failed", message)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )

        if settings.debug:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "internal_server_error",
                    "message": str(exc),
                    "type": type(exc).__name__,
                },
            )

        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "An unexpected error occurred",
        )

    return app


# Create app instance
app = create_app()
