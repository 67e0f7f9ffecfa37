"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from image_guard.api.routes import health, validation
from image_guard.api.routes.validation import CORS_HEADERS
from image_guard.config import get_settings
from image_guard.core.verdict import ValidationVerdict
from image_guard.utils.logging_config import configure_logging

# Configure logging before doing anything else
configure_logging()
from image_guard.utils.exceptions import (
    ImageGuardError,
    ImageValidationError,
    RejectionReason,
)

settings = get_settings()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("Starting Image Guard", version=settings.app_version)
    yield
    logger.info("Shutting down Image Guard")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Content-based validation of uploaded images",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Browsers call the validation endpoint directly, so every response
    # carries permissive CORS headers, errors included.
    @app.middleware("http")
    async def cors_headers_middleware(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # Request-ID middleware: binds a unique ID per request to structlog context.
    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Exception handlers
    @app.exception_handler(ImageValidationError)
    async def validation_error_handler(
        request: Request, exc: ImageValidationError
    ) -> JSONResponse:
        verdict = ValidationVerdict.rejected(exc.message, exc.reason)
        return JSONResponse(status_code=exc.status_code, content=verdict.to_response())

    @app.exception_handler(ImageGuardError)
    async def internal_fault_handler(
        request: Request, exc: ImageGuardError
    ) -> JSONResponse:
        logger.error("Service error", error=exc.message)
        verdict = ValidationVerdict.rejected(
            "Internal validation error", RejectionReason.INTERNAL_FAULT
        )
        return JSONResponse(status_code=500, content=verdict.to_response())

    # Include routers
    app.include_router(health.router)
    app.include_router(
        validation.router,
        prefix=settings.api_prefix,
    )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "image_guard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
