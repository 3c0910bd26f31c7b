"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from famdocs.api.documents import router as documents_router
from famdocs.api.schemas import ErrorResponse
from famdocs.api.templates import router as templates_router
from famdocs.core.config import Settings, get_settings
from famdocs.core.factory import ComponentFactory, get_factory

logger = logging.getLogger(__name__)

SERVICE_NAME = "famdocs-api"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Builds the document service at startup so that configuration errors
    surface before the first request.
    """
    settings: Settings = app.state.settings

    logger.info("Starting document generation API...")
    logger.info(
        f"Renderer: {settings.renderer_type}, storage: {settings.storage_type}, "
        f"OCR: {'enabled' if settings.ocr_enabled else 'disabled'}"
    )

    try:
        app.state.factory.get_document_service()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down document generation API...")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    factory = get_factory() if settings is None else ComponentFactory(settings)
    settings = settings or get_settings()

    app = FastAPI(
        title="Family Documents",
        description="Administrative letter generation from tasks, profiles and attachments",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.factory = factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(templates_router)
    app.include_router(documents_router)
    logger.info("Registered templates and documents routers")

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION,
        }

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Handle Pydantic validation errors."""
        logger.warning(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Validation error",
                "errors": exc.errors(),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                detail="Internal server error",
                error_code="INTERNAL_ERROR",
            ).model_dump(),
        )

    logger.info("FastAPI application created successfully")
    return app


if __name__ == "__main__":
    import uvicorn

    from famdocs.core.logging_config import setup_logging

    setup_logging()
    settings = get_settings()
    logger.info("Starting uvicorn server on port 8000...")
    uvicorn.run(
        "famdocs.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
