import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import submission
from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import OriginGuardMiddleware, RequestIdMiddleware
from app.services.storage_service import LocalUploadStorage

logger = logging.getLogger(__name__)


tags_metadata = [
    {
        "name": "submission",
        "description": "**Form submission** - Contact fields plus a PDF resume, relayed by email.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Server running on http://localhost:{settings.PORT}")

    yield

    logger.info("Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around an immutable settings instance."""
    settings = settings or get_settings()

    # Uploads folder must exist before the first request
    LocalUploadStorage(settings.UPLOAD_DIR).ensure_directory()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Relays contact form submissions with a PDF resume by email.",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )
    app.state.settings = settings

    # CORS response headers for allowed origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Reject disallowed origins before routing
    app.add_middleware(
        OriginGuardMiddleware, allowed_origins=settings.ALLOWED_ORIGINS
    )

    # Request ID Tracing
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    app.include_router(submission.router, prefix="/api", tags=["submission"])

    @app.get("/health", summary="Health check")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


def run() -> None:
    """Console entry point: load settings (fail fast), then serve."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
