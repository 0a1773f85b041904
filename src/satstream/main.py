"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from satstream import __version__
from satstream.config.settings import Settings, get_settings
from satstream.di import initialize_container, shutdown_container
from satstream.domain.exceptions import SatStreamException
from satstream.infrastructure.monitoring import get_logger, setup_logging
from satstream.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    satstream_exception_handler,
)
from satstream.presentation.api.routes import admin, health, posts, relay, wallet


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # Structured logging (JSON only in production)
    setup_logging(
        level=settings.LOG_LEVEL,
        json_logs=settings.ENV == "production",
        env=settings.ENV,
    )
    logger = get_logger(__name__)

    logger.info(f"Creating SatStream application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting SatStream application...")
        await initialize_container()
        logger.info("SatStream application started successfully")

        yield

        logger.info("Shutting down SatStream application...")
        await shutdown_container()
        logger.info("SatStream application shutdown complete")

    app = FastAPI(
        title="SatStream API",
        description="Internal Bitcoin tipping ledger with admin-approved payouts",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=6)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SatStreamException, satstream_exception_handler)

    app.include_router(health.router, prefix="/api")
    app.include_router(wallet.router, prefix="/api")
    app.include_router(posts.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(relay.router)

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": "SatStream",
            "status": "running",
            "version": __version__,
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """Prometheus metrics in text format for scraping."""
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    logger.info("SatStream application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance.

    For uvicorn: uvicorn satstream.main:get_app --factory
    """
    return create_app()


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "satstream.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
