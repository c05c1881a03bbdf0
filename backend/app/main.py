"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.infrastructure.dependencies import build_pet_service
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.logging.request_logger import RequestLogger
from app.presentation.api.v1.router import router as v1_router
from app.presentation.error_handlers import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and seed the store."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    if settings.seed_sample_data:
        await app.state.pet_service.seed_sample_data()
    else:
        logger.info("Sample data seeding disabled")

    logger.info("%s %s ready (%s)", settings.app_title, settings.app_version, settings.app_env)
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    Each call builds its own cipher, store and service, so separate apps
    never share pet data.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pet_service = build_pet_service(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Access log
    app.middleware("http")(RequestLogger().middleware)

    register_error_handlers(app)

    # Mount API routes
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
