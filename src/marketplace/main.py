from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.marketplace.api.middlewares import setup_middlewares
from src.marketplace.api.v1.router import api_router
from src.marketplace.core.config import get_settings
from src.marketplace.core.db import dispose_engine
from src.marketplace.core.exceptions import setup_exception_handlers
from src.marketplace.core.health import setup_health_endpoint, setup_metrics
from src.marketplace.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "requests", "description": "Posting and browsing service requests"},
    {"name": "bids", "description": "Provider bids and bid arbitration"},
    {"name": "reviews", "description": "Reviews between parties and user ratings"},
    {"name": "notifications", "description": "Per-user notification inbox"},
    {"name": "admin", "description": "Moderation, completion and platform management"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Service marketplace: request moderation, bidding and reviews",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
