from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.projecthub.api.middlewares import setup_middlewares
from src.projecthub.api.v1.router import api_router
from src.projecthub.core.cache import ActorCache
from src.projecthub.core.config import get_settings
from src.projecthub.core.db import dispose_engine
from src.projecthub.core.exceptions import setup_exception_handlers
from src.projecthub.core.health import setup_health_endpoint, setup_metrics
from src.projecthub.core.logging import get_logger, setup_logging
from src.projecthub.core.redis import close_redis, get_redis
from src.projecthub.core.storage import create_image_storage

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    redis = await get_redis()
    app.state.actor_cache = ActorCache(settings.actor_cache_ttl_seconds, redis=redis)
    app.state.image_storage = create_image_storage(settings)

    yield

    logger.info("Closing connections...")
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and logout"},
    {"name": "users", "description": "Current user and teacher directory"},
    {"name": "projects", "description": "Project submission, review workflow and bulk operations"},
    {"name": "notifications", "description": "In-app notifications of the current user"},
    {"name": "admin", "description": "User administration and dashboard statistics"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project submission and review API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)
    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
