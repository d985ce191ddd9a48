"""Database engine management."""

import ssl
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.projecthub.core.config import get_settings

_engine: AsyncEngine | None = None


def _get_connect_args(database_url: str) -> dict[str, Any]:
    """Get connection arguments including SSL configuration.

    SSL settings only apply to PostgreSQL drivers.
    """
    settings = get_settings()
    if make_url(database_url).get_backend_name() != "postgresql":
        return {}

    connect_args: dict[str, Any] = {}
    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": True}
        if make_url(settings.database_url).get_backend_name() == "postgresql":
            engine_kwargs["pool_size"] = settings.database_pool_size
            engine_kwargs["max_overflow"] = settings.database_max_overflow
        _engine = create_async_engine(
            settings.database_url,
            connect_args=_get_connect_args(settings.database_url),
            **engine_kwargs,
        )
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
