"""Actor cache with TTL and explicit invalidation.

Resolving a token to an actor needs the user's current role and active flag.
The cache keeps recently resolved actors for a bounded time so every request
does not hit the users table. It is an explicit component created at startup
and handed to the auth dependency; there is no module-level instance.

Backed by Redis when available (shared across workers), otherwise by an
in-process dictionary.
"""

import time
from uuid import UUID

from redis.asyncio import Redis

from src.projecthub.core.logging import get_logger
from src.projecthub.schemas.actor import Actor

logger = get_logger(__name__)

PREFIX_ACTOR = "actor"


class ActorCache:
    """TTL cache of resolved actors keyed by user id.

    Invalidation policy:
    - entries expire ttl_seconds after being stored
    - invalidate(user_id) drops one entry (role change, deactivation, logout)
    - clear() drops everything
    """

    def __init__(self, ttl_seconds: int, redis: Redis | None = None):
        self.ttl_seconds = ttl_seconds
        self.redis = redis
        self._local: dict[UUID, tuple[float, Actor]] = {}

    @staticmethod
    def _key(user_id: UUID) -> str:
        return f"{PREFIX_ACTOR}:{user_id}"

    async def get(self, user_id: UUID) -> Actor | None:
        """Return the cached actor, or None if missing or expired."""
        if self.redis is not None:
            raw = await self.redis.get(self._key(user_id))
            if raw is None:
                return None
            return Actor.model_validate_json(raw)

        entry = self._local.get(user_id)
        if entry is None:
            return None
        expires_at, actor = entry
        if time.monotonic() >= expires_at:
            self._local.pop(user_id, None)
            return None
        return actor

    async def set(self, actor: Actor) -> None:
        if self.ttl_seconds <= 0:
            return
        if self.redis is not None:
            await self.redis.setex(self._key(actor.id), self.ttl_seconds, actor.model_dump_json())
            return
        self._local[actor.id] = (time.monotonic() + self.ttl_seconds, actor)

    async def invalidate(self, user_id: UUID) -> None:
        if self.redis is not None:
            await self.redis.delete(self._key(user_id))
        self._local.pop(user_id, None)
        logger.debug("Actor cache entry invalidated", user_id=str(user_id))

    async def clear(self) -> int:
        """Drop every cached actor. Returns the number of entries removed."""
        removed = len(self._local)
        self._local.clear()
        if self.redis is not None:
            keys = [key async for key in self.redis.scan_iter(match=f"{PREFIX_ACTOR}:*")]
            if keys:
                removed += await self.redis.delete(*keys)
        logger.info("Actor cache cleared", removed=removed)
        return removed
