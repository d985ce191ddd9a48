"""Tests for the actor cache, in-process and Redis-backed."""

from uuid import uuid4

import pytest

from src.projecthub.core.cache import PREFIX_ACTOR, ActorCache
from src.projecthub.models import UserRole
from src.projecthub.schemas.actor import Actor

pytestmark = pytest.mark.unit


def make_actor(role: UserRole = UserRole.USER) -> Actor:
    return Actor(id=uuid4(), role=role, display_name="Test Person", email="t@example.com")


class TestLocalActorCache:
    async def test_set_then_get(self):
        cache = ActorCache(ttl_seconds=60)
        actor = make_actor()

        await cache.set(actor)

        assert await cache.get(actor.id) == actor

    async def test_missing_entry(self):
        assert await ActorCache(ttl_seconds=60).get(uuid4()) is None

    async def test_expired_entry(self, monkeypatch):
        cache = ActorCache(ttl_seconds=10)
        actor = make_actor()
        clock = [1000.0]
        monkeypatch.setattr("src.projecthub.core.cache.time.monotonic", lambda: clock[0])

        await cache.set(actor)
        clock[0] += 11

        assert await cache.get(actor.id) is None

    async def test_zero_ttl_disables_caching(self):
        cache = ActorCache(ttl_seconds=0)
        actor = make_actor()

        await cache.set(actor)

        assert await cache.get(actor.id) is None

    async def test_invalidate(self):
        cache = ActorCache(ttl_seconds=60)
        actor = make_actor()
        await cache.set(actor)

        await cache.invalidate(actor.id)

        assert await cache.get(actor.id) is None

    async def test_clear(self):
        cache = ActorCache(ttl_seconds=60)
        for _ in range(3):
            await cache.set(make_actor())

        assert await cache.clear() == 3


class TestRedisActorCache:
    async def test_round_trip(self, fake_redis):
        cache = ActorCache(ttl_seconds=60, redis=fake_redis)
        actor = make_actor(UserRole.TEACHER)

        await cache.set(actor)

        cached = await cache.get(actor.id)
        assert cached == actor
        assert cached.is_reviewer

    async def test_entry_has_ttl(self, fake_redis):
        cache = ActorCache(ttl_seconds=60, redis=fake_redis)
        actor = make_actor()

        await cache.set(actor)

        ttl = await fake_redis.ttl(f"{PREFIX_ACTOR}:{actor.id}")
        assert 0 < ttl <= 60

    async def test_invalidate(self, fake_redis):
        cache = ActorCache(ttl_seconds=60, redis=fake_redis)
        actor = make_actor()
        await cache.set(actor)

        await cache.invalidate(actor.id)

        assert await cache.get(actor.id) is None

    async def test_clear_only_touches_actor_keys(self, fake_redis):
        cache = ActorCache(ttl_seconds=60, redis=fake_redis)
        await cache.set(make_actor())
        await cache.set(make_actor())
        await fake_redis.set("unrelated", "keep")

        assert await cache.clear() == 2
        assert await fake_redis.get("unrelated") == "keep"
