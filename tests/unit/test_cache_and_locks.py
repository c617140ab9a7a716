"""Tests for the resolution cache and writer locks."""

import asyncio
from uuid import uuid4

import pytest

from docaccess.application import cache as cache_module
from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks


def test_put_with_stale_generation_is_discarded() -> None:
    cache = ResolutionCache()
    rid = uuid4()
    generation = cache.generation
    cache.invalidate([uuid4()])

    cache.put(rid, ("k",), "value", generation)

    assert cache.get(rid, ("k",)) is None


def test_invalidate_drops_only_named_resources() -> None:
    cache = ResolutionCache()
    a, b = uuid4(), uuid4()
    cache.put(a, ("k",), 1, cache.generation)
    cache.put(b, ("k",), 2, cache.generation)

    cache.invalidate([a])

    assert cache.get(a, ("k",)) is None
    assert cache.get(b, ("k",)) == 2


def test_disabled_cache_stores_nothing() -> None:
    cache = ResolutionCache(enabled=False)
    rid = uuid4()
    cache.put(rid, ("k",), 1, cache.generation)
    assert cache.get(rid, ("k",)) is None


@pytest.mark.asyncio
async def test_writer_locks_serialize_same_resource() -> None:
    locks = WriterLocks()
    rid = uuid4()
    order: list[str] = []

    async def writer(name: str) -> None:
        async with locks.hold(rid):
            order.append(f"{name}-start")
            await asyncio.sleep(0.01)
            order.append(f"{name}-end")

    await asyncio.gather(writer("a"), writer("b"))

    assert order in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )


@pytest.mark.asyncio
async def test_writer_locks_overlapping_sets_do_not_deadlock() -> None:
    locks = WriterLocks()
    a, b = uuid4(), uuid4()

    async def writer(*ids) -> None:
        async with locks.hold(*ids):
            await asyncio.sleep(0.01)

    await asyncio.wait_for(asyncio.gather(writer(a, b), writer(b, a), writer(a, None)), timeout=2)


def test_least_recently_used_entry_is_evicted() -> None:
    cache = ResolutionCache(max_entries=2)
    a, b, c = uuid4(), uuid4(), uuid4()
    cache.put(a, ("k",), 1, cache.generation)
    cache.put(b, ("k",), 2, cache.generation)
    assert cache.get(a, ("k",)) == 1

    cache.put(c, ("k",), 3, cache.generation)

    assert len(cache) == 2
    assert cache.get(b, ("k",)) is None
    assert cache.get(a, ("k",)) == 1
    assert cache.get(c, ("k",)) == 3


def test_entries_expire_after_ttl(monkeypatch) -> None:
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
    cache = ResolutionCache(ttl_seconds=10)
    rid = uuid4()
    cache.put(rid, ("k",), "value", cache.generation)

    now[0] += 9
    assert cache.get(rid, ("k",)) == "value"

    now[0] += 1
    assert cache.get(rid, ("k",)) is None
    assert len(cache) == 0


def test_invalidate_after_eviction_leaves_cache_empty() -> None:
    cache = ResolutionCache(max_entries=1)
    a, b = uuid4(), uuid4()
    cache.put(a, ("k",), 1, cache.generation)
    cache.put(b, ("k",), 2, cache.generation)

    cache.invalidate([a, b])

    assert len(cache) == 0
    assert cache._by_resource == {}


@pytest.mark.asyncio
async def test_writer_locks_are_dropped_after_release() -> None:
    locks = WriterLocks()
    a, b = uuid4(), uuid4()

    async def writer(*ids) -> None:
        async with locks.hold(*ids):
            assert len(locks) >= 1
            await asyncio.sleep(0.01)

    await asyncio.gather(*(writer(a, b) for _ in range(5)), writer(b))

    assert len(locks) == 0


@pytest.mark.asyncio
async def test_writer_lock_released_when_body_raises() -> None:
    locks = WriterLocks()
    rid = uuid4()

    with pytest.raises(RuntimeError):
        async with locks.hold(rid):
            raise RuntimeError("boom")

    assert len(locks) == 0
    async with locks.hold(rid):
        pass
