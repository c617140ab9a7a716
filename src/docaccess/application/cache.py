"""Lazily recomputed cache of resolution and conflict results."""

import time
from collections import OrderedDict
from collections.abc import Iterable
from typing import Any
from uuid import UUID

import structlog

logger = structlog.get_logger()


class ResolutionCache:
    """Results keyed by (resource, subject, kind); mutations drop whole resources.

    Readers take a generation token before loading data and pass it back on
    ``put``; a result computed across an invalidation is discarded instead of
    cached, so a stale snapshot never outlives the write that made it stale.

    Entries live in process memory, bounded by ``max_entries`` (least recently
    used evicted first) and by ``ttl_seconds``. Invalidation only reaches the
    local process; with several workers the TTL bounds how long a peer may
    serve a result made stale by another worker's write.
    """

    def __init__(
        self,
        enabled: bool = True,
        max_entries: int = 10_000,
        ttl_seconds: float = 300.0,
    ) -> None:
        self._enabled = enabled
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._entries: OrderedDict[tuple[UUID, tuple], tuple[Any, float]] = OrderedDict()
        self._by_resource: dict[UUID, set[tuple]] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, resource_id: UUID, key: tuple) -> Any | None:
        if not self._enabled:
            return None
        entry = self._entries.get((resource_id, key))
        if entry is None:
            return None
        value, expires_at = entry
        if time.monotonic() >= expires_at:
            self._discard(resource_id, key)
            return None
        self._entries.move_to_end((resource_id, key))
        return value

    def put(self, resource_id: UUID, key: tuple, value: Any, generation: int) -> None:
        if not self._enabled or generation != self._generation:
            return
        self._entries[(resource_id, key)] = (value, time.monotonic() + self._ttl)
        self._entries.move_to_end((resource_id, key))
        self._by_resource.setdefault(resource_id, set()).add(key)
        while len(self._entries) > self._max_entries:
            (evicted_resource, evicted_key), _ = self._entries.popitem(last=False)
            self._forget(evicted_resource, evicted_key)

    def invalidate(self, resource_ids: Iterable[UUID]) -> None:
        """Drop cached results for the given resources."""
        ids = list(resource_ids)
        self._generation += 1
        for resource_id in ids:
            for key in self._by_resource.pop(resource_id, ()):
                self._entries.pop((resource_id, key), None)
        logger.debug("resolution_cache_invalidated", resources=len(ids))

    def clear(self) -> None:
        self._generation += 1
        self._entries.clear()
        self._by_resource.clear()

    def _discard(self, resource_id: UUID, key: tuple) -> None:
        self._entries.pop((resource_id, key), None)
        self._forget(resource_id, key)

    def _forget(self, resource_id: UUID, key: tuple) -> None:
        keys = self._by_resource.get(resource_id)
        if keys is None:
            return
        keys.discard(key)
        if not keys:
            del self._by_resource[resource_id]
