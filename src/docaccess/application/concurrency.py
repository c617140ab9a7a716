"""Per-resource single-writer locks."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID


class WriterLocks:
    """One asyncio.Lock per resource id, held for validate-then-apply.

    Locks are always taken in sorted id order so two writers touching
    overlapping resources cannot deadlock. A lock is dropped once no writer
    holds or waits for it, so the map only ever holds contended ids.
    Serialization is per process; running several workers needs the
    database's own row locks as well.
    """

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}
        self._users: dict[UUID, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def _checkout(self, resource_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(resource_id)
        if lock is None:
            lock = self._locks[resource_id] = asyncio.Lock()
        self._users[resource_id] = self._users.get(resource_id, 0) + 1
        return lock

    def _checkin(self, resource_id: UUID) -> None:
        remaining = self._users[resource_id] - 1
        if remaining:
            self._users[resource_id] = remaining
        else:
            del self._users[resource_id]
            del self._locks[resource_id]

    @asynccontextmanager
    async def hold(self, *resource_ids: UUID | None) -> AsyncIterator[None]:
        """Acquire locks for every non-None id."""
        ordered = sorted({r for r in resource_ids if r is not None})
        acquired: list[tuple[UUID, asyncio.Lock]] = []
        try:
            for resource_id in ordered:
                lock = self._checkout(resource_id)
                try:
                    await lock.acquire()
                except BaseException:
                    self._checkin(resource_id)
                    raise
                acquired.append((resource_id, lock))
            yield
        finally:
            for resource_id, lock in reversed(acquired):
                lock.release()
                self._checkin(resource_id)
