"""Conflict decision repository port."""

from typing import Protocol
from uuid import UUID

from docaccess.domain.entities import ConflictResolution


class ConflictRepository(Protocol):
    """Port for administrator decisions on conflicts (conflicts are recomputed)."""

    async def get(self, conflict_id: UUID) -> ConflictResolution | None: ...

    async def list_by_resource(self, resource_id: UUID) -> dict[UUID, ConflictResolution]: ...

    async def save(self, decision: ConflictResolution) -> None: ...
