"""Permission source repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from docaccess.domain.entities import PermissionSource


class SourceRepository(Protocol):
    """Port for stored (non-inherited) permission sources."""

    async def get_by_id(self, source_id: UUID) -> PermissionSource | None: ...

    async def list_by_resource(self, resource_id: UUID) -> list[PermissionSource]: ...

    async def list_by_resources(
        self, resource_ids: Sequence[UUID]
    ) -> dict[UUID, list[PermissionSource]]: ...

    async def create(self, source: PermissionSource) -> PermissionSource: ...

    async def update(self, source: PermissionSource) -> None: ...

    async def delete(self, source_id: UUID) -> None: ...

    async def delete_by_resource(self, resource_id: UUID) -> None: ...
