"""Resource repository port."""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from docaccess.domain.entities import ResourceNode


class ResourceRepository(Protocol):
    """Port for the resource forest."""

    async def get_by_id(self, resource_id: UUID) -> ResourceNode | None: ...

    async def get_ancestors(self, resource_id: UUID, limit: int) -> list[ResourceNode]:
        """Ancestors nearest first, at most limit entries."""
        ...

    async def list_descendant_ids(self, resource_id: UUID) -> list[UUID]: ...

    async def lock(self, resource_ids: Sequence[UUID]) -> None:
        """Lock rows for update until the unit of work ends."""
        ...

    async def create(self, node: ResourceNode) -> ResourceNode: ...

    async def update_parent(self, node: ResourceNode) -> None: ...

    async def delete(self, resource_id: UUID) -> None: ...
