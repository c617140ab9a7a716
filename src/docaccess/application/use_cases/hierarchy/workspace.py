"""Working copy of the resource forest for validate-then-apply moves."""

from uuid import UUID

from docaccess.application.ports import UnitOfWork
from docaccess.domain.entities import ResourceNode
from docaccess.domain.exceptions import NotFound
from docaccess.domain.services import apply_move, ensure_bounded, validate_move


class HierarchyWorkspace:
    """Loads nodes on demand and applies moves to in-memory copies.

    Every move is checked against the state left by the previous ones, and
    nothing reaches the repository until ``flush``; a rejected move therefore
    leaves storage untouched.
    """

    def __init__(self, uow: UnitOfWork, max_depth: int) -> None:
        self._uow = uow
        self._max_depth = max_depth
        self._nodes: dict[UUID, ResourceNode] = {}
        self._dirty: set[UUID] = set()

    async def node(self, resource_id: UUID) -> ResourceNode:
        if resource_id not in self._nodes:
            node = await self._uow.resources.get_by_id(resource_id)
            if not node:
                raise NotFound("Resource", resource_id)
            self._nodes[resource_id] = node
        return self._nodes[resource_id]

    async def ancestors(self, resource_id: UUID) -> list[ResourceNode]:
        """Ancestor chain in the working state, nearest first."""
        chain = []
        current = await self.node(resource_id)
        while current.parent_id is not None:
            current = await self.node(current.parent_id)
            chain.append(current)
            ensure_bounded(chain, resource_id, self._max_depth)
        return chain

    async def move(self, resource_id: UUID, new_parent_id: UUID | None) -> UUID | None:
        """Validate and apply one move; returns the previous parent id."""
        node = await self.node(resource_id)
        new_parent = await self.node(new_parent_id) if new_parent_id is not None else None
        new_parent_ancestors = (
            await self.ancestors(new_parent_id) if new_parent_id is not None else []
        )
        validate_move(node, new_parent, new_parent_ancestors)

        old_parent_id = node.parent_id
        if old_parent_id == new_parent_id:
            return old_parent_id
        old_parent = await self.node(old_parent_id) if old_parent_id is not None else None
        apply_move(node, old_parent, new_parent)
        self._dirty.add(resource_id)
        return old_parent_id

    async def flush(self) -> list[ResourceNode]:
        """Persist moved nodes; parents' children follow from parent_id."""
        moved = [self._nodes[i] for i in sorted(self._dirty)]
        for node in moved:
            await self._uow.resources.update_parent(node)
        self._dirty.clear()
        return moved
