"""Move resource use cases - single and bulk."""

from uuid import UUID

import structlog

from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
from docaccess.application.ports import PermissionChecker
from docaccess.application.use_cases.hierarchy.workspace import HierarchyWorkspace
from docaccess.domain.entities import AuditEntry, ResourceNode
from docaccess.domain.exceptions import HierarchyViolation, PermissionDenied
from docaccess.domain.value_objects import Action

logger = structlog.get_logger()


class MoveResourcesUseCase:
    """Move one or more resources; all moves commit together or not at all.

    This is the only write path for parent pointers: drag-and-drop, API calls
    and bulk reorganization all go through it.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        locks: WriterLocks,
        cache: ResolutionCache,
        max_depth: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._locks = locks
        self._cache = cache
        self._max_depth = max_depth

    async def _authorize(self, actor_id: str, moves: list[tuple[UUID, UUID | None]]) -> None:
        for resource_id, new_parent_id in moves:
            if not await self._permission_checker.check(actor_id, resource_id, Action.MANAGE):
                raise PermissionDenied(f"User cannot manage resource {resource_id}")
            if new_parent_id is not None and not await self._permission_checker.check(
                actor_id, new_parent_id, Action.EDIT
            ):
                raise PermissionDenied(f"User cannot edit target folder {new_parent_id}")

    async def execute(
        self, actor_id: str, moves: list[tuple[UUID, UUID | None]]
    ) -> list[ResourceNode]:
        """Apply moves in order. Raises HierarchyViolation without persisting anything."""
        await self._authorize(actor_id, moves)

        lock_ids = [i for move in moves for i in move]
        async with self._locks.hold(*lock_ids):
            async with self._uow_factory() as uow:
                await uow.resources.lock(sorted({i for i in lock_ids if i is not None}))
                workspace = HierarchyWorkspace(uow, self._max_depth)
                previous: dict[UUID, UUID | None] = {}
                for resource_id, new_parent_id in moves:
                    try:
                        old_parent_id = await workspace.move(resource_id, new_parent_id)
                    except HierarchyViolation as e:
                        logger.warning(
                            "resource_move_rejected",
                            resource_id=str(resource_id),
                            new_parent_id=str(new_parent_id) if new_parent_id else None,
                            reason=e.code,
                        )
                        raise
                    previous.setdefault(resource_id, old_parent_id)

                moved = await workspace.flush()
                affected: list[UUID] = []
                for node in moved:
                    old_parent_id = previous[node.id]
                    await uow.audit.append(
                        AuditEntry.record(
                            action="resource.moved",
                            actor=actor_id,
                            resource_id=node.id,
                            target_id=node.parent_id,
                            before={"parent_id": str(old_parent_id) if old_parent_id else None},
                            after={"parent_id": str(node.parent_id) if node.parent_id else None},
                        )
                    )
                    affected.append(node.id)
                    affected.extend(await uow.resources.list_descendant_ids(node.id))

        self._cache.invalidate(affected)
        for node in moved:
            logger.info(
                "resource_moved",
                resource_id=str(node.id),
                old_parent_id=str(previous[node.id]) if previous[node.id] else None,
                new_parent_id=str(node.parent_id) if node.parent_id else None,
                actor=actor_id,
            )
        return moved


class MoveResourceUseCase:
    """Move a single resource under a new parent (None = make it a root)."""

    def __init__(self, move_resources: MoveResourcesUseCase) -> None:
        self._move_resources = move_resources

    async def execute(
        self, actor_id: str, resource_id: UUID, new_parent_id: UUID | None
    ) -> ResourceNode | None:
        """Returns the moved node, or None when it already had that parent."""
        moved = await self._move_resources.execute(actor_id, [(resource_id, new_parent_id)])
        return moved[0] if moved else None
