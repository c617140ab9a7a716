"""Remove resource use case."""

from uuid import UUID

import structlog

from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
from docaccess.application.ports import PermissionChecker
from docaccess.domain.entities import AuditEntry
from docaccess.domain.exceptions import NotFound, PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action

logger = structlog.get_logger()


class RemoveResourceUseCase:
    """Remove a childless node and its sources.

    Reparenting or cascading children is the storage owner's job, so a
    folder that still has children is rejected.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        locks: WriterLocks,
        cache: ResolutionCache,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._locks = locks
        self._cache = cache

    async def execute(self, actor_id: str, resource_id: UUID) -> None:
        if not await self._permission_checker.check(actor_id, resource_id, Action.MANAGE):
            raise PermissionDenied("User cannot manage resource")

        async with self._locks.hold(resource_id):
            async with self._uow_factory() as uow:
                await uow.resources.lock([resource_id])
                node = await uow.resources.get_by_id(resource_id)
                if not node:
                    raise NotFound("Resource", resource_id)
                if node.children:
                    raise ValidationError(
                        f"Resource {resource_id} still has {len(node.children)} children"
                    )
                sources = await uow.sources.list_by_resource(resource_id)
                await uow.sources.delete_by_resource(resource_id)
                await uow.resources.delete(resource_id)
                await uow.audit.append(
                    AuditEntry.record(
                        action="resource.removed",
                        actor=actor_id,
                        resource_id=resource_id,
                        target_id=node.parent_id,
                        before={
                            "kind": node.kind.value,
                            "parent_id": str(node.parent_id) if node.parent_id else None,
                            "sources": [s.as_dict() for s in sources],
                        },
                    )
                )

        self._cache.invalidate([resource_id])
        logger.info("resource_removed", resource_id=str(resource_id), actor=actor_id)
