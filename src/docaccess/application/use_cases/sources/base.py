"""Shared plumbing for source registry mutations."""

from uuid import UUID

from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
from docaccess.application.ports import PermissionChecker, UnitOfWork
from docaccess.domain.exceptions import PermissionDenied
from docaccess.domain.value_objects import Action


class SourceMutationUseCase:
    """Base for use cases that edit sources on one resource."""

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

    async def _authorize(self, actor_id: str, resource_id: UUID) -> None:
        if not await self._permission_checker.check(actor_id, resource_id, Action.MANAGE):
            raise PermissionDenied("User does not have manage access to resource")

    async def _affected(self, uow: UnitOfWork, resource_id: UUID) -> list[UUID]:
        """The resource and every descendant inheriting from it."""
        return [resource_id, *await uow.resources.list_descendant_ids(resource_id)]
