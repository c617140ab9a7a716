"""Source registry edits - toggle active, change one action, delete."""

from uuid import UUID

import structlog

from docaccess.application.use_cases.sources.base import SourceMutationUseCase
from docaccess.domain.entities import AuditEntry, PermissionSource
from docaccess.domain.exceptions import SourceNotFound
from docaccess.domain.value_objects import Action, TriState

logger = structlog.get_logger()


class _SourceUpdate(SourceMutationUseCase):
    async def _load(self, source_id: UUID) -> PermissionSource:
        async with self._uow_factory(read_only=True) as uow:
            source = await uow.sources.get_by_id(source_id)
        if not source:
            raise SourceNotFound(source_id)
        return source

    async def _apply(
        self, actor_id: str, source_id: UUID, audit_action: str, change
    ) -> PermissionSource:
        """Load under lock, mutate with change(source), store, audit, invalidate."""
        resource_id = (await self._load(source_id)).resource_id
        await self._authorize(actor_id, resource_id)

        async with self._locks.hold(resource_id):
            async with self._uow_factory() as uow:
                await uow.resources.lock([resource_id])
                source = await uow.sources.get_by_id(source_id)
                if not source:
                    raise SourceNotFound(source_id)
                before = source.as_dict()
                change(source)
                await uow.sources.update(source)
                await uow.audit.append(
                    AuditEntry.record(
                        action=audit_action,
                        actor=actor_id,
                        resource_id=resource_id,
                        target_id=source_id,
                        before=before,
                        after=source.as_dict(),
                    )
                )
                affected = await self._affected(uow, resource_id)

        self._cache.invalidate(affected)
        return source


class SetSourceActiveUseCase(_SourceUpdate):
    """Enable or disable a source without deleting it."""

    async def execute(self, actor_id: str, source_id: UUID, active: bool) -> PermissionSource:
        def change(source: PermissionSource) -> None:
            source.active = active

        source = await self._apply(actor_id, source_id, "source.activation_changed", change)
        logger.info("source_active_set", source_id=str(source_id), active=active, actor=actor_id)
        return source


class UpdateSourcePermissionUseCase(_SourceUpdate):
    """Set one action's tri-state value on a source."""

    async def execute(
        self, actor_id: str, source_id: UUID, action: str, value: object
    ) -> PermissionSource:
        parsed_action = Action.parse(action)
        parsed_value = TriState.parse(value)

        def change(source: PermissionSource) -> None:
            if parsed_value is TriState.UNSPECIFIED:
                source.permissions.pop(parsed_action, None)
            else:
                source.permissions[parsed_action] = parsed_value

        source = await self._apply(actor_id, source_id, "source.permission_changed", change)
        logger.info(
            "source_permission_updated",
            source_id=str(source_id),
            action=parsed_action.value,
            value=parsed_value.value,
            actor=actor_id,
        )
        return source


class DeleteSourceUseCase(_SourceUpdate):
    """Remove a source permanently."""

    async def execute(self, actor_id: str, source_id: UUID) -> None:
        resource_id = (await self._load(source_id)).resource_id
        await self._authorize(actor_id, resource_id)

        async with self._locks.hold(resource_id):
            async with self._uow_factory() as uow:
                await uow.resources.lock([resource_id])
                source = await uow.sources.get_by_id(source_id)
                if not source:
                    raise SourceNotFound(source_id)
                await uow.sources.delete(source_id)
                await uow.audit.append(
                    AuditEntry.record(
                        action="source.deleted",
                        actor=actor_id,
                        resource_id=resource_id,
                        target_id=source_id,
                        before=source.as_dict(),
                    )
                )
                affected = await self._affected(uow, resource_id)

        self._cache.invalidate(affected)
        logger.info("source_deleted", source_id=str(source_id), actor=actor_id)

