"""Add permission source use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from docaccess.application.dto.source_input import SourceCreateInput
from docaccess.application.use_cases.sources.base import SourceMutationUseCase
from docaccess.domain.entities import AuditEntry, PermissionSource
from docaccess.domain.exceptions import NotFound, ValidationError

logger = structlog.get_logger()


class AddSourceUseCase(SourceMutationUseCase):
    """Attach a direct, role or group source to a resource."""

    async def execute(
        self, actor_id: str, resource_id: UUID, input_data: SourceCreateInput
    ) -> PermissionSource:
        """Validate and store source. Actor must have manage on the resource."""
        kind = input_data.parsed_kind()
        priority = input_data.parsed_priority()
        permissions = input_data.parsed_permissions()
        subject_ref = input_data.subject_ref.strip()
        if not subject_ref:
            raise ValidationError("subject_ref is required")

        await self._authorize(actor_id, resource_id)

        source = PermissionSource(
            id=uuid4(),
            resource_id=resource_id,
            subject_ref=subject_ref,
            kind=kind,
            priority=priority,
            permissions=permissions,
            active=input_data.active,
            name=input_data.name,
            created_at=datetime.now(UTC),
            created_by=actor_id,
        )
        async with self._locks.hold(resource_id):
            async with self._uow_factory() as uow:
                await uow.resources.lock([resource_id])
                if not await uow.resources.get_by_id(resource_id):
                    raise NotFound("Resource", resource_id)
                await uow.sources.create(source)
                await uow.audit.append(
                    AuditEntry.record(
                        action="source.created",
                        actor=actor_id,
                        resource_id=resource_id,
                        target_id=source.id,
                        after=source.as_dict(),
                    )
                )
                affected = await self._affected(uow, resource_id)

        self._cache.invalidate(affected)
        logger.info(
            "source_created",
            source_id=str(source.id),
            resource_id=str(resource_id),
            kind=kind.value,
            priority=priority,
            actor=actor_id,
        )
        return source
