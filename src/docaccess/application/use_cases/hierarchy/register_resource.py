"""Register resource use case - storage announces a new folder or document."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from docaccess.application.concurrency import WriterLocks
from docaccess.application.ports import PermissionChecker
from docaccess.domain.entities import AuditEntry, ResourceNode
from docaccess.domain.exceptions import NotAFolder, NotFound, PermissionDenied, ValidationError
from docaccess.domain.value_objects import Action, ResourceKind

logger = structlog.get_logger()


class RegisterResourceUseCase:
    """Add a node to the forest under an existing folder, or as a root."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        locks: WriterLocks,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._locks = locks

    async def execute(
        self,
        actor_id: str,
        kind: str,
        name: str = "",
        parent_id: UUID | None = None,
        resource_id: UUID | None = None,
    ) -> ResourceNode:
        """Create node. Actor needs edit on the parent folder."""
        try:
            resource_kind = ResourceKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid resource kind: {kind!r}") from None

        if parent_id is not None and not await self._permission_checker.check(
            actor_id, parent_id, Action.EDIT
        ):
            raise PermissionDenied("User does not have edit access to parent folder")

        node = ResourceNode(
            id=resource_id or uuid4(),
            kind=resource_kind,
            parent_id=parent_id,
            name=name,
            created_at=datetime.now(UTC),
        )
        async with self._locks.hold(parent_id, node.id):
            async with self._uow_factory() as uow:
                if await uow.resources.get_by_id(node.id):
                    raise ValidationError(f"Resource {node.id} already exists")
                if parent_id is not None:
                    parent = await uow.resources.get_by_id(parent_id)
                    if not parent:
                        raise NotFound("Resource", parent_id)
                    if not parent.is_folder:
                        raise NotAFolder(node.id, parent_id)
                await uow.resources.create(node)
                await uow.audit.append(
                    AuditEntry.record(
                        action="resource.registered",
                        actor=actor_id,
                        resource_id=node.id,
                        target_id=parent_id,
                        after={"kind": node.kind.value, "parent_id": str(parent_id) if parent_id else None},
                    )
                )

        logger.info(
            "resource_registered",
            resource_id=str(node.id),
            kind=node.kind.value,
            parent_id=str(parent_id) if parent_id else None,
        )
        return node
