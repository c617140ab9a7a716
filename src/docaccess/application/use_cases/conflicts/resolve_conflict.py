"""Resolve conflict use case."""

from datetime import UTC, datetime
from uuid import UUID

import structlog

from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
from docaccess.application.dto.resource_snapshot import load_snapshot
from docaccess.application.ports import PermissionChecker, SubjectDirectory, UnitOfWork
from docaccess.application.use_cases.conflicts.collect import bound_subjects, collect_conflicts
from docaccess.domain.entities import AuditEntry, Conflict, ConflictResolution
from docaccess.domain.exceptions import (
    ConflictNotFound,
    InvalidResolution,
    PermissionDenied,
    SourceNotFound,
)
from docaccess.domain.services import apply_decisions
from docaccess.domain.value_objects import (
    Action,
    ConflictStatus,
    ResolutionMode,
    RoleConflictPolicy,
)

logger = structlog.get_logger()


class ResolveConflictUseCase:
    """Accept a conflict's recommendation or suppress it with a reason.

    Accepting rewrites the losing resource-level sources to the recommended
    value. Source rewrites, the decision and the audit entry share one unit of
    work, so either all of them are committed or none.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        subject_directory: SubjectDirectory,
        permission_checker: PermissionChecker,
        locks: WriterLocks,
        cache: ResolutionCache,
        policy: RoleConflictPolicy,
        max_depth: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._directory = subject_directory
        self._permission_checker = permission_checker
        self._locks = locks
        self._cache = cache
        self._policy = policy
        self._max_depth = max_depth

    async def execute(
        self,
        actor_id: str,
        resource_id: UUID,
        conflict_id: UUID,
        mode: str,
        reason: str | None = None,
    ) -> Conflict:
        try:
            resolution_mode = ResolutionMode(mode)
        except ValueError:
            raise InvalidResolution(f"Unknown resolution mode: {mode!r}") from None
        if not await self._permission_checker.check(actor_id, resource_id, Action.MANAGE):
            raise PermissionDenied("User does not have manage access to resource")

        async with self._locks.hold(resource_id):
            async with self._uow_factory() as uow:
                await uow.resources.lock([resource_id])
                conflict = await self._find(uow, resource_id, conflict_id)
                if conflict.status is not ConflictStatus.OPEN:
                    raise InvalidResolution(f"Conflict {conflict_id} is already {conflict.status}")

                if resolution_mode is ResolutionMode.ACCEPT_RECOMMENDATION:
                    if not conflict.auto_resolvable:
                        raise InvalidResolution(
                            f"Conflict {conflict_id} ({conflict.type}) requires manual review"
                        )
                    status = ConflictStatus.RESOLVED
                    before, after = await self._apply_recommendation(uow, conflict)
                else:
                    if not reason or not reason.strip():
                        raise InvalidResolution("A reason is required to suppress a conflict")
                    status = ConflictStatus.SUPPRESSED
                    before, after = {}, {}

                decision = ConflictResolution(
                    conflict_id=conflict.id,
                    conflict_type=conflict.type,
                    resource_id=resource_id,
                    status=status,
                    mode=resolution_mode,
                    resolved_by=actor_id,
                    resolved_at=datetime.now(UTC),
                    reason=reason.strip() if reason else None,
                    source_ids=[s.id for s in conflict.sources],
                )
                await uow.conflicts.save(decision)
                await uow.audit.append(
                    AuditEntry.record(
                        action=f"conflict.{status.value}",
                        actor=actor_id,
                        resource_id=resource_id,
                        target_id=conflict.id,
                        before={"status": ConflictStatus.OPEN.value, "sources": before},
                        after={"status": status.value, "sources": after},
                        reason=decision.reason,
                    )
                )
                affected = [resource_id, *await uow.resources.list_descendant_ids(resource_id)]

        self._cache.invalidate(affected)
        conflict.status = status
        conflict.resolution_reason = decision.reason
        logger.info(
            "conflict_resolved",
            conflict_id=str(conflict.id),
            conflict_type=conflict.type.value,
            status=status.value,
            resource_id=str(resource_id),
            actor=actor_id,
        )
        return conflict

    async def _find(self, uow: UnitOfWork, resource_id: UUID, conflict_id: UUID) -> Conflict:
        snapshot = await load_snapshot(uow, resource_id, self._max_depth)
        decisions = await uow.conflicts.list_by_resource(resource_id)
        subjects = await bound_subjects(self._directory, snapshot)
        for conflict in apply_decisions(
            collect_conflicts(snapshot, subjects, self._policy), decisions
        ):
            if conflict.id == conflict_id:
                return conflict
        raise ConflictNotFound(conflict_id)

    async def _apply_recommendation(
        self, uow: UnitOfWork, conflict: Conflict
    ) -> tuple[dict[str, dict], dict[str, dict]]:
        """Rewrite losing sources; returns their before/after records."""
        before: dict[str, dict] = {}
        after: dict[str, dict] = {}
        for ref in conflict.losing_sources():
            source = await uow.sources.get_by_id(ref.id)
            if not source:
                raise SourceNotFound(ref.id)
            before[str(source.id)] = source.as_dict()
            source.permissions[ref.action] = conflict.recommended_value
            await uow.sources.update(source)
            after[str(source.id)] = source.as_dict()
        return before, after
