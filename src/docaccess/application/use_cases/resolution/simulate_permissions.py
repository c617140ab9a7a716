"""Simulate permissions use case - what-if evaluation on a private copy."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID, uuid4

from docaccess.application.dto.resource_snapshot import SourceOverride
from docaccess.application.dto.source_input import SourceCreateInput
from docaccess.application.ports import SubjectDirectory
from docaccess.application.use_cases.conflicts.collect import collect_conflicts
from docaccess.application.use_cases.resolution.get_effective_permissions import (
    lookup_subject,
    read_snapshot,
)
from docaccess.domain.entities import (
    Conflict,
    EffectivePermission,
    PermissionSource,
    SubjectKind,
)
from docaccess.domain.services import resolve_all
from docaccess.domain.value_objects import RoleConflictPolicy


@dataclass
class SimulationResult:
    subject_id: str
    subject_kind: SubjectKind
    resource_id: UUID
    effective: list[EffectivePermission]
    conflicts: list[Conflict]


class SimulatePermissionsUseCase:
    """Resolve against a copy-on-write snapshot with hypothetical edits.

    Stored sources and the resolution cache are never touched.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        subject_directory: SubjectDirectory,
        policy: RoleConflictPolicy,
        max_depth: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._directory = subject_directory
        self._policy = policy
        self._max_depth = max_depth

    async def execute(
        self,
        subject_id: str,
        resource_id: UUID,
        overrides: list[SourceOverride],
        extra_sources: list[SourceCreateInput] | None = None,
        subject_kind: SubjectKind | str = SubjectKind.USER,
    ) -> SimulationResult:
        subject = await lookup_subject(self._directory, subject_id, subject_kind)
        snapshot = await read_snapshot(self._uow_factory, resource_id, self._max_depth)
        hypothetical = [
            PermissionSource(
                id=uuid4(),
                resource_id=resource_id,
                subject_ref=extra.subject_ref,
                kind=extra.parsed_kind(),
                priority=extra.parsed_priority(),
                permissions=extra.parsed_permissions(),
                active=extra.active,
                name=extra.name or "simulated",
                created_at=datetime.now(UTC),
            )
            for extra in extra_sources or []
        ]
        simulated = snapshot.with_overrides(overrides, hypothetical)
        return SimulationResult(
            subject_id=subject.id,
            subject_kind=subject.kind,
            resource_id=resource_id,
            effective=resolve_all(simulated.sources_for(subject)),
            conflicts=collect_conflicts(simulated, [subject], self._policy),
        )
