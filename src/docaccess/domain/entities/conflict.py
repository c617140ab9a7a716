"""Conflict entities - detected disagreements and stored decisions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from docaccess.domain.value_objects import (
    Action,
    ConflictStatus,
    ConflictType,
    ResolutionMode,
    Severity,
    SourceKind,
    TriState,
)


@dataclass(frozen=True)
class ConflictSourceRef:
    """Source taking part in a conflict, with the value it asserts."""

    id: UUID
    name: str
    kind: SourceKind
    action: Action
    value: TriState
    resource_id: UUID | None = None


@dataclass
class Conflict:
    """Disagreement among sources for one (subject, resource, action)."""

    id: UUID
    type: ConflictType
    severity: Severity
    description: str
    resource_id: UUID
    affected_subjects: list[str]
    affected_actions: list[Action]
    sources: list[ConflictSourceRef]
    recommendation: str
    recommended_value: TriState
    auto_resolvable: bool
    status: ConflictStatus = ConflictStatus.OPEN
    resolution_reason: str | None = None

    def losing_sources(self) -> list[ConflictSourceRef]:
        """Non-inherited sources whose value differs from the recommendation."""
        return [
            s
            for s in self.sources
            if s.kind is not SourceKind.INHERITED and s.value != self.recommended_value
        ]


@dataclass
class ConflictResolution:
    """Administrator decision on a conflict, recorded with a reason."""

    conflict_id: UUID
    conflict_type: ConflictType
    resource_id: UUID
    status: ConflictStatus
    mode: ResolutionMode
    resolved_by: str
    resolved_at: datetime
    reason: str | None = None
    source_ids: list[UUID] = field(default_factory=list)
