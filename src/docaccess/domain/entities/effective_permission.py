"""Effective permission - resolved decision for one action."""

from dataclasses import dataclass, field
from uuid import UUID

from docaccess.domain.entities.permission_source import PermissionSource
from docaccess.domain.value_objects import Action, TriState


@dataclass(frozen=True)
class SourceContribution:
    """One source's value in a resolution, in resolution order."""

    source: PermissionSource
    value: TriState
    is_winner: bool = False


@dataclass(frozen=True)
class EffectivePermission:
    """Outcome of resolution; granted is derived from contributing_sources."""

    action: Action
    granted: bool
    winning_source_id: UUID | None
    contributing_sources: list[SourceContribution] = field(default_factory=list)
    explanation: str = ""
    conflicting_source_ids: list[UUID] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicting_source_ids)

    @property
    def winner(self) -> SourceContribution | None:
        for c in self.contributing_sources:
            if c.is_winner:
                return c
        return None
