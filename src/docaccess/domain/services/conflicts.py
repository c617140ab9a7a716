"""Conflict detection - classify disagreements between sources."""

from collections.abc import Iterable, Mapping, Sequence
from uuid import UUID

from docaccess.domain.entities import Conflict, ConflictResolution, ConflictSourceRef, PermissionSource
from docaccess.domain.services.resolution import specified_sources
from docaccess.domain.value_objects import (
    Action,
    ConflictId,
    ConflictStatus,
    ConflictType,
    RoleConflictPolicy,
    Severity,
    SourceKind,
    TriState,
)


def _names(sources: Iterable[PermissionSource]) -> str:
    return ", ".join(s.display_name for s in sources)


def _will(value: TriState) -> str:
    return "will have" if value is TriState.ALLOW else "will not have"


def classify(
    subject_id: str,
    resource_id: UUID,
    action: Action,
    sources: Sequence[PermissionSource],
    policy: RoleConflictPolicy = RoleConflictPolicy.MOST_PERMISSIVE,
) -> Conflict | None:
    """Build the conflict for one action, or None when the sources agree."""
    specified = specified_sources(action, sources)
    if len({s.value_for(action) for s in specified}) < 2:
        return None

    local = [s for s in specified if not s.is_inherited]
    inherited = [s for s in specified if s.is_inherited]
    direct_denies = [
        s for s in local if s.kind is SourceKind.DIRECT and s.value_for(action) is TriState.DENY
    ]
    local_allows = [s for s in local if s.value_for(action) is TriState.ALLOW]

    if direct_denies and local_allows:
        conflict_type = ConflictType.DENY_OVERRIDES_ALLOW
        severity = Severity.HIGH
        auto = True
        recommended = TriState.DENY
        description = (
            f"{subject_id} has an explicit deny for '{action}' but "
            f"{_names(local_allows)} allow it"
        )
        recommendation = (
            "Explicit deny should override role and group allows. "
            f"{subject_id} {_will(recommended)} {action} permission."
        )
    elif len({s.value_for(action) for s in local}) > 1:
        conflict_type = ConflictType.ROLE_CONFLICT
        severity = Severity.MEDIUM
        auto = True
        if policy is RoleConflictPolicy.MOST_PERMISSIVE:
            recommended = TriState.ALLOW
            rule = "Grant most permissive access when roles conflict."
        else:
            recommended = TriState.DENY
            rule = "Apply most restrictive access when roles conflict."
        description = f"{subject_id} has conflicting '{action}' values from {_names(local)}"
        recommendation = f"{rule} {subject_id} {_will(recommended)} {action} permission."
    else:
        conflict_type = ConflictType.INHERITANCE_CONFLICT
        severity = Severity.LOW
        auto = False
        recommended = (local or inherited)[0].value_for(action)
        if local:
            description = (
                f"Resource-level '{action}' for {subject_id} differs from inherited "
                f"values ({_names(inherited)})"
            )
        else:
            description = (
                f"Inherited '{action}' values for {subject_id} disagree across ancestors"
            )
        recommendation = (
            "Resource-level settings override inherited ones. "
            f"{subject_id} {_will(recommended)} {action} permission."
        )

    return Conflict(
        id=ConflictId.derive(subject_id, resource_id, action, (s.id for s in specified)).value,
        type=conflict_type,
        severity=severity,
        description=description,
        resource_id=resource_id,
        affected_subjects=[subject_id],
        affected_actions=[action],
        sources=[
            ConflictSourceRef(
                id=s.id,
                name=s.display_name,
                kind=s.kind,
                action=action,
                value=s.value_for(action),
                resource_id=s.origin_resource_id or s.resource_id,
            )
            for s in specified
        ],
        recommendation=recommendation,
        recommended_value=recommended,
        auto_resolvable=auto,
    )


def detect_conflicts(
    subject_id: str,
    resource_id: UUID,
    sources: Sequence[PermissionSource],
    policy: RoleConflictPolicy = RoleConflictPolicy.MOST_PERMISSIVE,
    actions: Iterable[Action] = tuple(Action),
) -> list[Conflict]:
    """One conflict per disagreeing action, in action order."""
    found = []
    for action in actions:
        conflict = classify(subject_id, resource_id, action, sources, policy)
        if conflict is not None:
            found.append(conflict)
    return found


def apply_decisions(
    conflicts: Iterable[Conflict],
    decisions: Mapping[UUID, ConflictResolution],
) -> list[Conflict]:
    """Overlay stored decisions; a decision only applies to the same conflict type."""
    result = []
    for conflict in conflicts:
        decision = decisions.get(conflict.id)
        if decision is not None and decision.conflict_type is conflict.type:
            conflict.status = decision.status
            conflict.resolution_reason = decision.reason
        else:
            conflict.status = ConflictStatus.OPEN
        result.append(conflict)
    return result
