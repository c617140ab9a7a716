"""Resolution algorithm - combine permission sources into one decision.

Pure functions over a source list; no I/O and no hidden state, so the same
input always yields the same EffectivePermission.

Order of evaluation for one action:

1. Sources that are inactive or Unspecified for the action are discarded.
2. Nothing left: default deny, no winner.
3. A direct Deny wins outright, whatever the priority of any Allow.
4. Otherwise the first source in resolution order wins: priority descending,
   then kind (direct, role, group, inherited), then id ascending.
5. Non-winning sources with a different value are recorded as conflicting.
"""

from collections.abc import Iterable, Sequence

from docaccess.domain.entities import EffectivePermission, PermissionSource, SourceContribution
from docaccess.domain.value_objects import Action, SourceKind, TriState

DEFAULT_DENY = "default deny — no source specifies this permission"
EXPLICIT_DENY = "explicit deny overrides all other sources"


def resolution_order_key(source: PermissionSource) -> tuple:
    """Sort key: highest priority first, ties by kind rank then id.

    Inherited sources at the same level keep their ancestor's ordering
    (origin kind, origin priority) ahead of the id.
    """
    origin_kind = source.origin_kind or source.kind
    origin_priority = source.origin_priority if source.origin_priority is not None else source.priority
    return (-source.priority, source.kind.rank, origin_kind.rank, -origin_priority, source.id)


def specified_sources(action: Action, sources: Iterable[PermissionSource]) -> list[PermissionSource]:
    """Active sources opining on action, in resolution order."""
    return sorted(
        (s for s in sources if s.active and s.value_for(action).specified),
        key=resolution_order_key,
    )


def resolve(action: Action, sources: Sequence[PermissionSource]) -> EffectivePermission:
    """Resolve one action. Never raises."""
    ordered = specified_sources(action, sources)
    if not ordered:
        return EffectivePermission(
            action=action,
            granted=False,
            winning_source_id=None,
            contributing_sources=[],
            explanation=DEFAULT_DENY,
        )

    explicit_deny = next(
        (
            s
            for s in ordered
            if s.kind is SourceKind.DIRECT and s.value_for(action) is TriState.DENY
        ),
        None,
    )
    winner = explicit_deny or ordered[0]
    winning_value = winner.value_for(action)
    conflicting = [s for s in ordered if s.value_for(action) != winning_value]

    if explicit_deny is not None:
        explanation = EXPLICIT_DENY
    elif conflicting:
        explanation = (
            f"resolved by priority: {winner.display_name} (priority {winner.priority}) "
            f"overrides {len(conflicting)} conflicting source(s): "
            + ", ".join(s.display_name for s in conflicting)
        )
    else:
        verb = "granted" if winning_value is TriState.ALLOW else "denied"
        explanation = f"{verb} by {winner.display_name} (priority {winner.priority})"

    return EffectivePermission(
        action=action,
        granted=winning_value is TriState.ALLOW,
        winning_source_id=winner.id,
        contributing_sources=[
            SourceContribution(source=s, value=s.value_for(action), is_winner=s is winner)
            for s in ordered
        ],
        explanation=explanation,
        conflicting_source_ids=[s.id for s in conflicting],
    )


def resolve_all(
    sources: Sequence[PermissionSource],
    actions: Iterable[Action] = tuple(Action),
) -> list[EffectivePermission]:
    """Resolve every action, in action order."""
    return [resolve(action, sources) for action in actions]
