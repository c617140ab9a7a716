"""Unit tests for the resolution algorithm."""

from uuid import UUID

from docaccess.domain.services import DEFAULT_DENY, EXPLICIT_DENY, resolve, resolve_all
from docaccess.domain.services.inheritance import inherit
from docaccess.domain.value_objects import Action, SourceKind, TriState

from tests.conftest import make_source, perms

LOW_ID = UUID("00000000-0000-0000-0000-000000000001")
HIGH_ID = UUID("00000000-0000-0000-0000-000000000002")


def test_default_deny_without_sources() -> None:
    result = resolve(Action.VIEW, [])
    assert result.granted is False
    assert result.winning_source_id is None
    assert result.explanation == DEFAULT_DENY


def test_default_deny_when_all_unspecified() -> None:
    sources = [
        make_source("role", "viewers", 50, perms(view="unspecified")),
        make_source("group", "team", 10, perms(edit="allow")),
    ]
    result = resolve(Action.VIEW, sources)
    assert result.granted is False
    assert result.winning_source_id is None
    assert result.contributing_sources == []


def test_inactive_sources_are_ignored() -> None:
    sources = [make_source("direct", "alice", 10, perms(view="allow"), active=False)]
    assert resolve(Action.VIEW, sources).granted is False


def test_explicit_deny_beats_higher_priority_allow() -> None:
    deny = make_source("direct", "alice", 1, perms(edit="deny"))
    allows = [
        make_source("role", "editors", 1000, perms(edit="allow")),
        make_source("group", "team", 500, perms(edit="allow")),
        make_source("direct", "alice", 900, perms(edit="allow")),
    ]
    result = resolve(Action.EDIT, [*allows, deny])
    assert result.granted is False
    assert result.winning_source_id == deny.id
    assert result.explanation == EXPLICIT_DENY
    assert set(result.conflicting_source_ids) == {s.id for s in allows}


def test_priority_ordering_role_over_group() -> None:
    role = make_source("role", "editors", 50, perms(share="allow"))
    group = make_source("group", "team", 30, perms(share="deny"))
    result = resolve(Action.SHARE, [group, role])
    assert result.granted is True
    assert result.winning_source_id == role.id
    assert result.conflicting_source_ids == [group.id]
    assert "resolved by priority" in result.explanation


def test_equal_priority_ties_break_on_kind() -> None:
    group = make_source("group", "team", 50, perms(view="deny"), source_id=LOW_ID)
    role = make_source("role", "viewers", 50, perms(view="allow"), source_id=HIGH_ID)
    result = resolve(Action.VIEW, [group, role])
    assert result.winning_source_id == role.id
    assert result.granted is True


def test_equal_priority_and_kind_ties_break_on_id() -> None:
    a = make_source("role", "a", 50, perms(share="allow"), source_id=LOW_ID)
    b = make_source("role", "b", 50, perms(share="deny"), source_id=HIGH_ID)
    assert resolve(Action.SHARE, [b, a]).winning_source_id == LOW_ID
    assert resolve(Action.SHARE, [a, b]).winning_source_id == LOW_ID


def test_resolution_is_deterministic() -> None:
    sources = [
        make_source("role", "a", 50, perms(edit="allow")),
        make_source("group", "b", 50, perms(edit="deny")),
        make_source("direct", "c", 10, perms(edit="allow")),
    ]
    first = resolve(Action.EDIT, sources)
    second = resolve(Action.EDIT, list(reversed(sources)))
    assert (first.granted, first.winning_source_id) == (second.granted, second.winning_source_id)
    assert first == resolve(Action.EDIT, sources)


def test_contributions_are_in_resolution_order_with_one_winner() -> None:
    sources = [
        make_source("group", "team", 10, perms(view="allow")),
        make_source("role", "viewers", 70, perms(view="allow")),
    ]
    result = resolve(Action.VIEW, sources)
    priorities = [c.source.priority for c in result.contributing_sources]
    assert priorities == [70, 10]
    assert [c.is_winner for c in result.contributing_sources] == [True, False]
    assert result.winner.source.priority == 70
    assert not result.has_conflict
    assert result.explanation.startswith("granted by")


def test_inherited_never_outranks_resource_level_source() -> None:
    ancestor_allow = make_source("direct", "alice", 10_000, perms(view="allow"))
    inherited = inherit(ancestor_allow, LOW_ID, depth=0)
    local = make_source("group", "team", 0, perms(view="deny"), resource_id=LOW_ID)
    result = resolve(Action.VIEW, [inherited, local])
    assert result.winning_source_id == local.id
    assert result.granted is False


def test_inherited_direct_deny_is_not_an_explicit_deny() -> None:
    ancestor_deny = make_source("direct", "alice", 100, perms(edit="deny"))
    inherited = inherit(ancestor_deny, LOW_ID, depth=0)
    local = make_source("role", "editors", 0, perms(edit="allow"), resource_id=LOW_ID)
    result = resolve(Action.EDIT, [inherited, local])
    assert result.granted is True
    assert result.explanation != EXPLICIT_DENY


def test_resolve_all_returns_every_action_in_order() -> None:
    results = resolve_all([make_source("role", "viewers", 1, perms(view="allow"))])
    assert [r.action for r in results] == list(Action)
    assert [r.action for r in results if r.granted] == [Action.VIEW]


def test_deny_wins_by_priority_when_not_direct() -> None:
    role = make_source("role", "blocked", 80, perms(comment="deny"))
    group = make_source("group", "team", 20, perms(comment="allow"))
    result = resolve(Action.COMMENT, [role, group])
    assert result.granted is False
    assert result.winning_source_id == role.id
    assert result.contributing_sources[0].value is TriState.DENY
    assert result.contributing_sources[0].source.kind is SourceKind.ROLE
