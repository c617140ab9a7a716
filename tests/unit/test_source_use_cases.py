"""Unit tests for source registry use cases."""

from uuid import uuid4

import pytest

from docaccess.application.dto.source_input import SourceCreateInput
from docaccess.application.use_cases.sources.add_source import AddSourceUseCase
from docaccess.application.use_cases.sources.edit_source import (
    DeleteSourceUseCase,
    SetSourceActiveUseCase,
    UpdateSourcePermissionUseCase,
)
from docaccess.domain.exceptions import (
    InvalidAction,
    NotFound,
    PermissionDenied,
    SourceNotFound,
    ValidationError,
)
from docaccess.domain.value_objects import Action, ResourceKind, SourceKind, TriState

from tests.conftest import FakeAuditLog, perms


@pytest.fixture
def deps(uow_factory, mock_permission_checker, locks, cache):
    return dict(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        locks=locks,
        cache=cache,
    )


@pytest.mark.asyncio
async def test_add_source_with_explicit_permissions(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    use_case = AddSourceUseCase(**deps)

    source = await use_case.execute(
        "admin",
        doc.id,
        SourceCreateInput(kind="role", subject_ref="editors", priority=50, permissions={"edit": "allow", "view": True}),
    )

    stored = store.sources[source.id]
    assert stored.kind is SourceKind.ROLE
    assert stored.permissions == perms(edit="allow", view="allow")
    assert stored.created_by == "admin"
    [entry] = store.audit
    assert entry.action == "source.created"
    assert entry.after["permissions"] == {"edit": "allow", "view": "allow"}


@pytest.mark.asyncio
async def test_add_source_from_template(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = await AddSourceUseCase(**deps).execute(
        "admin",
        doc.id,
        SourceCreateInput(kind="group", subject_ref="reviewers", priority=10, template="commenter"),
    )
    assert source.permissions[Action.COMMENT] is TriState.ALLOW
    assert source.permissions[Action.EDIT] is TriState.DENY


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "input_data",
    [
        SourceCreateInput(kind="inherited", subject_ref="x", priority=1),
        SourceCreateInput(kind="robot", subject_ref="x", priority=1),
        SourceCreateInput(kind="role", subject_ref="x", priority=-1),
        SourceCreateInput(kind="role", subject_ref="x", priority="high"),
        SourceCreateInput(kind="role", subject_ref="  ", priority=1),
        SourceCreateInput(kind="role", subject_ref="x", priority=1, permissions={"view": "perhaps"}),
    ],
)
async def test_add_source_rejects_invalid_input(store, deps, input_data) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    with pytest.raises(ValidationError):
        await AddSourceUseCase(**deps).execute("admin", doc.id, input_data)
    assert store.sources == {}


@pytest.mark.asyncio
async def test_add_source_unknown_action_rejected(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    with pytest.raises(InvalidAction):
        await AddSourceUseCase(**deps).execute(
            "admin",
            doc.id,
            SourceCreateInput(kind="direct", subject_ref="alice", priority=1, permissions={"print": "allow"}),
        )


@pytest.mark.asyncio
async def test_add_source_to_missing_resource(deps) -> None:
    with pytest.raises(NotFound):
        await AddSourceUseCase(**deps).execute(
            "admin", uuid4(), SourceCreateInput(kind="direct", subject_ref="alice", priority=1)
        )


@pytest.mark.asyncio
async def test_add_source_requires_manage(store, deps, mock_permission_checker) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    mock_permission_checker.check.return_value = False
    with pytest.raises(PermissionDenied):
        await AddSourceUseCase(**deps).execute(
            "bob", doc.id, SourceCreateInput(kind="direct", subject_ref="bob", priority=100, template="owner")
        )
    mock_permission_checker.check.assert_awaited_with("bob", doc.id, Action.MANAGE)


@pytest.mark.asyncio
async def test_set_source_inactive(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "role", "editors", 50, perms(edit="allow"))

    result = await SetSourceActiveUseCase(**deps).execute("admin", source.id, False)

    assert result.active is False
    assert store.sources[source.id].active is False
    [entry] = store.audit
    assert entry.before["active"] is True
    assert entry.after["active"] is False


@pytest.mark.asyncio
async def test_update_permission_value(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "role", "editors", 50, perms(edit="allow"))

    await UpdateSourcePermissionUseCase(**deps).execute("admin", source.id, "edit", "deny")

    assert store.sources[source.id].permissions == perms(edit="deny")


@pytest.mark.asyncio
async def test_failed_audit_write_rolls_back_permission_update(store, deps, monkeypatch) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "role", "editors", 50, perms(edit="allow"))

    async def failing_append(self, entry) -> None:
        raise RuntimeError("audit log unavailable")

    monkeypatch.setattr(FakeAuditLog, "append", failing_append)

    with pytest.raises(RuntimeError):
        await UpdateSourcePermissionUseCase(**deps).execute("admin", source.id, "edit", "deny")

    assert store.sources[source.id].permissions == perms(edit="allow")
    assert store.audit == []


@pytest.mark.asyncio
async def test_update_permission_to_unspecified_removes_entry(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "role", "editors", 50, perms(edit="allow", view="allow"))

    await UpdateSourcePermissionUseCase(**deps).execute("admin", source.id, "edit", None)

    assert store.sources[source.id].permissions == perms(view="allow")


@pytest.mark.asyncio
async def test_update_unknown_source(deps) -> None:
    with pytest.raises(SourceNotFound):
        await UpdateSourcePermissionUseCase(**deps).execute("admin", uuid4(), "edit", "deny")


@pytest.mark.asyncio
async def test_update_unknown_action(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "role", "editors", 50, perms(edit="allow"))
    with pytest.raises(InvalidAction):
        await UpdateSourcePermissionUseCase(**deps).execute("admin", source.id, "fly", "allow")


@pytest.mark.asyncio
async def test_delete_source(store, deps) -> None:
    doc = store.add_node(ResourceKind.DOCUMENT)
    source = store.add_source(doc, "direct", "alice", 10, perms(view="allow"))

    await DeleteSourceUseCase(**deps).execute("admin", source.id)

    assert source.id not in store.sources
    assert store.audit[-1].action == "source.deleted"


@pytest.mark.asyncio
async def test_source_change_invalidates_descendant_cache(store, deps, cache) -> None:
    folder = store.add_node()
    doc = store.add_node(ResourceKind.DOCUMENT, parent=folder)
    source = store.add_source(folder, "role", "viewers", 50, perms(view="allow"))
    cache.put(doc.id, ("effective", "alice"), ["stale"], cache.generation)

    await SetSourceActiveUseCase(**deps).execute("admin", source.id, False)

    assert cache.get(doc.id, ("effective", "alice")) is None
