"""Pytest fixtures for docaccess tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
from docaccess.domain.entities import (
    AuditEntry,
    ConflictResolution,
    PermissionSource,
    ResourceNode,
    Subject,
)
from docaccess.domain.value_objects import Action, ResourceKind, SourceKind, TriState


def perms(**values: str) -> dict[Action, TriState]:
    """perms(view="allow", edit="deny") -> permission map."""
    return {Action(a): TriState(v) for a, v in values.items()}


def make_source(
    kind: SourceKind | str,
    subject_ref: str,
    priority: int,
    permissions: dict[Action, TriState],
    resource_id: UUID | None = None,
    active: bool = True,
    source_id: UUID | None = None,
    name: str = "",
) -> PermissionSource:
    return PermissionSource(
        id=source_id or uuid4(),
        resource_id=resource_id or uuid4(),
        subject_ref=subject_ref,
        kind=SourceKind(kind),
        priority=priority,
        permissions=permissions,
        active=active,
        name=name,
        created_at=datetime.now(UTC),
    )


# --- In-memory committed state ---


class FakeStore:
    """Committed state shared by every unit of work a factory hands out."""

    def __init__(self) -> None:
        self.nodes: dict[UUID, ResourceNode] = {}
        self.sources: dict[UUID, PermissionSource] = {}
        self.decisions: dict[UUID, ConflictResolution] = {}
        self.audit: list[AuditEntry] = []
        self.read_only_calls = 0
        self.write_calls = 0

    def add_node(
        self,
        kind: ResourceKind | str = ResourceKind.FOLDER,
        parent: ResourceNode | None = None,
        name: str = "",
        node_id: UUID | None = None,
    ) -> ResourceNode:
        node = ResourceNode(
            id=node_id or uuid4(),
            kind=ResourceKind(kind),
            parent_id=parent.id if parent else None,
            name=name,
            created_at=datetime.now(UTC),
        )
        self.nodes[node.id] = node
        return node

    def add_source(
        self,
        resource: ResourceNode,
        kind: SourceKind | str,
        subject_ref: str,
        priority: int,
        permissions: dict[Action, TriState],
        active: bool = True,
        source_id: UUID | None = None,
        name: str = "",
    ) -> PermissionSource:
        source = make_source(
            kind,
            subject_ref,
            priority,
            permissions,
            resource_id=resource.id,
            active=active,
            source_id=source_id,
            name=name,
        )
        self.sources[source.id] = source
        return source

    def parent_of(self, node: ResourceNode) -> UUID | None:
        return self.nodes[node.id].parent_id


# --- Fake repositories ---


class FakeResourceRepository:
    """In-memory resource repository; children are derived from parent_id."""

    def __init__(self, nodes: dict[UUID, ResourceNode]) -> None:
        self._nodes = nodes
        self.locked: list[UUID] = []

    def _copy(self, node: ResourceNode) -> ResourceNode:
        children = {n.id for n in self._nodes.values() if n.parent_id == node.id}
        return replace(node, children=children)

    async def get_by_id(self, resource_id: UUID) -> ResourceNode | None:
        node = self._nodes.get(resource_id)
        return self._copy(node) if node else None

    async def get_ancestors(self, resource_id: UUID, limit: int) -> list[ResourceNode]:
        chain: list[ResourceNode] = []
        current = self._nodes.get(resource_id)
        while current and current.parent_id is not None and len(chain) < limit:
            current = self._nodes.get(current.parent_id)
            if current is None:
                break
            chain.append(self._copy(current))
        return chain

    async def list_descendant_ids(self, resource_id: UUID) -> list[UUID]:
        found: set[UUID] = set()
        frontier = [resource_id]
        while frontier:
            parent = frontier.pop()
            for n in self._nodes.values():
                if n.parent_id == parent and n.id not in found and n.id != resource_id:
                    found.add(n.id)
                    frontier.append(n.id)
        return sorted(found)

    async def lock(self, resource_ids: Sequence[UUID]) -> None:
        self.locked.extend(resource_ids)

    async def create(self, node: ResourceNode) -> ResourceNode:
        self._nodes[node.id] = replace(node, children=set())
        return node

    async def update_parent(self, node: ResourceNode) -> None:
        self._nodes[node.id] = replace(self._nodes[node.id], parent_id=node.parent_id)

    async def delete(self, resource_id: UUID) -> None:
        self._nodes.pop(resource_id, None)


class FakeSourceRepository:
    """In-memory source repository; hands out copies like a real database would."""

    def __init__(self, sources: dict[UUID, PermissionSource]) -> None:
        self._sources = sources

    async def get_by_id(self, source_id: UUID) -> PermissionSource | None:
        source = self._sources.get(source_id)
        return source.copy() if source else None

    async def list_by_resource(self, resource_id: UUID) -> list[PermissionSource]:
        return sorted(
            (s.copy() for s in self._sources.values() if s.resource_id == resource_id),
            key=lambda s: s.id,
        )

    async def list_by_resources(
        self, resource_ids: Sequence[UUID]
    ) -> dict[UUID, list[PermissionSource]]:
        return {i: await self.list_by_resource(i) for i in resource_ids}

    async def create(self, source: PermissionSource) -> PermissionSource:
        self._sources[source.id] = source.copy()
        return source

    async def update(self, source: PermissionSource) -> None:
        self._sources[source.id] = source.copy()

    async def delete(self, source_id: UUID) -> None:
        self._sources.pop(source_id, None)

    async def delete_by_resource(self, resource_id: UUID) -> None:
        for source_id in [s.id for s in self._sources.values() if s.resource_id == resource_id]:
            del self._sources[source_id]


class FakeConflictRepository:
    """In-memory conflict decision repository."""

    def __init__(self, decisions: dict[UUID, ConflictResolution]) -> None:
        self._decisions = decisions

    async def get(self, conflict_id: UUID) -> ConflictResolution | None:
        return self._decisions.get(conflict_id)

    async def list_by_resource(self, resource_id: UUID) -> dict[UUID, ConflictResolution]:
        return {k: d for k, d in self._decisions.items() if d.resource_id == resource_id}

    async def save(self, decision: ConflictResolution) -> None:
        self._decisions[decision.conflict_id] = decision


class FakeAuditLog:
    """In-memory audit log."""

    def __init__(self, entries: list[AuditEntry]) -> None:
        self.entries = entries

    async def append(self, entry: AuditEntry) -> None:
        self.entries.append(entry)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """Works on a private copy of the store; commit publishes it."""

    def __init__(self, store: FakeStore | None = None, read_only: bool = False) -> None:
        self._store = store or FakeStore()
        self.read_only = read_only
        self._nodes = {k: replace(v) for k, v in self._store.nodes.items()}
        self._sources = {k: v.copy() for k, v in self._store.sources.items()}
        self._decisions = dict(self._store.decisions)
        self._audit = list(self._store.audit)
        self.resources = FakeResourceRepository(self._nodes)
        self.sources = FakeSourceRepository(self._sources)
        self.conflicts = FakeConflictRepository(self._decisions)
        self.audit = FakeAuditLog(self._audit)

    async def commit(self) -> None:
        if self.read_only:
            return
        self._store.nodes = self._nodes
        self._store.sources = self._sources
        self._store.decisions = self._decisions
        self._store.audit = self._audit

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: FakeStore):
    """Factory like the Postgres one: commit on success, discard on exception."""

    @asynccontextmanager
    async def factory(read_only: bool = False) -> AsyncIterator[FakeUnitOfWork]:
        if read_only:
            store.read_only_calls += 1
        else:
            store.write_calls += 1
        uow = FakeUnitOfWork(store, read_only=read_only)
        yield uow
        await uow.commit()

    return factory


# --- Fake subject directory ---


class FakeSubjectDirectory:
    """In-memory identity collaborator."""

    def __init__(self, subjects: Iterable[Subject] = ()) -> None:
        self._subjects = {s.id: s for s in subjects}

    def add(self, subject_id: str, roles: Iterable[str] = (), groups: Iterable[str] = ()) -> Subject:
        subject = Subject(id=subject_id, roles=frozenset(roles), groups=frozenset(groups))
        self._subjects[subject_id] = subject
        return subject

    async def get(self, subject_id: str) -> Subject | None:
        return self._subjects.get(subject_id)

    async def list_bound(
        self,
        users: Iterable[str],
        roles: Iterable[str],
        groups: Iterable[str],
    ) -> list[Subject]:
        roles, groups = set(roles), set(groups)
        found = {u: self._subjects.get(u) or Subject(id=u) for u in users}
        for s in self._subjects.values():
            if s.roles & roles or s.groups & groups:
                found[s.id] = s
        return [found[k] for k in sorted(found)]


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    """Fresh in-memory committed state for each test."""
    return FakeStore()


@pytest.fixture
def uow_factory(store):
    """Factory returning async context manager with FakeUnitOfWork."""
    return make_uow_factory(store)


@pytest.fixture
def directory() -> FakeSubjectDirectory:
    return FakeSubjectDirectory()


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache(enabled=True)


@pytest.fixture
def locks() -> WriterLocks:
    return WriterLocks()


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock
