"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from docaccess.application.use_cases.conflicts.list_conflicts import ListConflictsUseCase
from docaccess.application.use_cases.conflicts.resolve_conflict import ResolveConflictUseCase
from docaccess.application.use_cases.hierarchy.move_resource import (
    MoveResourcesUseCase,
    MoveResourceUseCase,
)
from docaccess.application.use_cases.hierarchy.register_resource import (
    RegisterResourceUseCase,
)
from docaccess.application.use_cases.hierarchy.remove_resource import RemoveResourceUseCase
from docaccess.application.use_cases.inheritance.get_ancestor_chain import (
    GetAncestorChainUseCase,
)
from docaccess.application.use_cases.resolution.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from docaccess.application.use_cases.resolution.simulate_permissions import (
    SimulatePermissionsUseCase,
)
from docaccess.application.use_cases.sources.add_source import AddSourceUseCase
from docaccess.application.use_cases.sources.edit_source import (
    DeleteSourceUseCase,
    SetSourceActiveUseCase,
    UpdateSourcePermissionUseCase,
)
from docaccess.domain.value_objects import RoleConflictPolicy
from docaccess.interfaces.api.app import ApiResources, create_app
from docaccess.interfaces.api.middleware.auth import RequestUser
from docaccess.interfaces.api.resources.conflicts import (
    ConflictResolveResource,
    ConflictsResource,
)
from docaccess.interfaces.api.resources.health import HealthResource
from docaccess.interfaces.api.resources.permissions import (
    EffectivePermissionsResource,
    SimulateResource,
)
from docaccess.interfaces.api.resources.resources import (
    AncestorsResource,
    BulkMoveResource,
    MoveResource,
    ResourceResource,
    ResourcesResource,
)
from docaccess.interfaces.api.resources.sources import ResourceSourcesResource, SourceResource
from docaccess.interfaces.api.resources.templates import TemplatesResource

TEST_USER = "test-user-1"


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing; None simulates a bad token."""

    def __init__(self, holder: dict) -> None:
        self._holder = holder

    async def process_request(self, req, resp):
        req.context.user = self._holder["user"]


@pytest.fixture
def auth() -> dict:
    """Mutable holder for the request user."""
    return {"user": RequestUser(user_id=TEST_USER)}


@pytest.fixture
def app(auth, uow_factory, directory, cache, locks, mock_permission_checker):
    """Falcon ASGI app wired to in-memory fakes."""
    policy = RoleConflictPolicy.MOST_PERMISSIVE
    effective = GetEffectivePermissionsUseCase(uow_factory, directory, cache, max_depth=64)
    move_resources = MoveResourcesUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        locks=locks,
        cache=cache,
        max_depth=64,
    )
    source_deps = dict(
        unit_of_work_factory=uow_factory,
        permission_checker=mock_permission_checker,
        locks=locks,
        cache=cache,
    )
    resources = ApiResources(
        effective_permissions=EffectivePermissionsResource(effective, mock_permission_checker),
        simulate=SimulateResource(
            SimulatePermissionsUseCase(uow_factory, directory, policy, max_depth=64),
            mock_permission_checker,
        ),
        resources=ResourcesResource(
            RegisterResourceUseCase(uow_factory, mock_permission_checker, locks)
        ),
        resource=ResourceResource(
            RemoveResourceUseCase(uow_factory, mock_permission_checker, locks, cache)
        ),
        move=MoveResource(MoveResourceUseCase(move_resources)),
        bulk_move=BulkMoveResource(move_resources),
        ancestors=AncestorsResource(
            GetAncestorChainUseCase(uow_factory, max_depth=64), mock_permission_checker
        ),
        sources=ResourceSourcesResource(
            uow_factory, mock_permission_checker, AddSourceUseCase(**source_deps)
        ),
        source=SourceResource(
            SetSourceActiveUseCase(**source_deps),
            UpdateSourcePermissionUseCase(**source_deps),
            DeleteSourceUseCase(**source_deps),
        ),
        conflicts=ConflictsResource(
            ListConflictsUseCase(uow_factory, directory, cache, policy, max_depth=64),
            mock_permission_checker,
        ),
        conflict_resolve=ConflictResolveResource(
            ResolveConflictUseCase(
                uow_factory, directory, mock_permission_checker, locks, cache, policy, 64
            )
        ),
        templates=TemplatesResource(),
        health=HealthResource(),
    )
    return create_app(resources, middleware=[AuthBypassMiddleware(auth)])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
