"""Application entry point and composition root."""

import structlog

from docaccess import __version__
from docaccess.application.cache import ResolutionCache
from docaccess.application.concurrency import WriterLocks
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
from docaccess.config import get_settings
from docaccess.infrastructure.auth.keycloak_provider import KeycloakProvider
from docaccess.infrastructure.permission.permission_checker import EnginePermissionChecker
from docaccess.infrastructure.persistence.postgres.connection import create_pool, ping
from docaccess.infrastructure.persistence.postgres.subject_directory import (
    PostgresSubjectDirectory,
)
from docaccess.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from docaccess.interfaces.api.app import ApiResources, create_app
from docaccess.interfaces.api.middleware.auth import AuthMiddleware
from docaccess.interfaces.api.middleware.cors import CORSMiddleware
from docaccess.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from docaccess.logging_setup import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """CLI entry point - run the API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("starting", version=__version__, environment=settings.environment)
    uvicorn.run(create_docaccess_app(), host=settings.host, port=settings.port)


def create_docaccess_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    subject_directory = PostgresSubjectDirectory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )

    max_depth = settings.max_hierarchy_depth
    policy = settings.role_conflict_policy
    cache = ResolutionCache(
        enabled=settings.cache_enabled,
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
    )
    locks = WriterLocks()

    get_effective = GetEffectivePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        subject_directory=subject_directory,
        cache=cache,
        max_depth=max_depth,
    )
    permission_checker = EnginePermissionChecker(
        get_effective, bootstrap_admins=settings.bootstrap_admin_list
    )

    simulate = SimulatePermissionsUseCase(
        unit_of_work_factory=uow_factory,
        subject_directory=subject_directory,
        policy=policy,
        max_depth=max_depth,
    )
    move_resources = MoveResourcesUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        locks=locks,
        cache=cache,
        max_depth=max_depth,
    )
    register_resource = RegisterResourceUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        locks=locks,
    )
    remove_resource = RemoveResourceUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        locks=locks,
        cache=cache,
    )
    source_deps = dict(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        locks=locks,
        cache=cache,
    )
    list_conflicts = ListConflictsUseCase(
        unit_of_work_factory=uow_factory,
        subject_directory=subject_directory,
        cache=cache,
        policy=policy,
        max_depth=max_depth,
    )
    resolve_conflict = ResolveConflictUseCase(
        unit_of_work_factory=uow_factory,
        subject_directory=subject_directory,
        permission_checker=permission_checker,
        locks=locks,
        cache=cache,
        policy=policy,
        max_depth=max_depth,
    )
    ancestor_chain = GetAncestorChainUseCase(
        unit_of_work_factory=uow_factory,
        max_depth=max_depth,
    )

    resources = ApiResources(
        effective_permissions=EffectivePermissionsResource(get_effective, permission_checker),
        simulate=SimulateResource(simulate, permission_checker),
        resources=ResourcesResource(register_resource),
        resource=ResourceResource(remove_resource),
        move=MoveResource(MoveResourceUseCase(move_resources)),
        bulk_move=BulkMoveResource(move_resources),
        ancestors=AncestorsResource(ancestor_chain, permission_checker),
        sources=ResourceSourcesResource(
            uow_factory, permission_checker, AddSourceUseCase(**source_deps)
        ),
        source=SourceResource(
            SetSourceActiveUseCase(**source_deps),
            UpdateSourcePermissionUseCase(**source_deps),
            DeleteSourceUseCase(**source_deps),
        ),
        conflicts=ConflictsResource(list_conflicts, permission_checker),
        conflict_resolve=ConflictResolveResource(resolve_conflict),
        templates=TemplatesResource(),
        health=HealthResource(database_ready=lambda: ping(pool)),
    )

    return create_app(
        resources,
        middleware=[
            CORSMiddleware(settings.cors_origin_list),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
