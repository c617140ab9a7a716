"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from docaccess.domain.exceptions import DocAccessError
from docaccess.interfaces.api.errors import handle_docaccess_error, handle_unexpected_error
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


@dataclass
class ApiResources:
    """Every routed resource, built by the composition root."""

    effective_permissions: EffectivePermissionsResource
    simulate: SimulateResource
    resources: ResourcesResource
    resource: ResourceResource
    move: MoveResource
    bulk_move: BulkMoveResource
    ancestors: AncestorsResource
    sources: ResourceSourcesResource
    source: SourceResource
    conflicts: ConflictsResource
    conflict_resolve: ConflictResolveResource
    templates: TemplatesResource
    health: HealthResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(DocAccessError, handle_docaccess_error)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/templates", resources.templates)
    app.add_route("/v1/resources", resources.resources)
    # Static segment; registered before the templated route for clarity.
    app.add_route("/v1/resources/move", resources.bulk_move)
    app.add_route("/v1/resources/{resource_id}", resources.resource)
    app.add_route("/v1/resources/{resource_id}/move", resources.move)
    app.add_route("/v1/resources/{resource_id}/ancestors", resources.ancestors)
    app.add_route(
        "/v1/resources/{resource_id}/effective-permissions", resources.effective_permissions
    )
    app.add_route("/v1/resources/{resource_id}/simulate", resources.simulate)
    app.add_route("/v1/resources/{resource_id}/sources", resources.sources)
    app.add_route("/v1/sources/{source_id}", resources.source)
    app.add_route("/v1/resources/{resource_id}/conflicts", resources.conflicts)
    app.add_route(
        "/v1/resources/{resource_id}/conflicts/{conflict_id}/resolve",
        resources.conflict_resolve,
    )
    return app
