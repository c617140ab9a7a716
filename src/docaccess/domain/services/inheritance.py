"""Inheritance propagation - derive inherited sources from ancestors."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID, uuid5

from docaccess.domain.entities import PermissionSource, ResourceNode
from docaccess.domain.services.hierarchy import ensure_bounded
from docaccess.domain.services.resolution import resolution_order_key
from docaccess.domain.value_objects import SourceKind

# Stored priorities are validated >= 0, so every inherited priority sits below them.
INHERITED_CEILING = 0

INHERITED_NAMESPACE = UUID("3b9e2f61-0c4d-5a8f-b7e2-91d4c6a05e38")


@dataclass(frozen=True)
class AncestorLevel:
    """One ancestor and the inherited sources it contributes."""

    depth: int
    node: ResourceNode
    sources: list[PermissionSource]


def inherited_priority(depth: int) -> int:
    """Priority of a source inherited from an ancestor at depth (0 = parent)."""
    return INHERITED_CEILING - 1 - depth


def inherited_source_id(origin_source_id: UUID, resource_id: UUID) -> UUID:
    return uuid5(INHERITED_NAMESPACE, f"{origin_source_id}:{resource_id}")


def inherit(source: PermissionSource, resource_id: UUID, depth: int) -> PermissionSource:
    """Wrap an ancestor's own source as an inherited source of resource_id."""
    return PermissionSource(
        id=inherited_source_id(source.id, resource_id),
        resource_id=resource_id,
        subject_ref=source.subject_ref,
        kind=SourceKind.INHERITED,
        priority=inherited_priority(depth),
        permissions=dict(source.permissions),
        active=source.active,
        name=source.name,
        created_at=source.created_at,
        created_by=source.created_by,
        origin_kind=source.kind,
        origin_source_id=source.id,
        origin_resource_id=source.resource_id,
        origin_priority=source.priority,
        depth=depth,
    )


def ancestor_chain(
    resource_id: UUID,
    ancestors: Sequence[ResourceNode],
    sources_by_resource: Mapping[UUID, Sequence[PermissionSource]],
    max_depth: int,
) -> list[AncestorLevel]:
    """Inherited sources grouped per ancestor, nearest ancestor first.

    Only each ancestor's own direct/role/group sources are used; inherited
    values are never re-derived from already-derived ones.
    """
    ensure_bounded(ancestors, resource_id, max_depth)
    levels = []
    for depth, ancestor in enumerate(ancestors):
        own = sorted(
            (s for s in sources_by_resource.get(ancestor.id, ()) if not s.is_inherited),
            key=resolution_order_key,
        )
        levels.append(
            AncestorLevel(
                depth=depth,
                node=ancestor,
                sources=[inherit(s, resource_id, depth) for s in own],
            )
        )
    return levels


def ancestor_sources(
    resource_id: UUID,
    ancestors: Sequence[ResourceNode],
    sources_by_resource: Mapping[UUID, Sequence[PermissionSource]],
    max_depth: int,
) -> list[PermissionSource]:
    """Flat list of inherited sources, nearest ancestor first."""
    return [
        s
        for level in ancestor_chain(resource_id, ancestors, sources_by_resource, max_depth)
        for s in level.sources
    ]
