"""Read snapshot of one resource, its ancestors and every source feeding it."""

from dataclasses import dataclass, field
from uuid import UUID

from docaccess.application.ports import UnitOfWork
from docaccess.domain.entities import PermissionSource, ResourceNode, Subject
from docaccess.domain.exceptions import NotFound
from docaccess.domain.services import AncestorLevel, ancestor_chain, ensure_bounded
from docaccess.domain.value_objects import Action, SourceKind, TriState


@dataclass(frozen=True)
class SourceOverride:
    """What-if edit of a stored source (None leaves a field unchanged)."""

    source_id: UUID
    active: bool | None = None
    permissions: dict[Action, TriState] = field(default_factory=dict)


@dataclass
class ResourceSnapshot:
    """Immutable view used by resolution; simulation works on copies."""

    node: ResourceNode
    ancestors: list[ResourceNode]
    sources_by_resource: dict[UUID, list[PermissionSource]]
    max_depth: int

    @property
    def own_sources(self) -> list[PermissionSource]:
        return list(self.sources_by_resource.get(self.node.id, []))

    def levels(self) -> list[AncestorLevel]:
        return ancestor_chain(
            self.node.id, self.ancestors, self.sources_by_resource, self.max_depth
        )

    def all_sources(self) -> list[PermissionSource]:
        """Own sources followed by inherited ones, nearest ancestor first."""
        inherited = [s for level in self.levels() for s in level.sources]
        return self.own_sources + inherited

    def sources_for(self, subject: Subject) -> list[PermissionSource]:
        return [s for s in self.all_sources() if subject.is_bound_by(s)]

    def bound_refs(self) -> tuple[set[str], set[str], set[str]]:
        """Users, roles and groups named by any source feeding this resource."""
        users: set[str] = set()
        roles: set[str] = set()
        groups: set[str] = set()
        by_kind = {SourceKind.DIRECT: users, SourceKind.ROLE: roles, SourceKind.GROUP: groups}
        for sources in self.sources_by_resource.values():
            for s in sources:
                by_kind[s.binding_kind].add(s.subject_ref)
        return users, roles, groups

    def with_overrides(
        self,
        overrides: list[SourceOverride],
        extra_sources: list[PermissionSource] | None = None,
    ) -> "ResourceSnapshot":
        """Copy-on-write snapshot with overrides applied; self is untouched."""
        by_id = {o.source_id: o for o in overrides}
        copied: dict[UUID, list[PermissionSource]] = {}
        for resource_id, sources in self.sources_by_resource.items():
            copied[resource_id] = []
            for s in sources:
                override = by_id.get(s.id)
                if override is None:
                    copied[resource_id].append(s)
                    continue
                c = s.copy()
                if override.active is not None:
                    c.active = override.active
                c.permissions.update(override.permissions)
                copied[resource_id].append(c)
        for extra in extra_sources or []:
            copied.setdefault(extra.resource_id, []).append(extra)
        return ResourceSnapshot(
            node=self.node,
            ancestors=self.ancestors,
            sources_by_resource=copied,
            max_depth=self.max_depth,
        )


async def load_snapshot(uow: UnitOfWork, resource_id: UUID, max_depth: int) -> ResourceSnapshot:
    """Load node, ancestor chain and sources within one unit of work."""
    node = await uow.resources.get_by_id(resource_id)
    if not node:
        raise NotFound("Resource", resource_id)
    # One past the bound so a runaway chain is detected rather than truncated.
    ancestors = await uow.resources.get_ancestors(resource_id, max_depth + 1)
    ensure_bounded(ancestors, resource_id, max_depth)
    by_resource = await uow.sources.list_by_resources(
        [resource_id, *(a.id for a in ancestors)]
    )
    return ResourceSnapshot(
        node=node,
        ancestors=ancestors,
        sources_by_resource=by_resource,
        max_depth=max_depth,
    )
