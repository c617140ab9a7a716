"""Permission source entity - one assertion of rights on a resource."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from docaccess.domain.value_objects import Action, SourceKind, TriState


@dataclass
class PermissionSource:
    """Direct, role, group or inherited source with a partial permission map.

    Inherited sources are derived on demand from an ancestor's own sources and
    are never persisted; the ``origin_*`` fields and ``depth`` describe where
    they came from.
    """

    id: UUID
    resource_id: UUID
    subject_ref: str
    kind: SourceKind
    priority: int
    permissions: dict[Action, TriState] = field(default_factory=dict)
    active: bool = True
    name: str = ""
    created_at: datetime | None = None
    created_by: str | None = None
    origin_kind: SourceKind | None = None
    origin_source_id: UUID | None = None
    origin_resource_id: UUID | None = None
    origin_priority: int | None = None
    depth: int | None = None

    def value_for(self, action: Action) -> TriState:
        """Value this source asserts for action (Unspecified when absent)."""
        return self.permissions.get(action, TriState.UNSPECIFIED)

    @property
    def is_inherited(self) -> bool:
        return self.kind is SourceKind.INHERITED

    @property
    def binding_kind(self) -> SourceKind:
        """Kind used to decide which subjects the source binds to."""
        return self.origin_kind if self.is_inherited and self.origin_kind else self.kind

    @property
    def display_name(self) -> str:
        return self.name or f"{self.kind.value}:{self.subject_ref}"

    def as_dict(self) -> dict:
        """Plain values for audit before/after records."""
        return {
            "id": str(self.id),
            "resource_id": str(self.resource_id),
            "subject_ref": self.subject_ref,
            "kind": self.kind.value,
            "priority": self.priority,
            "active": self.active,
            "permissions": {a.value: v.value for a, v in sorted(self.permissions.items())},
        }

    def copy(self) -> "PermissionSource":
        """Independent copy (permission map included) for what-if edits."""
        return replace(self, permissions=dict(self.permissions))
