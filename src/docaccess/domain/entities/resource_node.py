"""Resource node entity - a folder or document in the hierarchy."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from docaccess.domain.value_objects import ResourceKind


@dataclass
class ResourceNode:
    """Folder or document. parent_id is None only for roots."""

    id: UUID
    kind: ResourceKind
    parent_id: UUID | None = None
    children: set[UUID] = field(default_factory=set)
    name: str = ""
    created_at: datetime | None = None

    @property
    def is_folder(self) -> bool:
        return self.kind is ResourceKind.FOLDER

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
