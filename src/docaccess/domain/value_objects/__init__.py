"""Domain value objects."""

from docaccess.domain.value_objects.action import Action
from docaccess.domain.value_objects.conflict_id import ConflictId
from docaccess.domain.value_objects.conflict_type import (
    ConflictStatus,
    ConflictType,
    ResolutionMode,
    RoleConflictPolicy,
    Severity,
)
from docaccess.domain.value_objects.permission_template import (
    TEMPLATES,
    PermissionTemplate,
    get_template,
)
from docaccess.domain.value_objects.resource_kind import ResourceKind
from docaccess.domain.value_objects.source_kind import SourceKind
from docaccess.domain.value_objects.tri_state import TriState

__all__ = [
    "TEMPLATES",
    "Action",
    "ConflictId",
    "ConflictStatus",
    "ConflictType",
    "PermissionTemplate",
    "ResolutionMode",
    "ResourceKind",
    "RoleConflictPolicy",
    "Severity",
    "SourceKind",
    "TriState",
    "get_template",
]
