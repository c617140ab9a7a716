"""Domain entities."""

from docaccess.domain.entities.audit_entry import AuditEntry
from docaccess.domain.entities.conflict import (
    Conflict,
    ConflictResolution,
    ConflictSourceRef,
)
from docaccess.domain.entities.effective_permission import (
    EffectivePermission,
    SourceContribution,
)
from docaccess.domain.entities.permission_source import PermissionSource
from docaccess.domain.entities.resource_node import ResourceNode
from docaccess.domain.entities.subject import Subject, SubjectKind

__all__ = [
    "AuditEntry",
    "Conflict",
    "ConflictResolution",
    "ConflictSourceRef",
    "EffectivePermission",
    "PermissionSource",
    "ResourceNode",
    "SourceContribution",
    "Subject",
    "SubjectKind",
]
