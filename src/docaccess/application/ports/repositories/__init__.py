"""Repository ports."""

from docaccess.application.ports.repositories.audit_log import AuditLog
from docaccess.application.ports.repositories.conflict_repository import (
    ConflictRepository,
)
from docaccess.application.ports.repositories.resource_repository import (
    ResourceRepository,
)
from docaccess.application.ports.repositories.source_repository import SourceRepository

__all__ = [
    "AuditLog",
    "ConflictRepository",
    "ResourceRepository",
    "SourceRepository",
]
