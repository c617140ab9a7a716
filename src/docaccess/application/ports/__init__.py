"""Application ports - interfaces for external adapters."""

from docaccess.application.ports.permission_checker import PermissionChecker
from docaccess.application.ports.subject_directory import SubjectDirectory
from docaccess.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "SubjectDirectory",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
