"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from docaccess.application.ports.repositories.audit_log import AuditLog
from docaccess.application.ports.repositories.conflict_repository import (
    ConflictRepository,
)
from docaccess.application.ports.repositories.resource_repository import (
    ResourceRepository,
)
from docaccess.application.ports.repositories.source_repository import SourceRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def resources(self) -> ResourceRepository: ...

    @property
    def sources(self) -> SourceRepository: ...

    @property
    def conflicts(self) -> ConflictRepository: ...

    @property
    def audit(self) -> AuditLog: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances.

    ``read_only=True`` asks for a consistent snapshot that never blocks writers.
    """

    def __call__(self, read_only: bool = False) -> AsyncIterator[UnitOfWork]: ...
