"""Audit log port - the audit subsystem's intake."""

from typing import Protocol

from docaccess.domain.entities import AuditEntry


class AuditLog(Protocol):
    """Receives one entry per mutation, inside the mutation's transaction."""

    async def append(self, entry: AuditEntry) -> None: ...
