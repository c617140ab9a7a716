"""Audit entry - one mutation handed to the audit subsystem."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class AuditEntry:
    """Immutable record of a mutation with before/after values."""

    id: UUID
    action: str
    actor: str
    resource_id: UUID | None
    target_id: UUID | None
    created_at: datetime
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None
    reason: str | None = None

    @classmethod
    def record(
        cls,
        action: str,
        actor: str,
        resource_id: UUID | None,
        target_id: UUID | None = None,
        before: dict[str, Any] | None = None,
        after: dict[str, Any] | None = None,
        reason: str | None = None,
    ) -> "AuditEntry":
        """New entry stamped now."""
        return cls(
            id=uuid4(),
            action=action,
            actor=actor,
            resource_id=resource_id,
            target_id=target_id,
            created_at=datetime.now(UTC),
            before=before,
            after=after,
            reason=reason,
        )
