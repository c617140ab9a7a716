"""Stable conflict identifier."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID, uuid5

# Fixed namespace; changing it changes every conflict id.
CONFLICT_NAMESPACE = UUID("6f1c2a4e-8d0b-5b7e-9a43-2c5d1e7f9b10")


@dataclass(frozen=True)
class ConflictId:
    """Hash of (subject, resource, action) plus the sorted source-id set."""

    value: UUID

    @classmethod
    def derive(
        cls,
        subject_id: str,
        resource_id: UUID,
        action: str,
        source_ids: Iterable[UUID],
    ) -> "ConflictId":
        ids = ",".join(sorted(str(s) for s in source_ids))
        return cls(uuid5(CONFLICT_NAMESPACE, f"{subject_id}|{resource_id}|{action}|{ids}"))
