"""Subject directory port - identity collaborator supplying memberships."""

from collections.abc import Iterable
from typing import Protocol

from docaccess.domain.entities import Subject


class SubjectDirectory(Protocol):
    """Resolves subjects and their role/group memberships."""

    async def get(self, subject_id: str) -> Subject | None: ...

    async def list_bound(
        self,
        users: Iterable[str],
        roles: Iterable[str],
        groups: Iterable[str],
    ) -> list[Subject]:
        """Users that are named directly or hold one of the roles/groups."""
        ...
