"""Permission checker port - access check for administrative operations."""

from typing import Protocol
from uuid import UUID

from docaccess.domain.value_objects import Action


class PermissionChecker(Protocol):
    """Port for checking an actor's effective permission on a resource."""

    async def check(self, user_id: str, resource_id: UUID, action: Action) -> bool: ...
