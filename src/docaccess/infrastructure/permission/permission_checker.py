"""Permission checker implementation - asks the resolution engine itself."""

from collections.abc import Iterable
from uuid import UUID

import structlog

from docaccess.application.use_cases.resolution.get_effective_permissions import (
    GetEffectivePermissionsUseCase,
)
from docaccess.domain.value_objects import Action

logger = structlog.get_logger()


class EnginePermissionChecker:
    """Checks an actor's effective permission on a resource.

    Bootstrap admins pass every check so that a fresh deployment, where no
    source grants manage yet, can be administered at all.
    """

    def __init__(
        self,
        effective_permissions: GetEffectivePermissionsUseCase,
        bootstrap_admins: Iterable[str] = (),
    ) -> None:
        self._effective = effective_permissions
        self._bootstrap_admins = frozenset(bootstrap_admins)

    async def check(self, user_id: str, resource_id: UUID, action: Action) -> bool:
        """Check if user has action on resource.

        An unknown resource raises NotFound rather than reporting a denial.
        """
        if user_id in self._bootstrap_admins:
            return True
        effective = await self._effective.execute(user_id, resource_id)
        granted = any(p.granted for p in effective if p.action is action)
        if not granted:
            logger.debug(
                "permission_check_denied",
                user_id=user_id,
                resource_id=str(resource_id),
                action=action.value,
            )
        return granted
