"""Get ancestor chain use case - inheritance visualization."""

from uuid import UUID

from docaccess.application.use_cases.resolution.get_effective_permissions import read_snapshot
from docaccess.domain.services import AncestorLevel


class GetAncestorChainUseCase:
    """Ancestors of a resource with the inherited sources each one contributes."""

    def __init__(self, unit_of_work_factory: type, max_depth: int) -> None:
        self._uow_factory = unit_of_work_factory
        self._max_depth = max_depth

    async def execute(self, resource_id: UUID) -> list[AncestorLevel]:
        """Nearest ancestor first."""
        snapshot = await read_snapshot(self._uow_factory, resource_id, self._max_depth)
        return snapshot.levels()
