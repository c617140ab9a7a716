"""List conflicts use case."""

from uuid import UUID

from docaccess.application.cache import ResolutionCache
from docaccess.application.dto.resource_snapshot import load_snapshot
from docaccess.application.ports import SubjectDirectory
from docaccess.application.use_cases.conflicts.collect import bound_subjects, collect_conflicts
from docaccess.application.use_cases.resolution.get_effective_permissions import lookup_subject
from docaccess.domain.entities import Conflict, SubjectKind
from docaccess.domain.services import apply_decisions
from docaccess.domain.value_objects import RoleConflictPolicy


class ListConflictsUseCase:
    """Detect conflicts on a resource, overlaid with stored decisions.

    Detection is recomputed from current sources on every call (or served
    from the cache), so repeated runs yield the same ids and never duplicate.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        subject_directory: SubjectDirectory,
        cache: ResolutionCache,
        policy: RoleConflictPolicy,
        max_depth: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._directory = subject_directory
        self._cache = cache
        self._policy = policy
        self._max_depth = max_depth

    async def execute(
        self,
        resource_id: UUID,
        subject_id: str | None = None,
        subject_kind: SubjectKind | str = SubjectKind.USER,
    ) -> list[Conflict]:
        """Conflicts for one subject, or for every bound subject when omitted."""
        subject = (
            await lookup_subject(self._directory, subject_id, subject_kind) if subject_id else None
        )
        key = ("conflicts", subject.cache_key) if subject else None
        if key is not None:
            cached = self._cache.get(resource_id, key)
            if cached is not None:
                return cached

        generation = self._cache.generation
        async with self._uow_factory(read_only=True) as uow:
            snapshot = await load_snapshot(uow, resource_id, self._max_depth)
            decisions = await uow.conflicts.list_by_resource(resource_id)

        subjects = [subject] if subject else await bound_subjects(self._directory, snapshot)
        result = apply_decisions(collect_conflicts(snapshot, subjects, self._policy), decisions)
        if key is not None:
            self._cache.put(resource_id, key, result, generation)
        return result
