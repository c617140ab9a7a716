"""Get effective permissions use case."""

from uuid import UUID

import structlog

from docaccess.application.cache import ResolutionCache
from docaccess.application.dto.resource_snapshot import ResourceSnapshot, load_snapshot
from docaccess.application.ports import SubjectDirectory
from docaccess.domain.entities import EffectivePermission, Subject, SubjectKind
from docaccess.domain.exceptions import HierarchyCorrupted
from docaccess.domain.services import resolve_all

logger = structlog.get_logger()


async def lookup_subject(
    directory: SubjectDirectory,
    subject_id: str,
    subject_kind: SubjectKind | str = SubjectKind.USER,
) -> Subject:
    """Users come with memberships (unknown ids are bare users); roles and groups stand alone."""
    kind = SubjectKind.parse(subject_kind)
    if kind is not SubjectKind.USER:
        return Subject(id=subject_id, kind=kind)
    subject = await directory.get(subject_id)
    return subject or Subject(id=subject_id)


async def read_snapshot(uow_factory: type, resource_id: UUID, max_depth: int) -> ResourceSnapshot:
    """Load a read-only snapshot, logging a broken hierarchy loudly."""
    try:
        async with uow_factory(read_only=True) as uow:
            return await load_snapshot(uow, resource_id, max_depth)
    except HierarchyCorrupted:
        logger.error("hierarchy_corrupted", resource_id=str(resource_id), max_depth=max_depth)
        raise


class GetEffectivePermissionsUseCase:
    """Resolve every action for (subject, resource) from the current sources."""

    def __init__(
        self,
        unit_of_work_factory: type,
        subject_directory: SubjectDirectory,
        cache: ResolutionCache,
        max_depth: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._directory = subject_directory
        self._cache = cache
        self._max_depth = max_depth

    async def execute(
        self,
        subject_id: str,
        resource_id: UUID,
        subject_kind: SubjectKind | str = SubjectKind.USER,
    ) -> list[EffectivePermission]:
        """One EffectivePermission per action, in action order."""
        subject = await lookup_subject(self._directory, subject_id, subject_kind)
        key = ("effective", subject.cache_key)
        cached = self._cache.get(resource_id, key)
        if cached is not None:
            return cached

        generation = self._cache.generation
        snapshot = await read_snapshot(self._uow_factory, resource_id, self._max_depth)
        result = resolve_all(snapshot.sources_for(subject))
        self._cache.put(resource_id, key, result, generation)
        return result
