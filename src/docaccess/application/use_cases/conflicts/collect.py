"""Helpers shared by conflict listing, resolution and simulation."""

from docaccess.application.dto.resource_snapshot import ResourceSnapshot
from docaccess.application.ports import SubjectDirectory
from docaccess.domain.entities import Conflict, Subject, SubjectKind
from docaccess.domain.services import detect_conflicts
from docaccess.domain.value_objects import RoleConflictPolicy


async def bound_subjects(directory: SubjectDirectory, snapshot: ResourceSnapshot) -> list[Subject]:
    """Every user, role and group bound by a source at or above the resource.

    Users come first, sorted by id, followed by the roles and groups named
    by sources, sorted by ref.
    """
    users, roles, groups = snapshot.bound_refs()
    found = {
        s.id: s
        for s in await directory.list_bound(sorted(users), sorted(roles), sorted(groups))
    }
    for user in users:
        found.setdefault(user, Subject(id=user))
    principals = [Subject(id=r, kind=SubjectKind.ROLE) for r in roles]
    principals += [Subject(id=g, kind=SubjectKind.GROUP) for g in groups]
    return [found[k] for k in sorted(found)] + sorted(principals, key=lambda s: s.ref)


def collect_conflicts(
    snapshot: ResourceSnapshot,
    subjects: list[Subject],
    policy: RoleConflictPolicy,
) -> list[Conflict]:
    """Detect conflicts for each subject over the snapshot's sources."""
    sources = snapshot.all_sources()
    found = []
    for subject in subjects:
        bound = [s for s in sources if subject.is_bound_by(s)]
        found.extend(detect_conflicts(subject.ref, snapshot.node.id, bound, policy))
    return found
