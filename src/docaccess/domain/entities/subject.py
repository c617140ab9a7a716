"""Subject entity - user, role, or group that can hold permissions."""

from dataclasses import dataclass, field
from enum import StrEnum

from docaccess.domain.entities.permission_source import PermissionSource
from docaccess.domain.exceptions import ValidationError
from docaccess.domain.value_objects import SourceKind


class SubjectKind(StrEnum):
    USER = "user"
    ROLE = "role"
    GROUP = "group"

    @classmethod
    def parse(cls, value: object) -> "SubjectKind":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Invalid subject kind: {value!r}") from None


@dataclass(frozen=True)
class Subject:
    """Subject with the role and group memberships supplied by identity.

    A role or group subject stands for the role or group itself, so it is
    bound by sources naming it and carries no memberships of its own.
    """

    id: str
    kind: SubjectKind = SubjectKind.USER
    roles: frozenset[str] = field(default_factory=frozenset)
    groups: frozenset[str] = field(default_factory=frozenset)

    def is_bound_by(self, source: PermissionSource) -> bool:
        """True when the source applies to this subject."""
        kind = source.binding_kind
        ref = source.subject_ref
        if kind is SourceKind.DIRECT:
            return self.kind is SubjectKind.USER and ref == self.id
        if kind is SourceKind.ROLE:
            return ref in self.roles or (self.kind is SubjectKind.ROLE and ref == self.id)
        if kind is SourceKind.GROUP:
            return ref in self.groups or (self.kind is SubjectKind.GROUP and ref == self.id)
        return False

    @property
    def ref(self) -> str:
        """Users by id; roles and groups prefixed with their kind ("role:editors")."""
        if self.kind is SubjectKind.USER:
            return self.id
        return f"{self.kind.value}:{self.id}"

    @property
    def cache_key(self) -> tuple:
        return (self.id, self.kind.value, tuple(sorted(self.roles)), tuple(sorted(self.groups)))
