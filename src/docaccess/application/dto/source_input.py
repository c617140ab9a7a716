"""Input DTO and parsing for permission source mutations."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from docaccess.domain.exceptions import ValidationError
from docaccess.domain.value_objects import Action, SourceKind, TriState, get_template


def parse_permissions(raw: Mapping[str, object]) -> dict[Action, TriState]:
    """Parse {action: value}; unknown actions raise InvalidAction."""
    return {Action.parse(str(k)): TriState.parse(v) for k, v in raw.items()}


@dataclass
class SourceCreateInput:
    """New source request; ``template`` is used when ``permissions`` is empty."""

    kind: str
    subject_ref: str
    priority: int
    permissions: dict[str, object] = field(default_factory=dict)
    template: str | None = None
    name: str = ""
    active: bool = True

    def parsed_kind(self) -> SourceKind:
        try:
            kind = SourceKind(self.kind)
        except ValueError:
            raise ValidationError(f"Invalid source kind: {self.kind!r}") from None
        if kind is SourceKind.INHERITED:
            raise ValidationError("Inherited sources are derived and cannot be created")
        return kind

    def parsed_priority(self) -> int:
        if isinstance(self.priority, bool) or not isinstance(self.priority, int):
            raise ValidationError("Priority must be an integer")
        if self.priority < 0:
            raise ValidationError("Priority must be >= 0")
        return self.priority

    def parsed_permissions(self) -> dict[Action, TriState]:
        if self.permissions:
            return parse_permissions(self.permissions)
        if self.template:
            return get_template(self.template).permissions()
        return {}
