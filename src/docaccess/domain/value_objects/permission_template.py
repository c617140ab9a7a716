"""Built-in permission templates for new sources."""

from dataclasses import dataclass

from docaccess.domain.exceptions import NotFound
from docaccess.domain.value_objects.action import Action
from docaccess.domain.value_objects.tri_state import TriState


@dataclass(frozen=True)
class PermissionTemplate:
    """Named, reusable permission map."""

    name: str
    description: str
    allowed: frozenset[Action]

    def permissions(self) -> dict[Action, TriState]:
        """Full map: listed actions allowed, the rest denied."""
        return {
            a: TriState.ALLOW if a in self.allowed else TriState.DENY for a in Action
        }


TEMPLATES: dict[str, PermissionTemplate] = {
    t.name: t
    for t in (
        PermissionTemplate(
            name="owner",
            description="Full control including permission management",
            allowed=frozenset(Action),
        ),
        PermissionTemplate(
            name="editor",
            description="Can view, edit, comment and share",
            allowed=frozenset({Action.VIEW, Action.EDIT, Action.COMMENT, Action.SHARE}),
        ),
        PermissionTemplate(
            name="commenter",
            description="Can view and comment",
            allowed=frozenset({Action.VIEW, Action.COMMENT}),
        ),
        PermissionTemplate(
            name="viewer",
            description="Can only view",
            allowed=frozenset({Action.VIEW}),
        ),
    )
}


def get_template(name: str) -> PermissionTemplate:
    """Look up a template by name."""
    template = TEMPLATES.get(name)
    if template is None:
        raise NotFound("Template", name)
    return template
