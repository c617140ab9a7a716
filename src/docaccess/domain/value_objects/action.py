"""Actions a subject can be granted on a resource."""

from enum import StrEnum

from docaccess.domain.exceptions import InvalidAction


class Action(StrEnum):
    """Closed set of actions resolved per resource."""

    VIEW = "view"
    EDIT = "edit"
    SHARE = "share"
    DELETE = "delete"
    COMMENT = "comment"
    MANAGE = "manage"

    @classmethod
    def parse(cls, name: str) -> "Action":
        """Parse action name, raising InvalidAction for unknown names."""
        try:
            return cls(name)
        except ValueError:
            raise InvalidAction(name) from None
