"""Tri-state permission value."""

from enum import StrEnum

from docaccess.domain.exceptions import ValidationError


class TriState(StrEnum):
    """Allow, Deny, or Unspecified (source does not opine)."""

    ALLOW = "allow"
    DENY = "deny"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: object) -> "TriState":
        """Accept tri-state names and the bool/None form used by admin UIs."""
        if value is True:
            return cls.ALLOW
        if value is False:
            return cls.DENY
        if value is None:
            return cls.UNSPECIFIED
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValidationError(f"Invalid permission value: {value!r}") from None

    @property
    def specified(self) -> bool:
        return self is not TriState.UNSPECIFIED
