"""Permission source kinds."""

from enum import StrEnum


class SourceKind(StrEnum):
    """Where a permission assertion comes from."""

    DIRECT = "direct"
    ROLE = "role"
    GROUP = "group"
    INHERITED = "inherited"

    @property
    def rank(self) -> int:
        """Tie-break order: direct > role > group > inherited (lower ranks first)."""
        return _RANKS[self]


_RANKS = {
    SourceKind.DIRECT: 0,
    SourceKind.ROLE: 1,
    SourceKind.GROUP: 2,
    SourceKind.INHERITED: 3,
}
