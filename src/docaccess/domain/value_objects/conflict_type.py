"""Conflict classification enums."""

from enum import StrEnum


class ConflictType(StrEnum):
    """Kinds of disagreement between permission sources."""

    DENY_OVERRIDES_ALLOW = "deny_overrides_allow"
    ROLE_CONFLICT = "role_conflict"
    INHERITANCE_CONFLICT = "inheritance_conflict"


class Severity(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ConflictStatus(StrEnum):
    OPEN = "open"
    RESOLVED = "resolved"
    SUPPRESSED = "suppressed"


class ResolutionMode(StrEnum):
    """How an administrator closes a conflict."""

    ACCEPT_RECOMMENDATION = "accept_recommendation"
    MANUAL = "manual"


class RoleConflictPolicy(StrEnum):
    """Recommended outcome when role or group sources disagree."""

    MOST_PERMISSIVE = "most_permissive"
    MOST_RESTRICTIVE = "most_restrictive"
