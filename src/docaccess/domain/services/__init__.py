"""Pure domain services - hierarchy, inheritance, resolution, conflicts."""

from docaccess.domain.services.conflicts import apply_decisions, classify, detect_conflicts
from docaccess.domain.services.hierarchy import apply_move, ensure_bounded, validate_move
from docaccess.domain.services.inheritance import (
    INHERITED_CEILING,
    AncestorLevel,
    ancestor_chain,
    ancestor_sources,
    inherited_priority,
)
from docaccess.domain.services.resolution import (
    DEFAULT_DENY,
    EXPLICIT_DENY,
    resolution_order_key,
    resolve,
    resolve_all,
)

__all__ = [
    "DEFAULT_DENY",
    "EXPLICIT_DENY",
    "INHERITED_CEILING",
    "AncestorLevel",
    "ancestor_chain",
    "ancestor_sources",
    "apply_decisions",
    "apply_move",
    "classify",
    "detect_conflicts",
    "ensure_bounded",
    "inherited_priority",
    "resolution_order_key",
    "resolve",
    "resolve_all",
]
