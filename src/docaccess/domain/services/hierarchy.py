"""Hierarchy validation - the single gate for structural moves."""

from collections.abc import Sequence
from uuid import UUID

from docaccess.domain.entities import ResourceNode
from docaccess.domain.exceptions import CycleDetected, HierarchyCorrupted, NotAFolder, SelfParent


def ensure_bounded(chain: Sequence[ResourceNode], resource_id: UUID, max_depth: int) -> None:
    """Raise HierarchyCorrupted if an ancestor walk ran past max_depth."""
    if len(chain) > max_depth:
        raise HierarchyCorrupted(
            f"Ancestor chain of {resource_id} exceeds depth bound {max_depth}"
        )


def validate_move(
    node: ResourceNode,
    new_parent: ResourceNode | None,
    new_parent_ancestors: Sequence[ResourceNode],
) -> None:
    """Check that node may move under new_parent (None moves it to the root level).

    new_parent_ancestors is new_parent's ancestor chain, nearest first.
    """
    if new_parent is None:
        return
    if new_parent.id == node.id:
        raise SelfParent(node.id)
    if any(a.id == node.id for a in new_parent_ancestors):
        raise CycleDetected(node.id, new_parent.id)
    if not new_parent.is_folder:
        raise NotAFolder(node.id, new_parent.id)


def apply_move(
    node: ResourceNode,
    old_parent: ResourceNode | None,
    new_parent: ResourceNode | None,
) -> None:
    """Re-link node in memory; callers persist all three nodes together."""
    if old_parent is not None:
        old_parent.children.discard(node.id)
    if new_parent is not None:
        new_parent.children.add(node.id)
    node.parent_id = new_parent.id if new_parent is not None else None
