"""Domain exceptions.

Every error carries a stable ``code`` so the API layer can render precise
messages without inspecting exception text.
"""

from uuid import UUID


class DocAccessError(Exception):
    """Base exception for DocAccess."""

    code = "internal_error"


class PermissionDenied(DocAccessError):
    """Actor does not have permission for the requested operation."""

    code = "permission_denied"


class NotFound(DocAccessError):
    """Requested entity was not found."""

    code = "not_found"

    def __init__(self, entity: str, identifier: object = None) -> None:
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            super().__init__(entity)
        else:
            super().__init__(f"{entity} not found: {identifier}")


class SourceNotFound(NotFound):
    code = "source_not_found"

    def __init__(self, source_id: UUID | str) -> None:
        super().__init__("PermissionSource", source_id)


class ConflictNotFound(NotFound):
    code = "conflict_not_found"

    def __init__(self, conflict_id: UUID | str) -> None:
        super().__init__("Conflict", conflict_id)


class ValidationError(DocAccessError):
    """Validation failed for input data."""

    code = "validation_error"


class InvalidAction(ValidationError):
    """Action name is not part of the known action set."""

    code = "invalid_action"

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Unknown action: {action!r}")


class InvalidResolution(ValidationError):
    """Conflict resolution request cannot be applied."""

    code = "invalid_resolution"


class HierarchyViolation(DocAccessError):
    """A structural move would break the resource forest."""

    code = "hierarchy_violation"

    def __init__(self, node_id: UUID, new_parent_id: UUID | None, message: str) -> None:
        self.node_id = node_id
        self.new_parent_id = new_parent_id
        super().__init__(message)


class SelfParent(HierarchyViolation):
    code = "self_parent"

    def __init__(self, node_id: UUID) -> None:
        super().__init__(node_id, node_id, f"Resource {node_id} cannot be its own parent")


class CycleDetected(HierarchyViolation):
    code = "cycle_detected"

    def __init__(self, node_id: UUID, new_parent_id: UUID) -> None:
        super().__init__(
            node_id,
            new_parent_id,
            f"Moving {node_id} under its descendant {new_parent_id} would create a cycle",
        )


class NotAFolder(HierarchyViolation):
    code = "not_a_folder"

    def __init__(self, node_id: UUID, new_parent_id: UUID) -> None:
        super().__init__(node_id, new_parent_id, f"Target {new_parent_id} is not a folder")


class HierarchyCorrupted(DocAccessError):
    """Ancestor walk exceeded the depth bound; the forest invariant is broken."""

    code = "hierarchy_corrupted"
