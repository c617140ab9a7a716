"""Resource node kinds."""

from enum import StrEnum


class ResourceKind(StrEnum):
    """Folders contain other nodes; documents are leaves."""

    FOLDER = "folder"
    DOCUMENT = "document"
