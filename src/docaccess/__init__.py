"""Permission resolution and conflict engine for document management."""

__version__ = "0.1.0"
