"""
treezip error hierarchy.

All treezip-specific errors inherit from TreeZipError for easy catching.
"""

from typing import Optional


class TreeZipError(Exception):
    """Base error for all treezip operations."""


class ConfigError(TreeZipError):
    """Invalid or missing configuration."""


class InvalidNodeError(ConfigError):
    """A value cannot be used as a virtual tree node."""


class ExportError(TreeZipError):
    """Error while producing or saving an archive."""


class ResolutionError(ExportError):
    """A content provider failed while the tree was being resolved."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SerializationError(ExportError):
    """The archive container could not be written."""


class SaveError(ExportError):
    """The serialized archive could not be saved."""
