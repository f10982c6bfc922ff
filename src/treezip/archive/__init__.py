"""
Archive package.

Provides the in-memory ZIP builder the tree resolver writes into.
"""

from .builder import ArchiveBuilder, ArchiveEntry

__all__ = ["ArchiveBuilder", "ArchiveEntry"]
