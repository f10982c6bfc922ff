"""
Virtual tree package.

Node types, binary detection and the resolver that walks a tree into an
archive.
"""

from .nodes import Directory, Leaf, Provider, VirtualNode, as_node
from .classifier import BinaryClassifier, encode_content, get_extension
from .resolver import TreeResolver

__all__ = [
    "Directory",
    "Leaf",
    "Provider",
    "VirtualNode",
    "as_node",
    "BinaryClassifier",
    "encode_content",
    "get_extension",
    "TreeResolver",
]
