"""
Virtual tree node types.

A virtual tree describes the layout of an archive before any content is
produced. It is built from three node kinds:

- Leaf: the literal content of one file
- Provider: a deferred computation that receives the editor context and
  returns another node, either directly or through an awaitable
- Directory: an ordered mapping of names to child nodes

Plain Python values (str, bytes, callables, dicts) are accepted at the
configuration boundary and converted with ``as_node``.
"""

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Union

from treezip.errors import InvalidNodeError


@dataclass(frozen=True)
class Leaf:
    """Literal content for a single file"""

    content: Union[str, bytes]


@dataclass(frozen=True)
class Provider:
    """Content computed from the editor context at export time"""

    fn: Callable[[Any], Any]

    async def invoke(self, context: Any) -> Any:
        """
        Call the provider function and wait for its result.

        Args:
            context: Host editor context passed to the function

        Returns:
            The raw value returned (or awaited) from the function
        """
        result = self.fn(context)
        if inspect.isawaitable(result):
            result = await result
        return result


@dataclass(frozen=True)
class Directory:
    """Named grouping of child nodes, one archive folder

    Children given as plain values are converted with ``as_node``.
    """

    entries: Dict[str, "VirtualNode"] = field(default_factory=dict)

    def __post_init__(self):
        entries = {}
        for name, child in self.entries.items():
            entries[validate_segment(name)] = as_node(child)
        object.__setattr__(self, "entries", entries)

    def __len__(self) -> int:
        return len(self.entries)


VirtualNode = Union[Leaf, Provider, Directory]
ProviderFn = Callable[[Any], Union[Any, Awaitable[Any]]]


def validate_segment(name: str) -> str:
    """
    Check that a directory entry name is a single path segment.

    Args:
        name: Entry name

    Returns:
        The name unchanged

    Raises:
        InvalidNodeError: If the name is empty, a dot segment or contains
            a path separator
    """
    if not isinstance(name, str) or not name:
        raise InvalidNodeError(f"Entry names must be non-empty strings, got {name!r}")
    if name in (".", ".."):
        raise InvalidNodeError(f"Entry name {name!r} is not a valid path segment")
    if "/" in name or "\\" in name:
        raise InvalidNodeError(f"Entry name {name!r} must not contain path separators")
    return name


def as_node(value: Any) -> VirtualNode:
    """
    Convert a plain Python value into a virtual tree node.

    Strings and bytes become leaves, mappings become directories (converted
    recursively) and callables become providers. Nodes are returned as is.

    Args:
        value: Value to convert

    Returns:
        VirtualNode: The equivalent node

    Raises:
        InvalidNodeError: If the value has no node equivalent
    """
    if isinstance(value, (Leaf, Provider, Directory)):
        return value
    if isinstance(value, (str, bytes)):
        return Leaf(value)
    if isinstance(value, Mapping):
        return Directory(dict(value))
    if callable(value):
        return Provider(value)
    raise InvalidNodeError(
        f"Cannot use a value of type {type(value).__name__} as a tree node"
    )
