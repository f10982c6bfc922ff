"""
Virtual tree resolver.

Walks a virtual tree depth first, settles providers against the editor
context and writes every leaf into an archive sink. Children are resolved
one after another so archive order always follows the tree order.
"""

from typing import Any, List, Optional, Protocol, Union

from treezip.constants import DEFAULT_MAX_PROVIDER_DEPTH, DEFAULT_ROOT_LEAF_NAME
from treezip.errors import ResolutionError
from treezip.logging import get_logger, log_file_entry
from .classifier import BinaryClassifier
from .nodes import Directory, Leaf, Provider, VirtualNode, as_node


class ArchiveSink(Protocol):
    """Operations the resolver needs from an archive"""

    def add_file(self, path: str, content: Union[str, bytes], is_binary: bool) -> Any:
        """Store a file and return the entry, which exposes its stored ``size``"""

    def add_folder(self, name: str) -> "ArchiveSink":
        ...


def join_path(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


class TreeResolver:
    """Turns a virtual tree into archive entries"""

    def __init__(
        self,
        classifier: Optional[BinaryClassifier] = None,
        max_provider_depth: int = DEFAULT_MAX_PROVIDER_DEPTH,
    ):
        self.classifier = classifier or BinaryClassifier()
        self.max_provider_depth = max_provider_depth
        self.logger = get_logger("treezip.tree.resolver")

    async def settle(
        self, node: VirtualNode, context: Any, path: str = ""
    ) -> Union[Leaf, Directory]:
        """
        Replace providers with their results until a leaf or directory remains.

        Args:
            node: Node to settle
            context: Editor context handed to providers
            path: Archive path of the node, used in error messages

        Returns:
            The settled Leaf or Directory

        Raises:
            ResolutionError: If a provider fails, returns something that is
                not a node, or keeps returning providers
        """
        depth = 0
        while isinstance(node, Provider):
            if depth >= self.max_provider_depth:
                raise ResolutionError(
                    f"Provider chain for '{path or '/'}' did not settle "
                    f"after {depth} steps",
                    path=path,
                )
            try:
                node = as_node(await node.invoke(context))
            except ResolutionError:
                raise
            except Exception as e:
                raise ResolutionError(
                    f"Provider for '{path or '/'}' failed: {e}", path=path
                ) from e
            depth += 1
        return node

    async def resolve(self, node: VirtualNode, context: Any, sink: ArchiveSink) -> None:
        """
        Resolve a tree into an archive sink.

        A root that settles to a single leaf is written as ``index.html``.

        Args:
            node: Root of the virtual tree
            context: Editor context handed to providers
            sink: Archive scope receiving the files

        Raises:
            ResolutionError: If any provider fails; entries written before
                the failure stay in the sink
        """
        root = await self.settle(as_node(node), context)
        if isinstance(root, Leaf):
            self._write_leaf(sink, DEFAULT_ROOT_LEAF_NAME, DEFAULT_ROOT_LEAF_NAME, root)
        else:
            await self._resolve_directory(root, context, sink, "")

    async def _resolve_directory(
        self, directory: Directory, context: Any, sink: ArchiveSink, path: str
    ) -> None:
        for name, child in directory.entries.items():
            child_path = join_path(path, name)
            settled = await self.settle(child, context, child_path)
            if isinstance(settled, Leaf):
                self._write_leaf(sink, name, child_path, settled)
            elif isinstance(settled, Directory):
                self.logger.debug(f"Entering folder {child_path} ({len(settled)} entries)")
                await self._resolve_directory(
                    settled, context, sink.add_folder(name), child_path
                )
            else:
                raise ResolutionError(
                    f"Entry '{child_path}' is not a tree node: {type(settled).__name__}",
                    path=child_path,
                )

    def _write_leaf(self, sink: ArchiveSink, name: str, path: str, leaf: Leaf) -> None:
        content = leaf.content
        if isinstance(content, bytes):
            is_binary = True
        else:
            is_binary = self.classifier.classify(name, content)

        entry = sink.add_file(name, content, is_binary)
        log_file_entry(path, entry.size, is_binary, content=content)

    async def collect(self, node: VirtualNode, context: Any) -> List[Any]:
        """
        Resolve a tree into a fresh in-memory archive and return its entries.

        Args:
            node: Root of the virtual tree
            context: Editor context handed to providers

        Returns:
            List of ArchiveEntry in archive order
        """
        from treezip.archive.builder import ArchiveBuilder

        builder = ArchiveBuilder()
        await self.resolve(node, context, builder)
        return builder.entries
