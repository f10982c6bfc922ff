"""
In-memory ZIP archive builder.

The builder collects entries under relative paths and writes them into a
ZIP container only when ``serialize`` is called. Folder scopes returned by
``add_folder`` share the entry store of the builder that created them.
"""

import io
import time
import zipfile
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from treezip.errors import SerializationError
from treezip.logging import get_logger
from treezip.logging.utils import format_size
from treezip.tree.classifier import encode_content


@dataclass(frozen=True)
class ArchiveEntry:
    """One resolved file of the archive"""

    path: str
    content: Union[str, bytes]
    is_binary: bool

    @property
    def data(self) -> bytes:
        """Bytes stored in the archive for this entry"""
        return encode_content(self.content, self.is_binary)

    @property
    def size(self) -> int:
        return len(self.data)


class _EntryStore:
    """Entries shared by a builder and all of its folder scopes"""

    def __init__(self, compression: int):
        self.compression = compression
        self.entries: "OrderedDict[str, ArchiveEntry]" = OrderedDict()
        self.date_time: Tuple[int, ...] = time.localtime()[:6]
        self.serialized = False


class ArchiveBuilder:
    """Archive sink used by the tree resolver"""

    def __init__(
        self,
        compression: int = zipfile.ZIP_DEFLATED,
        store: Optional[_EntryStore] = None,
        prefix: str = "",
    ):
        self._store = store or _EntryStore(compression)
        self.prefix = prefix
        self.logger = get_logger("treezip.archive.builder")

    @property
    def entries(self) -> List[ArchiveEntry]:
        """All entries of the archive in insertion order"""
        return list(self._store.entries.values())

    def _full_path(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def add_file(self, path: str, content: Union[str, bytes], is_binary: bool) -> ArchiveEntry:
        """
        Add a file relative to this scope.

        A second file at the same path replaces the content of the first one
        and keeps its position in the archive.

        Args:
            path: Path relative to this scope
            content: File content
            is_binary: Whether the content is stored as raw bytes

        Returns:
            ArchiveEntry: The stored entry
        """
        full_path = self._full_path(path)
        if full_path in self._store.entries:
            self.logger.debug(f"Replacing existing archive entry: {full_path}")
        entry = ArchiveEntry(full_path, content, is_binary)
        self._store.entries[full_path] = entry
        return entry

    def add_folder(self, name: str) -> "ArchiveBuilder":
        """
        Create a nested scope for a folder.

        Args:
            name: Folder name relative to this scope

        Returns:
            ArchiveBuilder: Scope whose paths are prefixed with the folder
        """
        return ArchiveBuilder(store=self._store, prefix=f"{self._full_path(name)}/")

    def serialize(self) -> bytes:
        """
        Write all entries into a ZIP container.

        Returns:
            bytes: The ZIP archive

        Raises:
            SerializationError: If the archive was already serialized or
                the container could not be written
        """
        if self._store.serialized:
            raise SerializationError("Archive has already been serialized")

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", compression=self._store.compression) as zf:
                for entry in self._store.entries.values():
                    info = zipfile.ZipInfo(entry.path, date_time=self._store.date_time)
                    info.compress_type = self._store.compression
                    info.external_attr = 0o644 << 16
                    zf.writestr(info, entry.data)
        except (OSError, ValueError, RuntimeError, zipfile.LargeZipFile) as e:
            raise SerializationError(f"Failed to write archive: {e}") from e

        self._store.serialized = True
        data = buffer.getvalue()
        self.logger.debug(
            f"Serialized archive with {len(self._store.entries)} entries "
            f"({format_size(len(data))})"
        )
        return data
