"""
Binary content detection for archive entries.
"""

import re
from typing import Callable, Optional, Union

from treezip.constants import TEXT_EXTENSIONS

# Override signature: (content, name) -> bool
BinaryOverride = Callable[[str, str], bool]

_ASCII_ONLY = re.compile(r"[\x00-\x7F]*")


def get_extension(name: str) -> Optional[str]:
    """
    Return the extension of a file name.

    The extension is the segment between the first and the second dot,
    so ``app.min.js`` yields ``min``.

    Args:
        name: File name

    Returns:
        The extension, or None when the name has no dot
    """
    parts = name.split(".")
    if len(parts) < 2:
        return None
    return parts[1]


class BinaryClassifier:
    """Decides whether file content is stored as raw bytes or UTF-8 text"""

    def __init__(self, override: Optional[BinaryOverride] = None):
        self.override = override

    def classify(self, name: str, content: str) -> bool:
        """
        Classify content for the given file name.

        Args:
            name: Final path segment of the file
            content: Text content of the file

        Returns:
            True if the content must be stored as binary
        """
        if self.override is not None:
            return bool(self.override(content, name))

        if get_extension(name) in TEXT_EXTENSIONS:
            return False

        return _ASCII_ONLY.fullmatch(content) is None


def encode_content(content: Union[str, bytes], is_binary: bool) -> bytes:
    """
    Turn entry content into the bytes written to the archive.

    Binary strings carry one byte per character; characters above 0xFF
    keep their low byte.

    Args:
        content: Entry content
        is_binary: Classification result for the entry

    Returns:
        bytes: Archive payload
    """
    if isinstance(content, bytes):
        return content
    if is_binary:
        return bytes(ord(char) & 0xFF for char in content)
    return content.encode("utf-8")
