"""
Custom formatters for treezip logging.

This module provides specialized formatters for general application logs
and for the per-file entries written while an archive is built.
"""

import logging
from datetime import datetime
from .utils import format_size, truncate_content
from treezip.constants import LOG_MAX_CONTENT_CHARS


class TreeZipFormatter(logging.Formatter):
    """
    Custom formatter for treezip log entries.

    Provides structured formatting with optional components and keeps
    file content attached to records short.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        max_content_chars: int = LOG_MAX_CONTENT_CHARS,
    ):
        self.include_timestamps = include_timestamps
        self.include_thread_info = include_thread_info
        self.max_content_chars = max_content_chars
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_thread_info:
            fmt_parts.insert(-1, "[Thread:%(thread)d]")
        fmt_string = " ".join(fmt_parts)
        super().__init__(fmt=fmt_string, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record, appending a preview of any file content.

        Args:
            record: The log record to format

        Returns:
            str: Formatted log message
        """
        message = super().format(record)
        content = getattr(record, "file_content", None)
        if content is not None:
            preview = truncate_content(content, self.max_content_chars)
            message = f"{message}\n    Content: {preview}"
        return message


class FileEntryFormatter(logging.Formatter):
    """
    Formatter for archive entry records.

    Renders one line per file added to an archive with its size and
    whether it is stored as text or binary.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        path = getattr(record, "file_path", "")
        size = getattr(record, "file_size", 0)
        kind = "binary" if getattr(record, "file_is_binary", False) else "text"

        # Example: 2026-02-02 17:27:34 DEBUG [treezip.entries] css/style.css (1.2KB, text)
        return (
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{path} ({format_size(size)}, {kind})"
        )


class MultiplexFormatter(logging.Formatter):
    """
    Formatter that delegates to different formatters based on the log record.

    Uses FileEntryFormatter for archive entry logs and TreeZipFormatter
    for everything else.
    """

    def __init__(
        self, default_formatter: logging.Formatter, entry_formatter: logging.Formatter
    ):
        self.default_formatter = default_formatter
        self.entry_formatter = entry_formatter
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        if record.name == "treezip.entries" or hasattr(record, "file_path"):
            return self.entry_formatter.format(record)
        return self.default_formatter.format(record)
