"""
treezip Logging Module

This module provides logging for treezip: a daily rotating log file in a
platform specific directory, a stderr handler for warnings, and helpers
that record export events and every file added to an archive.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- Per-file archive entry logging with truncated content previews
- Export lifecycle events
- Log level taken from the user settings
"""

from .logger import (
    get_logger,
    setup_logging,
    LogLevel,
    log_file_entry,
    log_export_event,
)
from .config import LogConfig, get_log_directory, get_log_file_path
from .utils import truncate_content, format_size

__all__ = [
    "get_logger",
    "setup_logging",
    "log_file_entry",
    "log_export_event",
    "LogLevel",
    "LogConfig",
    "get_log_directory",
    "get_log_file_path",
    "truncate_content",
    "format_size",
]
