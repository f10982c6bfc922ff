"""
Utility functions for treezip logging.

Helpers for trimming file content before it reaches a log line,
size formatting and log retention.
"""

from pathlib import Path
from datetime import datetime, timedelta
from typing import Any, Union
from treezip.constants import LOG_FILE_NAME, LOG_MAX_CONTENT_CHARS


def truncate_content(
    content: Union[str, bytes, Any], max_chars: int = LOG_MAX_CONTENT_CHARS
) -> str:
    """
    Shorten file content so it can be written to a log line.

    Args:
        content: File content (text or bytes)
        max_chars: Maximum number of characters to keep

    Returns:
        str: Single-line preview of the content
    """
    if isinstance(content, bytes):
        return f"<{format_size(len(content))} of binary data>"

    text = str(content).replace("\r", "\\r").replace("\n", "\\n")
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}... ({len(text) - max_chars} more chars)"


def format_size(size_bytes: int) -> str:
    """
    Format byte size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        str: Formatted size string
    """
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"


def cleanup_old_logs(log_directory: Path, retention_days: int = 30) -> int:
    """
    Clean up old log files based on retention policy.

    Args:
        log_directory: Directory containing log files
        retention_days: Number of days to retain logs

    Returns:
        int: Number of files cleaned up
    """
    if not log_directory.exists():
        return 0

    cutoff_date = datetime.now() - timedelta(days=retention_days)
    cleaned_count = 0

    # Rotated files look like treezip.log.2026-01-31
    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if log_file.stat().st_mtime < cutoff_date.timestamp():
                log_file.unlink()
                cleaned_count += 1
        except (OSError, ValueError):
            continue

    return cleaned_count
