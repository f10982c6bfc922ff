"""
Main logging module for treezip.

This module provides the primary logging interface, logger setup
with daily rotation, and helpers for export and archive entry events.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import TreeZipFormatter, FileEntryFormatter, MultiplexFormatter
from .utils import cleanup_old_logs


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _level_from_settings(config: LogConfig) -> None:
    """Apply the log level stored in the user settings, if any"""
    from treezip.utils.config_store import ConfigStore

    settings = ConfigStore().get_settings()
    user_level = settings.get("log_level")
    if user_level and user_level in [lev.value for lev in LogLevel]:
        config.default_level = LogLevel(user_level)


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the treezip logging system.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        try:
            _level_from_settings(config)
        except OSError:
            # Unreadable settings fall back to the default level
            pass

    _log_config = config

    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("treezip")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    # Daily rotating file handler
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(
        MultiplexFormatter(
            default_formatter=TreeZipFormatter(
                include_timestamps=config.include_timestamps,
                include_thread_info=config.include_thread_info,
                max_content_chars=config.max_content_chars,
            ),
            entry_formatter=FileEntryFormatter(),
        )
    )
    root_logger.addHandler(file_handler)

    # Console handler for warnings and errors
    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(
            TreeZipFormatter(
                include_timestamps=False,
                max_content_chars=config.max_content_chars,
            )
        )
        root_logger.addHandler(console_handler)

    entries_logger = logging.getLogger("treezip.entries")
    entries_logger.disabled = not config.log_file_entries

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    setup_logger = get_logger("treezip.setup")
    setup_logger.info(f"Logging initialized - File: {log_file_path}, "
                      f"Level: {config.default_level.value}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'treezip.tree.resolver')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        logger = logging.getLogger(name)
        _loggers[name] = logger

    return _loggers[name]


def log_file_entry(
    path: str,
    size: int,
    is_binary: bool,
    content: Any = None,
    logger_name: str = "treezip.entries"
) -> None:
    """
    Log a file added to an archive.

    Args:
        path: Path of the file inside the archive
        size: Stored size in bytes
        is_binary: Whether the file is stored as binary
        content: Optional content, shown truncated
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {
        "file_path": path,
        "file_size": size,
        "file_is_binary": is_binary,
    }
    if content is not None:
        extra["file_content"] = content

    logger.debug("Create file", extra=extra)


def log_export_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "treezip.export"
) -> None:
    """
    Log export lifecycle events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"export_event": event}

    message = f"Export: {event}"
    if details:
        extra["export_details"] = details
        rendered = ", ".join(f"{key}={value}" for key, value in details.items())
        message = f"{message} ({rendered})"

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra=extra)
