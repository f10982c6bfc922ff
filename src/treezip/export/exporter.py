"""
Archive exporter.

Runs one export: resolves the configured tree against the editor context,
serializes the archive, names it and hands it to the save mechanism.
Failures are reported once through the ``on_error`` callback.
"""

import asyncio
import time
from typing import Any, Callable, Optional

from treezip.archive.builder import ArchiveBuilder
from treezip.constants import ARCHIVE_SUFFIX
from treezip.errors import ResolutionError
from treezip.logging import get_logger, log_export_event
from treezip.logging.utils import format_size
from treezip.tree.classifier import BinaryClassifier
from treezip.tree.resolver import TreeResolver
from .file_saver import FileSaver
from .options import ExportOptions, ExportOverrides, resolve_options
from .template import default_root

# (data, filename, output_dir) -> saved location
SaveFn = Callable[[bytes, str, Optional[str]], Any]


def build_filename(options: ExportOptions, context: Any, now: Optional[float] = None) -> str:
    """
    Compute the archive file name.

    Args:
        options: Effective export options
        context: Editor context handed to a custom filename function
        now: Timestamp in seconds, current time when None

    Returns:
        str: The custom function's result verbatim, otherwise
            ``<prefix>_<milliseconds>.zip``
    """
    if options.filename is not None:
        return options.filename(context)

    timestamp = int((time.time() if now is None else now) * 1000)
    return f"{options.filename_pfx}_{timestamp}{ARCHIVE_SUFFIX}"


def reported_error(error: BaseException) -> BaseException:
    """
    Pick the exception handed to the error callback.

    A provider failure is reported as the exception the provider raised;
    other failures are reported as they are.

    Args:
        error: Exception raised during the export

    Returns:
        BaseException: The exception for ``on_error``
    """
    if isinstance(error, ResolutionError) and error.__cause__ is not None:
        return error.__cause__
    return error


def log_error(error: BaseException) -> None:
    """Default error callback"""
    get_logger("treezip.export").error(f"Export failed: {error}", exc_info=error)


class Exporter:
    """Builds and saves archives from a virtual tree"""

    def __init__(self, options: Optional[ExportOptions] = None, saver: Optional[SaveFn] = None):
        self.options = options or ExportOptions()
        self.saver = saver or FileSaver.save
        self.logger = get_logger("treezip.export.exporter")

    async def build_archive(self, options: ExportOptions, context: Any) -> bytes:
        """
        Resolve the tree of the given options into serialized archive bytes.

        Args:
            options: Effective export options
            context: Editor context handed to providers

        Returns:
            bytes: The ZIP archive
        """
        root = options.root if options.root is not None else default_root()
        resolver = TreeResolver(BinaryClassifier(options.is_binary))
        builder = ArchiveBuilder()

        await resolver.resolve(root, context, builder)
        self.logger.debug(f"Resolved {len(builder.entries)} archive entries")
        return builder.serialize()

    async def run(self, context: Any, overrides: Optional[ExportOverrides] = None) -> Optional[str]:
        """
        Export the archive for the given context.

        Args:
            context: Editor context handed to providers and the filename function
            overrides: Per-call replacements for configured options

        Returns:
            The saved location, or None if the export failed
        """
        options = resolve_options(self.options, overrides)
        log_export_event("started", level="debug")

        try:
            data = await self.build_archive(options, context)
            filename = build_filename(options, context)
            saved = self.saver(data, filename, options.output_dir)
        except Exception as e:
            error = reported_error(e)
            details = {"error": type(error).__name__}
            if isinstance(e, ResolutionError) and e.path:
                details["path"] = e.path
            log_export_event("failed", level="warning", details=details)
            on_error = options.on_error or log_error
            on_error(error)
            return None

        log_export_event(
            "completed", details={"filename": filename, "size": format_size(len(data))}
        )
        if options.done is not None:
            options.done()
        return saved

    def export(self, context: Any, overrides: Optional[ExportOverrides] = None) -> Optional[str]:
        """Run an export from synchronous code"""
        return asyncio.run(self.run(context, overrides))
