"""
Export package.

Provides the exporter, its layered options, the default template and
the local file saver.
"""

from .options import ExportOptions, ExportOverrides, resolve_options
from .file_saver import FileSaver
from .template import default_root, fetch_url
from .exporter import Exporter, build_filename

__all__ = [
    "ExportOptions",
    "ExportOverrides",
    "resolve_options",
    "FileSaver",
    "default_root",
    "fetch_url",
    "Exporter",
    "build_filename",
]
