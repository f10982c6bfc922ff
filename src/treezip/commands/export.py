"""
Export command.

Builds a ZIP archive from the default template or a JSON tree file,
using page markup and styles read from files as the editor context.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from treezip.context import StaticEditor
from treezip.errors import ConfigError, TreeZipError
from treezip.export import (
    ExportOptions,
    ExportOverrides,
    Exporter,
    default_root,
    resolve_options,
)
from treezip.logging import get_logger, setup_logging
from treezip.tree import BinaryClassifier, Directory, TreeResolver, as_node
from treezip.utils.config_store import ConfigStore
from treezip.utils.console import console, entries_table, error, info, success, warning


def load_tree(tree_path: str) -> Directory:
    """
    Load an archive layout from a JSON file.

    Strings become files and objects become folders.

    Args:
        tree_path: Path to the JSON file

    Returns:
        Directory: Root of the layout

    Raises:
        ConfigError: If the file does not hold a JSON object of strings
            and nested objects
    """
    try:
        with open(tree_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Tree file '{tree_path}' is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Tree file '{tree_path}' must contain a JSON object")

    return as_node(data)


def export_archive(
    html: Optional[str] = typer.Option(
        None, "--html", help="File with the page markup (editor HTML)"
    ),
    css: Optional[str] = typer.Option(
        None, "--css", help="File with the page styles (editor CSS)"
    ),
    tree: Optional[str] = typer.Option(
        None, "--tree", help="JSON file describing the archive layout"
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--dir", help="Output directory for the archive"
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Archive filename prefix"
    ),
    filename: Optional[str] = typer.Option(
        None, "--filename", help="Full archive filename, used verbatim"
    ),
    bundle_assets: bool = typer.Option(
        False,
        "--bundle-assets",
        help="Download linked libraries into vendor/ (default template only)",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List the archive entries without saving"
    ),
) -> None:
    """Export the page as a ZIP archive"""
    setup_logging()
    logger = get_logger("treezip.commands.export")

    try:
        context = StaticEditor.from_files(html, css)
        if tree:
            if bundle_assets:
                warning("--bundle-assets only applies to the default template")
            root = load_tree(tree)
        else:
            root = default_root(bundle_assets=bundle_assets)
        defaults = ExportOptions.from_settings(ConfigStore().get_settings(), root=root)
    except (OSError, TreeZipError) as e:
        logger.error(f"Failed to prepare export: {str(e)}")
        error(f"Failed to prepare export: {str(e)}")
        raise typer.Exit(1)

    failures = []
    overrides = ExportOverrides(
        on_error=failures.append,
        filename=(lambda _editor: filename) if filename else None,
        filename_pfx=prefix,
        output_dir=output_dir,
    )

    if dry_run:
        _preview(resolve_options(defaults, overrides), context)
        return

    info(f"{defaults.btn_label}: building archive...")
    saved = Exporter(defaults).export(context, overrides)

    if failures:
        logger.error(f"Export failed: {str(failures[0])}")
        error(f"Export failed: {str(failures[0])}")
        raise typer.Exit(1)

    success(f"Archive saved: {Path(saved).name}")


def _preview(options: ExportOptions, context: StaticEditor) -> None:
    """Resolve the tree and print its entries"""
    resolver = TreeResolver(BinaryClassifier(options.is_binary))
    try:
        entries = asyncio.run(resolver.collect(options.root, context))
    except TreeZipError as e:
        error(f"Failed to resolve archive tree: {str(e)}")
        raise typer.Exit(1)

    if not entries:
        warning("The archive tree produced no files")
        return
    console.print(entries_table(entries))
