"""
Settings commands.

Persisted settings provide the export defaults used by ``treezip export``.
"""

import typer
from treezip.errors import ConfigError
from treezip.export import ExportOptions
from treezip.logging import get_logger
from treezip.utils.config_store import ConfigStore
from treezip.utils.console import display_settings, error, info, success

app = typer.Typer(help="Manage export settings")


@app.command("show")
def show_settings(
    effective: bool = typer.Option(
        False, "--effective", help="Include built-in defaults for unset values"
    ),
) -> None:
    """Show stored export settings"""
    settings = ConfigStore().get_settings()
    if effective:
        options = ExportOptions.from_settings(settings)
        settings = {
            "filename_pfx": options.filename_pfx,
            "output_dir": options.output_dir,
            "btn_label": options.btn_label,
            "add_export_btn": options.add_export_btn,
            "log_level": settings.get("log_level", "INFO"),
        }
    display_settings(settings)


@app.command("set")
def set_setting(
    key: str = typer.Argument(..., help="Setting name"),
    value: str = typer.Argument(..., help="Setting value"),
) -> None:
    """Store an export setting"""
    logger = get_logger("treezip.commands.config")
    try:
        stored = ConfigStore().update_setting(key, value)
    except ConfigError as e:
        logger.error(f"Failed to update setting {key}: {str(e)}")
        error(str(e))
        raise typer.Exit(1)

    logger.info(f"Setting updated: {key}={stored}")
    success(f"{key} set to {stored}")


@app.command("reset")
def reset_settings() -> None:
    """Remove all stored settings"""
    ConfigStore().reset_settings()
    get_logger("treezip.commands.config").info("Settings reset")
    info("Settings reset, built-in defaults will be used")
