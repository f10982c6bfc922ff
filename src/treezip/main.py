import typer
from treezip.commands import config, logs
from treezip.commands.export import export_archive
from treezip.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]treezip[/bold blue] - Export page layouts as ZIP archives",
    rich_markup_mode="rich",
)

# Add command groups
app.add_typer(config.app, name="config")
app.add_typer(logs.app, name="logs")

# Add standalone commands
app.command("export")(export_archive)


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]treezip[/bold blue] - Export page layouts as ZIP archives

    Resolves a virtual file tree against the page markup and styles and
    saves the result as a ZIP archive.
    """
    if not ctx.invoked_subcommand:
        print(
            "Welcome to treezip! Export your page as a ZIP archive. "
            "To proceed type treezip --help"
        )


def main():
    setup_logging()
    logger = get_logger("treezip.main")
    logger.info("treezip started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("treezip finished")


if __name__ == "__main__":
    main()
