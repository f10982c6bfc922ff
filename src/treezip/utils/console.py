from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from typing import Any, Dict, Iterable
from treezip.logging.utils import format_size

console = Console()


def success(message: str):
    """Display success message"""
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    """Display error message"""
    console.print(f"✖ {message}", style="bold red")


def warning(message: str):
    """Display warning message"""
    console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    """Display info message"""
    console.print(f"{message}", style="cyan")


def entries_table(entries: Iterable[Any], title: str = "Archive entries") -> Table:
    """Build a table listing archive entries with their size and kind"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Path", style="white")
    table.add_column("Size", justify="right")
    table.add_column("Kind", style="cyan")
    for entry in entries:
        kind = "binary" if entry.is_binary else "text"
        table.add_row(entry.path, format_size(entry.size), kind)
    return table


def display_settings(settings: Dict[str, Any], title: str = "Export settings"):
    """Display settings as key/value lines in a panel"""
    if settings:
        content = "\n".join(f"{key}: {value}" for key, value in settings.items())
    else:
        content = "No settings stored, built-in defaults are used"
    console.print(Panel(content, title=title, border_style="blue"))
