"""
Log commands.

Reads back the treezip log file: recent records, the files written into
archives, and a summary of past exports.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.table import Table

from treezip.constants import LOG_FILE_NAME, LOG_LINES_TO_SHOW
from treezip.logging import get_logger, setup_logging
from treezip.logging.config import get_log_directory, get_log_file_path
from treezip.utils.console import console, error, info, success, warning

app = typer.Typer(help="Inspect treezip logs")

# 2026-02-02 17:27:34 INFO [treezip.export] Export: completed (filename=a.zip, size=1.0KB)
_RECORD_RE = re.compile(
    r"^(?P<time>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) (?P<level>[A-Z]+) "
    r"\[(?P<name>[^\]]+)\] (?P<message>.*)$"
)
_EVENT_RE = re.compile(r"^Export: (?P<event>\w+)(?: \((?P<details>.*)\))?$")

ENTRY_LOGGER = "treezip.entries"
EXPORT_LOGGER = "treezip.export"


@dataclass
class LogRecordLine:
    """One record read back from the log file"""

    time: str
    level: str
    name: str
    message: str
    extra_lines: List[str]


def parse_log(text: str) -> List[LogRecordLine]:
    """
    Split log file text into records.

    Lines that do not start a record (content previews, tracebacks) are
    attached to the record before them.
    """
    records: List[LogRecordLine] = []
    for line in text.splitlines():
        match = _RECORD_RE.match(line)
        if match:
            records.append(LogRecordLine(extra_lines=[], **match.groupdict()))
        elif records:
            records[-1].extra_lines.append(line)
    return records


def parse_export_event(record: LogRecordLine) -> Optional[Dict[str, str]]:
    """
    Read an export lifecycle event from a record.

    Returns:
        The event name and its details, or None for other records
    """
    if record.name != EXPORT_LOGGER:
        return None
    match = _EVENT_RE.match(record.message)
    if not match:
        return None

    event = {"time": record.time, "event": match.group("event")}
    details = match.group("details")
    if details:
        for pair in details.split(", "):
            key, _, value = pair.partition("=")
            event[key] = value
    return event


def _read_records() -> Optional[List[LogRecordLine]]:
    log_file = get_log_file_path()
    if not log_file.exists():
        warning("No log file found. Run an export to generate logs.")
        return None
    return parse_log(log_file.read_text(encoding="utf-8"))


@app.command("show")
def show_logs(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of records to show"
    ),
    level: Optional[str] = typer.Option(
        None, "--level", help="Only records of this level (DEBUG, INFO, WARNING, ERROR)"
    ),
    entries: bool = typer.Option(
        False, "--entries", help="Only the files written into archives"
    ),
) -> None:
    """Show recent log records"""
    setup_logging()
    logger = get_logger("treezip.commands.logs")

    try:
        records = _read_records()
    except OSError as e:
        logger.error(f"Failed to read logs: {str(e)}")
        error(f"Failed to read logs: {str(e)}")
        raise typer.Exit(1)
    if records is None:
        return

    if level:
        records = [r for r in records if r.level == level.upper()]
    if entries:
        records = [r for r in records if r.name == ENTRY_LOGGER]
    records = records[-lines:] if lines > 0 else []

    if not records:
        info("No log records match the criteria.")
        return

    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("Level")
    table.add_column("Source", style="cyan")
    table.add_column("Message")
    for record in records:
        message = "\n".join([record.message] + record.extra_lines)
        table.add_row(record.time, record.level, record.name, message)
    console.print(table)


@app.command("exports")
def show_exports(
    lines: int = typer.Option(
        LOG_LINES_TO_SHOW, "--lines", "-n", help="Number of exports to show"
    ),
) -> None:
    """Summarise past exports from the log"""
    setup_logging()
    logger = get_logger("treezip.commands.logs")

    try:
        records = _read_records()
    except OSError as e:
        logger.error(f"Failed to read logs: {str(e)}")
        error(f"Failed to read logs: {str(e)}")
        raise typer.Exit(1)
    if records is None:
        return

    events = [
        event
        for event in (parse_export_event(r) for r in records)
        if event and event["event"] in ("completed", "failed")
    ]
    if not events:
        info("No exports recorded yet.")
        return

    completed = sum(1 for event in events if event["event"] == "completed")
    table = Table(
        title=f"Exports: {completed} completed, {len(events) - completed} failed",
        show_header=True,
        header_style="bold blue",
    )
    table.add_column("Time", style="dim", no_wrap=True)
    table.add_column("Result")
    table.add_column("Archive / Error")
    table.add_column("Size / Path")
    for event in events[-lines:]:
        if event["event"] == "completed":
            table.add_row(
                event["time"], "[green]completed[/green]",
                event.get("filename", ""), event.get("size", ""),
            )
        else:
            table.add_row(
                event["time"], "[red]failed[/red]",
                event.get("error", ""), event.get("path", ""),
            )
    console.print(table)


@app.command("clear")
def clear_logs(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete rotated log files and empty the current log"""
    log_dir = get_log_directory()
    log_file = get_log_file_path()

    if not yes and not typer.confirm(f"Clear all logs in {log_dir}?"):
        info("Aborted.")
        return

    try:
        removed = _remove_rotated(log_dir)
        if log_file.exists():
            log_file.write_text("", encoding="utf-8")
    except OSError as e:
        error(f"Failed to clear logs: {str(e)}")
        raise typer.Exit(1)

    success(f"Logs cleared ({removed} rotated file(s) removed)")


def _remove_rotated(log_dir: Path) -> int:
    removed = 0
    for rotated in log_dir.glob(f"{LOG_FILE_NAME}.log.*"):
        rotated.unlink()
        removed += 1
    return removed
