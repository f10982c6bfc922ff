import pytest
import typer

from treezip.commands.logs import (
    clear_logs,
    parse_export_event,
    parse_log,
    show_exports,
    show_logs,
)

LOG_TEXT = (
    "2026-03-01 10:00:00 DEBUG [treezip.export] Export: started\n"
    "2026-03-01 10:00:00 DEBUG [treezip.entries] css/style.css (12B, text)\n"
    "2026-03-01 10:00:00 DEBUG [treezip.entries] index.html (300B, text)\n"
    "2026-03-01 10:00:01 INFO [treezip.export] Export: completed (filename=lb_template_1.zip, size=1.2KB)\n"
    "2026-03-01 10:05:00 WARNING [treezip.export] Export: failed (error=RuntimeError, path=index.html)\n"
    "2026-03-01 10:05:00 ERROR [treezip.export] Export failed: editor unavailable\n"
    "Traceback (most recent call last):\n"
    "RuntimeError: editor unavailable\n"
)


@pytest.fixture
def log_file(mocker, tmp_path):
    mocker.patch("treezip.commands.logs.setup_logging")
    mocker.patch("treezip.commands.logs.get_logger")
    path = tmp_path / "treezip.log"
    path.write_text(LOG_TEXT, encoding="utf-8")
    mocker.patch("treezip.commands.logs.get_log_file_path", return_value=path)
    mocker.patch("treezip.commands.logs.get_log_directory", return_value=tmp_path)
    return path


def _printed_table(console):
    console.print.assert_called_once()
    return console.print.call_args[0][0]


def test_parse_log_attaches_continuation_lines():
    records = parse_log(LOG_TEXT)

    assert len(records) == 6
    assert records[1].name == "treezip.entries"
    assert records[1].message == "css/style.css (12B, text)"
    assert records[-1].level == "ERROR"
    assert records[-1].extra_lines == [
        "Traceback (most recent call last):",
        "RuntimeError: editor unavailable",
    ]


def test_parse_log_skips_leading_noise():
    assert parse_log("garbage\n") == []


def test_parse_export_event_reads_details():
    completed = parse_export_event(parse_log(LOG_TEXT)[3])

    assert completed == {
        "time": "2026-03-01 10:00:01",
        "event": "completed",
        "filename": "lb_template_1.zip",
        "size": "1.2KB",
    }


def test_parse_export_event_ignores_other_records():
    records = parse_log(LOG_TEXT)

    assert parse_export_event(records[1]) is None
    assert parse_export_event(records[-1]) is None


def test_show_logs_no_log_file(mocker, tmp_path):
    mocker.patch("treezip.commands.logs.setup_logging")
    mocker.patch("treezip.commands.logs.get_logger")
    mocker.patch(
        "treezip.commands.logs.get_log_file_path", return_value=tmp_path / "missing.log"
    )
    warning = mocker.patch("treezip.commands.logs.warning")

    show_logs(lines=10, level=None, entries=False)

    warning.assert_called_once()


def test_show_logs_limits_records(mocker, log_file):
    console = mocker.patch("treezip.commands.logs.console")

    show_logs(lines=2, level=None, entries=False)

    table = _printed_table(console)
    assert list(table.columns[2].cells) == ["treezip.export", "treezip.export"]
    assert "Traceback" in list(table.columns[3].cells)[-1]


def test_show_logs_filters_level_exactly(mocker, log_file):
    console = mocker.patch("treezip.commands.logs.console")

    show_logs(lines=10, level="error", entries=False)

    table = _printed_table(console)
    assert list(table.columns[1].cells) == ["ERROR"]


def test_show_logs_entries_only(mocker, log_file):
    console = mocker.patch("treezip.commands.logs.console")

    show_logs(lines=10, level=None, entries=True)

    table = _printed_table(console)
    assert list(table.columns[3].cells) == [
        "css/style.css (12B, text)",
        "index.html (300B, text)",
    ]


def test_show_logs_no_matching_records(mocker, log_file):
    info = mocker.patch("treezip.commands.logs.info")

    show_logs(lines=10, level="CRITICAL", entries=False)

    info.assert_called_once()


def test_show_logs_read_error_exits(mocker):
    mocker.patch("treezip.commands.logs.setup_logging")
    mocker.patch("treezip.commands.logs.get_logger")
    mocker.patch("treezip.commands.logs.get_log_file_path", side_effect=OSError("boom"))
    error = mocker.patch("treezip.commands.logs.error")

    with pytest.raises(typer.Exit):
        show_logs(lines=10, level=None, entries=False)

    error.assert_called_once()


def test_show_exports_summarises_results(mocker, log_file):
    console = mocker.patch("treezip.commands.logs.console")

    show_exports(lines=10)

    table = _printed_table(console)
    assert table.title == "Exports: 1 completed, 1 failed"
    assert list(table.columns[2].cells) == ["lb_template_1.zip", "RuntimeError"]
    assert list(table.columns[3].cells) == ["1.2KB", "index.html"]


def test_show_exports_without_events(mocker, log_file):
    log_file.write_text(
        "2026-03-01 10:00:00 DEBUG [treezip.export] Export: started\n", encoding="utf-8"
    )
    info = mocker.patch("treezip.commands.logs.info")

    show_exports(lines=10)

    info.assert_called_once_with("No exports recorded yet.")


def test_clear_logs(mocker, log_file, tmp_path):
    rotated = tmp_path / "treezip.log.2026-01-01"
    rotated.write_text("old", encoding="utf-8")
    success = mocker.patch("treezip.commands.logs.success")

    clear_logs(yes=True)

    assert not rotated.exists()
    assert log_file.read_text(encoding="utf-8") == ""
    success.assert_called_once_with("Logs cleared (1 rotated file(s) removed)")


def test_clear_logs_aborted(mocker, log_file):
    mocker.patch("treezip.commands.logs.typer.confirm", return_value=False)

    clear_logs(yes=False)

    assert log_file.read_text(encoding="utf-8") == LOG_TEXT
