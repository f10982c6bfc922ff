import json

import pytest
from typer.testing import CliRunner

from treezip.commands.export import load_tree
from treezip.errors import ConfigError, SaveError
from treezip.export.file_saver import FileSaver
from treezip.main import app
from treezip.tree.nodes import Directory, Leaf
from treezip.utils.config_store import ConfigStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture
def page_files(tmp_path):
    html = tmp_path / "page.html"
    css = tmp_path / "page.css"
    html.write_text("<body><p>Exported</p></body>", encoding="utf-8")
    css.write_text("p{margin:0}", encoding="utf-8")
    return str(html), str(css)


@pytest.fixture
def tree_file(tmp_path, sample_tree):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(sample_tree), encoding="utf-8")
    return str(path)


def test_load_tree(tree_file):
    assert load_tree(tree_file) == Directory(
        {"index.html": Leaf("A"), "css": Directory({"style.css": Leaf("B")})}
    )


def test_load_tree_rejects_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{oops", encoding="utf-8")

    with pytest.raises(ConfigError, match="not valid JSON"):
        load_tree(str(path))


def test_load_tree_requires_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigError, match="JSON object"):
        load_tree(str(path))


def test_export_default_template(tmp_path, page_files, read_zip):
    html, css = page_files
    out = tmp_path / "out"

    result = runner.invoke(
        app, ["export", "--html", html, "--css", css, "--dir", str(out), "--prefix", "tpl"]
    )

    assert result.exit_code == 0, result.output
    archives = list(out.glob("tpl_*.zip"))
    assert len(archives) == 1
    files = read_zip(archives[0].read_bytes())
    assert list(files) == ["css/style.css", "index.html"]
    assert files["css/style.css"] == b"p{margin:0}"
    assert b"<body><p>Exported</p></body>" in files["index.html"]


def test_export_tree_file_with_filename(tmp_path, tree_file, read_zip):
    out = tmp_path / "out"

    result = runner.invoke(
        app, ["export", "--tree", tree_file, "--dir", str(out), "--filename", "site.zip"]
    )

    assert result.exit_code == 0, result.output
    files = read_zip((out / "site.zip").read_bytes())
    assert files == {"index.html": b"A", "css/style.css": b"B"}


def test_export_uses_stored_prefix(tmp_path, tree_file):
    ConfigStore().save_settings({"filename_pfx": "stored", "output_dir": str(tmp_path / "out")})

    result = runner.invoke(app, ["export", "--tree", tree_file])

    assert result.exit_code == 0, result.output
    assert len(list((tmp_path / "out").glob("stored_*.zip"))) == 1


def test_export_dry_run_lists_entries(tmp_path, tree_file):
    out = tmp_path / "out"

    result = runner.invoke(app, ["export", "--tree", tree_file, "--dir", str(out), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "index.html" in result.output
    assert "css/style.css" in result.output
    assert not out.exists()


def test_export_invalid_tree_exits(tmp_path):
    path = tmp_path / "tree.json"
    path.write_text(json.dumps({"a/b": "x"}), encoding="utf-8")

    result = runner.invoke(app, ["export", "--tree", str(path)])

    assert result.exit_code == 1
    assert "Failed to prepare export" in result.output


def test_export_missing_html_file_exits(tmp_path):
    result = runner.invoke(app, ["export", "--html", str(tmp_path / "missing.html")])

    assert result.exit_code == 1


def test_export_save_failure_exits(tmp_path, tree_file, mocker):
    mocker.patch.object(FileSaver, "save", side_effect=SaveError("read-only"))

    result = runner.invoke(app, ["export", "--tree", tree_file, "--dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "read-only" in result.output
