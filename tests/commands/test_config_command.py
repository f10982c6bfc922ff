import pytest
from typer.testing import CliRunner

from treezip.main import app
from treezip.utils.config_store import ConfigStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


def test_set_and_show(mocker):
    result = runner.invoke(app, ["config", "set", "filename_pfx", "site"])
    assert result.exit_code == 0, result.output
    assert ConfigStore().get_settings() == {"filename_pfx": "site"}

    display = mocker.patch("treezip.commands.config.display_settings")
    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    display.assert_called_once_with({"filename_pfx": "site"})


def test_show_effective_includes_defaults(mocker):
    display = mocker.patch("treezip.commands.config.display_settings")

    result = runner.invoke(app, ["config", "show", "--effective"])

    assert result.exit_code == 0
    settings = display.call_args[0][0]
    assert settings["filename_pfx"] == "lb_template"
    assert settings["btn_label"] == "Export"
    assert settings["add_export_btn"] is True


def test_set_invalid_key_exits():
    result = runner.invoke(app, ["config", "set", "colour", "red"])

    assert result.exit_code == 1
    assert ConfigStore().get_settings() == {}


def test_reset():
    ConfigStore().update_setting("output_dir", "dist")

    result = runner.invoke(app, ["config", "reset"])

    assert result.exit_code == 0
    assert ConfigStore().get_settings() == {}
