"""Test CLI functionality."""

import json

import pytest
import tomlkit
from click.testing import CliRunner

from settingsgen.cli import cli, parse_assignments


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.setattr("settingsgen.cli.setup_log", lambda *args, **kwargs: None)

    path = tmp_path / "config.toml"
    path.write_text(
        f"""
[store]
type = "file"
path = "{(tmp_path / 'settings').as_posix()}"

[[pages]]
id = "acme_settings"
title = "Acme Settings"

[[pages.tabs]]
id = "general"
title = "General"

[[pages.tabs]]
id = "appearance"
title = "Appearance"

[[pages.fields]]
id = "volume"
title = "Volume"
type = "number"
tab = "general"
default = 10

[[pages.fields]]
id = "colors"
title = "Colors"
type = "multiselect"
tab = "appearance"
options = ["red", "green", "blue"]

[[pages.fields]]
id = "accent"
title = "Accent"
type = "color"
tab = "appearance"
class = "wide"
""",
        encoding="utf-8",
    )
    return str(path)


def invoke(config_path, *args):
    return CliRunner().invoke(cli, ["--config", config_path, *args], obj={})


def test_parse_assignments_collects_repeated_keys():
    assert parse_assignments(("a=1", "b=x=y", "c=1", "c=2", "c=3")) == {
        "a": "1",
        "b": "x=y",
        "c": ["1", "2", "3"],
    }


def test_pages_lists_configured_pages(config_path):
    result = invoke(config_path, "pages")

    assert result.exit_code == 0, result.output
    assert "acme_settings\tmenu\t-\tmanage_options\tAcme Settings" in result.output


def test_set_and_show(config_path):
    result = invoke(config_path, "set", "acme_settings", "volume=7.5", "colors=blue", "colors=red", "nope=1")
    assert result.exit_code == 0, result.output

    result = invoke(config_path, "show", "acme_settings")
    assert result.exit_code == 0, result.output
    record = json.loads(result.stdout)
    assert record == {"volume": 7.5, "colors": ["blue", "red"]}


def test_show_without_record(config_path):
    result = invoke(config_path, "show", "acme_settings")

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {}


def test_set_rejects_malformed_assignment(config_path):
    result = invoke(config_path, "set", "acme_settings", "volume")

    assert result.exit_code == 2
    assert "Expected KEY=VALUE" in result.output


def test_unknown_page(config_path):
    result = invoke(config_path, "show", "missing")

    assert result.exit_code == 1
    assert "Unknown settings page: missing" in result.output


def test_missing_config_file(tmp_path, monkeypatch):
    monkeypatch.setattr("settingsgen.cli.setup_log", lambda *args, **kwargs: None)

    result = invoke(str(tmp_path / "missing.toml"), "pages")

    assert result.exit_code == 1
    assert "Configuration file not found" in result.output


def test_render_tab(config_path):
    result = invoke(config_path, "render", "acme_settings", "--tab", "appearance")

    assert result.exit_code == 0, result.output
    assert "acme_settings[colors][]" in result.output
    assert "acme_settings[volume]" not in result.output
    assert 'action="/pages/acme_settings"' in result.output


def test_schema_json(config_path):
    result = invoke(config_path, "schema", "acme_settings")

    assert result.exit_code == 0, result.output
    schema = json.loads(result.stdout)
    assert schema["default_tab"] == "general"
    assert [field["id"] for field in schema["fields"]] == ["volume", "colors", "accent"]
    assert schema["fields"][2]["class"] == "wide"


def test_schema_toml_can_be_loaded_back(config_path, tmp_path):
    result = invoke(config_path, "schema", "acme_settings", "--format", "toml")

    assert result.exit_code == 0, result.output
    exported = tomlkit.parse(result.stdout).unwrap()
    page = exported["pages"][0]
    assert page["id"] == "acme_settings"
    assert [tab["id"] for tab in page["tabs"]] == ["general", "appearance"]
    assert page["fields"][1]["options"] == {"red": "red", "green": "green", "blue": "blue"}
    assert page["fields"][0]["default"] == 10

    reloaded = tmp_path / "exported.toml"
    reloaded.write_text(result.stdout, encoding="utf-8")
    result = invoke(str(reloaded), "schema", "acme_settings")
    assert result.exit_code == 0, result.output
