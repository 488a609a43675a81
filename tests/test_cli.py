"""Smoke tests for the command-line interface."""

import importlib.util
import json
from pathlib import Path

import pytest

CLI_PATH = Path(__file__).parent.parent / "scripts" / "wwbot_cli.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("wwbot_cli", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_load_settings_from_repo_config(cli):
    config, logging_settings = cli.load_settings(cli.DEFAULT_CONFIG, {"seed": 5})
    assert config.seed == 5
    assert logging_settings["output_dir"] == "logs"


def test_load_settings_missing_file(cli, tmp_path):
    config, logging_settings = cli.load_settings(tmp_path / "none.yaml", {"max_rounds": 3})
    assert config.max_rounds == 3
    assert logging_settings == {}


def test_build_table_rejects_too_many_players(cli):
    from wwbot.core.exceptions import ConfigurationError

    with pytest.raises(ConfigurationError):
        cli.build_table(len(cli.BOT_NAMES) + 1)


def test_simulate(cli, capsys):
    assert cli.main(["simulate", "--games", "3", "--players", "6", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Simulated 3 games with 6 players" in out


def test_play_writes_log(cli, tmp_path, capsys):
    assert cli.main(["play", "--players", "5", "--seed", "2", "--log-dir", str(tmp_path)]) == 0
    assert "GAME OVER" in capsys.readouterr().out
    assert len(list(tmp_path.glob("*.jsonl"))) == 1


def test_no_command_prints_help(cli, capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_empty_logging_section_uses_defaults(cli, tmp_path, capsys):
    config = tmp_path / "werewolf.yaml"
    config.write_text("game:\n  seed: 1\nlogging:\n")

    _, logging_settings = cli.load_settings(config)
    assert logging_settings == {}

    argv = ["play", "--players", "5", "--config", str(config), "--log-dir", str(tmp_path / "logs")]
    assert cli.main(argv) == 0
    assert "GAME OVER" in capsys.readouterr().out


def test_logging_section_must_be_a_mapping(cli, tmp_path, capsys):
    config = tmp_path / "werewolf.yaml"
    config.write_text("logging:\n  - logs\n")
    assert cli.main(["play", "--config", str(config), "--log-dir", str(tmp_path)]) == 1
    assert "must be a mapping" in capsys.readouterr().out


def test_play_prints_summary_and_exports(cli, tmp_path, capsys):
    export = tmp_path / "out" / "game.json"
    argv = ["play", "--players", "5", "--seed", "3", "--log-dir", str(tmp_path), "--export", str(export)]
    assert cli.main(argv) == 0

    out = capsys.readouterr().out
    assert "Records:" in out
    assert "Exported" in out
    document = json.loads(export.read_text())
    assert document["records"]
    # private records stay out of the export unless asked for
    assert all(r["event"] != "roles_dealt" for r in document["records"])
