"""Tests for the root CLI group."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from replacer import __version__
from replacer.cli import cli


class TestRootGroup:
    def test_no_args_shows_help(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "render compilable Rust templates" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_registered_commands(self) -> None:
        assert set(cli.commands) >= {"render", "check", "rules"}

    def test_missing_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", "absent.toml", "rules"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_toml(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "replacer.toml").write_text("[rules\n")
        result = cli_runner.invoke(cli, ["rules"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_env_config(
        self, cli_runner: CliRunner, project_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        cfg = project_root / "elsewhere.toml"
        cfg.write_text('[rules.string]\nfrom_env = "yes"\n')
        monkeypatch.setenv("REPLACER_CONFIG", str(cfg))
        result = cli_runner.invoke(cli, ["-q", "rules"])
        assert result.exit_code == 0, result.output
        assert result.output == "from_env\n"
