"""Tests for the check command."""

import json
from pathlib import Path

from click.testing import CliRunner

from replacer.cli import cli


class TestCheckCommand:
    def test_all_resolved(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "in.rs").write_text("$$a$$\nreplacer::rust_expr!(e; 0;)\n")
        result = cli_runner.invoke(cli, ["check", "in.rs", "-s", "a=x", "-e", "e=1 + 2"])
        assert result.exit_code == 0, result.output
        assert "markers: 2" in result.output

    def test_unresolved_fails(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "in.rs").write_text("$$a$$\n$$b$$\n")
        result = cli_runner.invoke(cli, ["check", "in.rs", "-s", "a=x"])
        assert result.exit_code == 1
        assert "1 problem(s) in in.rs" in result.output
        assert "UNRESOLVED_PLACEHOLDER" in result.output

    def test_json_report(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "in.rs").write_text("$$a$$")
        result = cli_runner.invoke(cli, ["--json", "check", "in.rs", "-t", "a=u8"])
        assert result.exit_code == 1
        parsed = json.loads(result.output)
        assert parsed["error"]["code"] == "CHECK_FAILED"
        assert parsed["error"]["detail"]["items"][0]["status"] == "KIND_MISMATCH"

    def test_missing_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "nope.rs"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"

    def test_bracketed_malformed_marker(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "in.rs").write_text("#[derive(Debug)]\nstruct S;\nlet a = $$[/x]$$;\n")
        result = cli_runner.invoke(cli, ["check", "in.rs"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "malformed 3:9" in result.output
        assert "'[/x]'" in result.output

    def test_verbose_detail_with_brackets(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "in.rs").write_text("let a = $$[bold]$$;")
        result = cli_runner.invoke(cli, ["-v", "check", "in.rs"])
        assert result.exit_code == 1
        assert "'[bold]'" in result.output
