"""Shared pytest fixtures and test helpers for replacer tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from replacer.config.discovery import CONFIG_ENV_VAR
from replacer.config.settings import ReplacerSettings

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    """Return the text of a file under ``tests/fixtures``."""
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Temporary project directory with no replacer.toml, used as CWD.

    Clears ``REPLACER_*`` variables so the host environment never leaks
    into settings.
    """
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    for name in ("REPLACER_VERBOSE", "REPLACER_JSON_OUTPUT", "REPLACER_QUIET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def settings(project_root: Path) -> ReplacerSettings:
    """Default settings rooted at the temporary project."""
    return ReplacerSettings.from_cli(project_root=project_root)
