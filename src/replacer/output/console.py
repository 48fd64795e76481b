"""Rich Console factory and theme for replacer output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

REPLACER_THEME = Theme(
    {
        "rp.ok": "bold green",
        "rp.error": "bold red",
        "rp.warning": "bold yellow",
        "rp.op": "bold cyan",
        "rp.key": "dim",
        "rp.name": "bold blue",
        "rp.path": "dim",
        "rp.kind.string": "green",
        "rp.kind.type": "blue",
        "rp.kind.expr": "magenta",
        "rp.kind.struct": "yellow",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "ok": "rp.ok",
    "UNRESOLVED_PLACEHOLDER": "rp.error",
    "KIND_MISMATCH": "rp.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=REPLACER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a rule kind."""
    return f"rp.kind.{kind}" if kind in ("string", "type", "expr", "struct") else ""


def style_for_status(status: str) -> str:
    """Return the Rich style name for a marker resolution status."""
    return _STATUS_STYLES.get(status, "")
