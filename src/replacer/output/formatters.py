"""Output mode selection for ServiceResult.

The CLI renders ServiceResult for humans (Rich) or machines (--json).
A successful render to stdout is the exception: its payload is the
rendered source itself and is emitted byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from replacer.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from replacer.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def is_raw_output(result: ServiceResult, settings: OutputSettings) -> bool:
    """A successful stdout render is printed as the rendered text itself."""
    return (
        result.ok
        and result.op == "render"
        and not settings.json_output
        and "written_to" not in result.data
        and "output" in result.data
    )


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if is_raw_output(result, settings):
        return str(result.data["output"])
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
