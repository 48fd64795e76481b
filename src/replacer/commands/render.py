"""Command: render a template file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from replacer.commands._base import ReplacerCommand
from replacer.commands._rules import collect_rules, rule_options

if TYPE_CHECKING:
    from replacer.commands._context import AppContext


@click.command(
    cls=ReplacerCommand,
    examples="""\
  replacer render src/template.rs
  replacer render src/template.rs -o src/generated.rs
  replacer render greet.rs -s replace_with_world=world
  replacer render types.rs -t replace_with_type=std::path::PathBuf
  replacer --json render src/template.rs""",
)
@click.argument("template", type=click.Path(dir_okay=False))
@click.option(
    "-o",
    "--output",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the result here instead of stdout.",
)
@rule_options
@click.pass_obj
def render(
    app: AppContext,
    template: str,
    output: str | None,
    namespace: str | None,
    **rule_flags: Any,
) -> None:
    """Substitute every marker in TEMPLATE using the configured rules."""
    app.emit(
        app.service.render(
            template,
            rules=collect_rules(**rule_flags),
            namespace=namespace,
            output_path=output,
        )
    )
