"""Command: report markers and unresolved placeholders without rendering."""

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
  replacer check src/template.rs
  replacer -v check src/template.rs
  replacer check src/template.rs -t replace_with_type=String
  replacer --json check src/template.rs""",
)
@click.argument("template", type=click.Path(dir_okay=False))
@rule_options
@click.pass_obj
def check(app: AppContext, template: str, namespace: str | None, **rule_flags: Any) -> None:
    """List every marker in TEMPLATE and fail if any would not resolve."""
    app.emit(
        app.service.check(
            template,
            rules=collect_rules(**rule_flags),
            namespace=namespace,
        )
    )
