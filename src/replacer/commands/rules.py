"""Command: list the rules a render would apply."""

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
  replacer rules
  replacer rules -s greeting=hello
  replacer --json rules""",
)
@rule_options
@click.pass_obj
def rules(app: AppContext, namespace: str | None, **rule_flags: Any) -> None:
    """Show configured rules merged with any given on the command line."""
    app.emit(app.service.list_rules(rules=collect_rules(**rule_flags), namespace=namespace))
