"""Subcommand modules for replacer.

Provides register_commands() which uses deferred imports to keep
``replacer --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from replacer.commands.check import check
    from replacer.commands.render import render
    from replacer.commands.rules import rules

    cli.add_command(render)
    cli.add_command(check)
    cli.add_command(rules)
