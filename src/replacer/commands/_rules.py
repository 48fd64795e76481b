"""Shared ad-hoc rule options for commands that build a template.

``-s/--string``, ``-t/--type``, ``-e/--expr`` and ``--struct`` each take
``KEY=VALUE`` and may be repeated. They are collected in command-line
kind order and override rules from replacer.toml with the same key.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])

_RULE_FLAGS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("string", ("-s", "--string", "string_rules"), "String rule KEY=VALUE for $$KEY$$."),
    ("type", ("-t", "--type", "type_rules"), "Type rule KEY=VALUE for rust_type!(KEY; ..;)."),
    ("expr", ("-e", "--expr", "expr_rules"), "Expression rule KEY=VALUE for rust_expr!(KEY; ..;)."),
    ("struct", ("--struct", "struct_rules"), "Struct rule KEY=VALUE for rust_struct!{KEY; ..;}."),
)


def _split_pair(
    ctx: click.Context,
    param: click.Parameter,
    values: tuple[str, ...],
) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {raw!r}"
            raise click.BadParameter(msg, ctx=ctx, param=param)
        pairs.append((key.strip(), value))
    return pairs


def rule_options(func: F) -> F:
    """Decorate a command with the ad-hoc rule options and ``--namespace``."""
    func = click.option(
        "--namespace",
        default=None,
        help="Only match macro markers under this crate path (e.g. 'replacer').",
    )(func)
    for _kind, decls, help_text in reversed(_RULE_FLAGS):
        func = click.option(*decls, multiple=True, callback=_split_pair, help=help_text)(func)
    return func


def collect_rules(**options: Any) -> list[tuple[str, str, str]]:
    """Flatten the parsed rule options into ``(kind, key, value)`` triples."""
    rules: list[tuple[str, str, str]] = []
    for kind, decls, _help in _RULE_FLAGS:
        for key, value in options.get(decls[-1]) or ():
            rules.append((kind, key, value))
    return rules
