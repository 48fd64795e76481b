"""Root CLI group for replacer with global flags and command registration."""

from __future__ import annotations

import click

from replacer import __version__
from replacer.commands import register_commands
from replacer.commands._base import ReplacerGroup
from replacer.commands._context import AppContext
from replacer.config.settings import ReplacerSettings


@click.group(
    cls=ReplacerGroup,
    invoke_without_command=True,
    examples="""\
  replacer render src/template.rs -t replace_with_type=String
  replacer check src/template.rs
  replacer rules
  replacer -c ci/replacer.toml --json render src/template.rs -o src/generated.rs""",
)
@click.version_option(version=__version__, prog_name="replacer")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """replacer — render compilable Rust templates from rule sets."""
    settings = ReplacerSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
