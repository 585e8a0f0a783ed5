"""Root CLI group for radr with global flags and command registration."""

from __future__ import annotations

import click

from radr import __version__
from radr.commands import register_commands
from radr.commands._base import RadrGroup
from radr.commands._context import AppContext
from radr.config.settings import RadrSettings


@click.group(
    cls=RadrGroup,
    invoke_without_command=True,
    examples="""\
  radr new "Use PostgreSQL for persistence"
  radr accept 1
  radr supersede 1 "Switch to SQLite"
  radr --json list""",
)
@click.version_option(version=__version__, prog_name="radr")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
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
    """radr — Architecture Decision Record manager."""
    ctx.ensure_object(dict)
    settings = RadrSettings.from_cli(
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
