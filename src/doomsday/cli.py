"""Root CLI group for doomsday with global flags and command registration."""

from __future__ import annotations

import click

from doomsday import __version__
from doomsday.commands import register_commands
from doomsday.commands._base import DoomsdayGroup
from doomsday.commands._context import AppContext
from doomsday.config.settings import DoomsdaySettings
from doomsday.services.registry import ALIASES


@click.group(
    "doomsday",
    cls=DoomsdayGroup,
    aliases={str(alias): str(verb) for alias, verb in ALIASES.items()},
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "-v", "--version", prog_name="doomsday")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Session file holding targets and tokens (default: ~/.doomsdayrc).",
)
@click.option("--trace", is_flag=True, help="Dump raw HTTP requests and responses to stderr.")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Never prompt; fail on missing input.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    trace: bool,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
) -> None:
    """doomsday: cert expiration tracker."""
    settings = DoomsdaySettings.from_cli(
        config_path=config_path,
        trace=trace,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)


def main() -> None:
    cli()
