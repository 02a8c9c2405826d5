"""list / dashboard (alias: dash) / refresh: the server's certificate cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomsday.commands._base import DoomsdayCommand
from doomsday.domain.types import Verb

if TYPE_CHECKING:
    from doomsday.commands._context import AppContext


@click.command(
    "list",
    cls=DoomsdayCommand,
    examples="""\
  doomsday list
  doomsday list --within 30d
  doomsday list --beyond 1y
  doomsday list -b 1d -w 2d12h""",
)
@click.option(
    "-b",
    "--beyond",
    metavar="1y2d3h4m",
    default=None,
    help="Restrict to certs that expire in longer than the given duration.",
)
@click.option(
    "-w",
    "--within",
    metavar="1y2d3h4m",
    default=None,
    help="Restrict to certs that expire in less than the given duration.",
)
@click.pass_obj
def list_cmd(app: AppContext, beyond: str | None, within: str | None) -> None:
    """List the contents of the server cache."""
    app.run(Verb.LIST, beyond=beyond, within=within)


@click.command(cls=DoomsdayCommand)
@click.pass_obj
def dashboard(app: AppContext) -> None:
    """See your impending doom."""
    app.run(Verb.DASHBOARD)


@click.command(cls=DoomsdayCommand)
@click.pass_obj
def refresh(app: AppContext) -> None:
    """Refresh the server's cache."""
    app.run(Verb.REFRESH)
