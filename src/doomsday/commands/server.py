"""server: start a doomsday server (provided by a plugin)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomsday.commands._base import DoomsdayCommand
from doomsday.domain.types import Verb
from doomsday.services.server import DEFAULT_MANIFEST

if TYPE_CHECKING:
    from doomsday.commands._context import AppContext


@click.command(
    cls=DoomsdayCommand,
    examples="""\
  doomsday server
  doomsday server -m /etc/doomsday/ddayconfig.yml""",
)
@click.option(
    "-m",
    "--manifest",
    default=DEFAULT_MANIFEST,
    show_default=True,
    help="The path to the server manifest.",
)
@click.pass_obj
def server(app: AppContext, manifest: str) -> None:
    """Start the doomsday server."""
    app.run(Verb.SERVER, manifest=manifest)
