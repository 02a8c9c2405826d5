"""login (alias: auth): authenticate to the current target."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomsday.commands._base import DoomsdayCommand
from doomsday.domain.types import Verb

if TYPE_CHECKING:
    from doomsday.commands._context import AppContext


@click.command(
    cls=DoomsdayCommand,
    examples="""\
  doomsday login
  doomsday auth -u admin
  doomsday --no-interact login -u admin -p s3cret""",
)
@click.option("-u", "--username", default=None, help="The username to log in as.")
@click.option("-p", "--password", default=None, help="The password to log in with.")
@click.pass_obj
def login(app: AppContext, username: str | None, password: str | None) -> None:
    """Auth to the doomsday server."""
    app.run(Verb.LOGIN, username=username, password=password)
