"""info: describe the currently targeted doomsday server."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomsday.commands._base import DoomsdayCommand
from doomsday.domain.types import Verb

if TYPE_CHECKING:
    from doomsday.commands._context import AppContext


@click.command(cls=DoomsdayCommand)
@click.pass_obj
def info(app: AppContext) -> None:
    """Get info about the currently targeted doomsday server."""
    app.run(Verb.INFO)
