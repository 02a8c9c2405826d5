"""scheduler (alias: sched, hidden): inspect the server's refresh scheduler."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomsday.commands._base import DoomsdayCommand
from doomsday.domain.types import Verb

if TYPE_CHECKING:
    from doomsday.commands._context import AppContext


@click.command(cls=DoomsdayCommand, hidden=True)
@click.pass_obj
def scheduler(app: AppContext) -> None:
    """View the current state of the doomsday scheduler."""
    app.run(Verb.SCHEDULER)
