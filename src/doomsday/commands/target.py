"""target / targets: manage the doomsday servers this CLI talks to."""

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
  # Show the current target
  doomsday target

  # Add (or update) a target and select it
  doomsday target prod https://doomsday.example.com

  # Self-signed server certificate
  doomsday target lab 10.0.0.5:8111 --insecure

  # Switch to an existing target
  doomsday target prod

  # Forget a target (no error if it does not exist)
  doomsday target lab --delete""",
)
@click.argument("name", required=False)
@click.argument("address", required=False)
@click.option(
    "-k",
    "--insecure",
    "skip_verify",
    is_flag=True,
    help="Skip TLS cert validation for this backend.",
)
@click.option(
    "-d",
    "--delete",
    is_flag=True,
    help="Forget about the doomsday target with the given name. "
    "Delete will not fail if the target does not exist.",
)
@click.pass_obj
def target(
    app: AppContext,
    name: str | None,
    address: str | None,
    skip_verify: bool,
    delete: bool,
) -> None:
    """Manage targeted doomsday servers."""
    app.run(Verb.TARGET, name=name, address=address, skip_verify=skip_verify, delete=delete)


@click.command(cls=DoomsdayCommand)
@click.pass_obj
def targets(app: AppContext) -> None:
    """Print out configured targets."""
    app.run(Verb.TARGETS)
