"""Subcommand modules for doomsday.

Provides register_commands(), which uses deferred imports to keep
``doomsday --help`` fast. Every command is a thin Click shell that hands
its parsed flags to the dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all verbs on the root CLI group.

    Aliases are not registered here; the root group resolves them.
    """
    from doomsday.commands.cache import dashboard, list_cmd, refresh
    from doomsday.commands.info import info
    from doomsday.commands.login import login
    from doomsday.commands.scheduler import scheduler
    from doomsday.commands.server import server
    from doomsday.commands.target import target, targets

    cli.add_command(server)
    cli.add_command(target)
    cli.add_command(targets)
    cli.add_command(login)
    cli.add_command(list_cmd)
    cli.add_command(dashboard)
    cli.add_command(scheduler)
    cli.add_command(refresh)
    cli.add_command(info)
