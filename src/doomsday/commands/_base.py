"""Custom Click base classes: ``--examples`` support and verb aliases.

DoomsdayCommand and DoomsdayGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits.
DoomsdayGroup also resolves verb aliases (``auth`` → ``login``) to the
canonical command and lists them next to it in ``--help``. The alias as
typed is kept in ``ctx.meta`` so the dispatcher resolves it through the
command registry.
"""

from __future__ import annotations

from typing import Any

import click

# ctx.meta key holding the alias the operator typed, when one was used.
INVOKED_AS = "doomsday.invoked_as"


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class DoomsdayCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class DoomsdayGroup(click.Group):
    """Click Group with ``--examples`` support and verb aliases.

    Sets ``command_class = DoomsdayCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = DoomsdayCommand

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        aliases: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.aliases: dict[str, str] = dict(aliases or {})
        if examples:
            _add_examples_option(self, examples)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        name, cmd, rest = super().resolve_command(ctx, args)
        if cmd is not None and name in self.aliases:
            ctx.meta[INVOKED_AS] = name
        return (cmd.name if cmd else None), cmd, rest

    def format_commands(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        rows: list[tuple[str, str]] = []
        for name in self.list_commands(ctx):
            cmd = self.get_command(ctx, name)
            if cmd is None or cmd.hidden:
                continue
            names = [name, *sorted(a for a, target in self.aliases.items() if target == name)]
            rows.append((", ".join(names), cmd.get_short_help_str(formatter.width)))
        if rows:
            with formatter.section("Commands"):
                formatter.write_dl(rows)
