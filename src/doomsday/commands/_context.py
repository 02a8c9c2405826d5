"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Owns the per-invocation Dispatcher and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from doomsday.commands._base import INVOKED_AS
from doomsday.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from doomsday.config.settings import DoomsdaySettings
    from doomsday.services.dispatch import Dispatcher
    from doomsday.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The dispatcher is
    created lazily so ``--help`` and ``--version`` never touch the
    session file.
    """

    def __init__(self, settings: DoomsdaySettings) -> None:
        self.settings = settings
        self._dispatcher: Dispatcher | None = None

        from doomsday.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def dispatcher(self) -> Dispatcher:
        if self._dispatcher is None:
            from doomsday.services.dispatch import Dispatcher

            self._dispatcher = Dispatcher(self.settings, prompt=self._prompt)
        return self._dispatcher

    @staticmethod
    def _prompt(text: str, hide_input: bool) -> str:
        return str(click.prompt(text, hide_input=hide_input, err=True))

    def run(self, verb: str, **options: Any) -> None:
        """Dispatch *verb* (or the alias it was invoked as) and emit its result."""
        ctx = click.get_current_context(silent=True)
        invoked = ctx.meta.get(INVOKED_AS) if ctx is not None else None
        self.emit(self.dispatcher.dispatch(invoked or verb, **options))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
