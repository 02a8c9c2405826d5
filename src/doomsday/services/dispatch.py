"""Dispatcher: resolve a verb, prepare its context, run it, persist on success.

Sequence for one invocation::

    resolve handler
      -> load session file            (all handlers but server)
      -> build client for target      (remote handlers only)
      -> handler.execute(ctx)
      -> translate failure, or save session file

INVARIANT: The session file is written only after the handler succeeded,
and it is written after every success (saving is idempotent).
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import httpx

from doomsday.domain.errors import DoomsdayError, NoTargetSelectedError
from doomsday.domain.session import current_target
from doomsday.infrastructure.client import build_client
from doomsday.infrastructure.session_store import load_session, save_session
from doomsday.services.base import SessionContext, no_prompt
from doomsday.services.errors import result_from_error, translate
from doomsday.services.registry import CommandRegistry, default_registry

if TYPE_CHECKING:
    from doomsday.config.settings import DoomsdaySettings
    from doomsday.services.base import PromptFn
    from doomsday.services.result import ServiceResult

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs exactly one command per call to :meth:`dispatch`."""

    def __init__(
        self,
        settings: DoomsdaySettings,
        *,
        registry: CommandRegistry | None = None,
        prompt: PromptFn | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry or default_registry()
        self._prompt = prompt or no_prompt

    def dispatch(self, verb: str, **options: Any) -> ServiceResult:
        """Run *verb* with parsed *options* and return its (translated) result."""
        try:
            handler = self.registry.resolve(verb)
        except DoomsdayError as exc:
            return result_from_error(verb, exc)

        op = handler.op
        ctx = SessionContext(settings=self.settings, options=options, prompt=self._prompt)
        logger.debug("Dispatching %s as %s", verb, op)

        try:
            if handler.needs_session:
                ctx.config = load_session(self.settings.config_path)
                ctx.target = current_target(ctx.config)
            if handler.needs_client:
                if ctx.target is None:
                    raise NoTargetSelectedError()
                ctx.client = build_client(
                    ctx.target,
                    trace_sink=sys.stderr if self.settings.trace else None,
                    timeout=self.settings.http_timeout,
                )
            try:
                result = handler.execute(ctx)
            finally:
                if ctx.client is not None:
                    ctx.client.close()
        except (DoomsdayError, httpx.HTTPError) as exc:
            logger.debug("%s failed: %s", op, exc)
            return translate(result_from_error(op, exc))

        if not result.ok:
            return translate(result)

        if ctx.config is not None:
            try:
                save_session(ctx.config, self.settings.config_path)
            except DoomsdayError as exc:
                return result_from_error(op, exc)
        return result
