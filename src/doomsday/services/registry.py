"""Command registry: verb → handler, aliases included.

An alias is a second entry pointing at the *same* handler object, so
``resolve("auth") is resolve("login")``.
"""

from __future__ import annotations

from doomsday.domain.errors import UnknownCommandError
from doomsday.domain.types import Verb
from doomsday.services.base import Handler

ALIASES: dict[str, str] = {
    Verb.AUTH: Verb.LOGIN,
    Verb.DASH: Verb.DASHBOARD,
    Verb.SCHED: Verb.SCHEDULER,
}


class CommandRegistry:
    """Maps verb strings to handler instances."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._aliases: dict[str, str] = {}

    def register(self, verb: str, handler: Handler) -> None:
        if verb in self._handlers:
            msg = f"verb already registered: {verb}"
            raise ValueError(msg)
        self._handlers[verb] = handler

    def alias(self, verb: str, existing: str) -> None:
        """Bind *verb* to the handler already registered under *existing*."""
        if verb in self._handlers:
            msg = f"verb already registered: {verb}"
            raise ValueError(msg)
        handler = self.resolve(existing)
        self._handlers[verb] = handler
        self._aliases[verb] = self.canonical(existing)

    def resolve(self, verb: str) -> Handler:
        try:
            return self._handlers[verb]
        except KeyError:
            raise UnknownCommandError(verb) from None

    def canonical(self, verb: str) -> str:
        """Return the primary verb for *verb* (itself unless it is an alias)."""
        self.resolve(verb)
        return self._aliases.get(verb, verb)

    def aliases_for(self, verb: str) -> list[str]:
        return sorted(a for a, target in self._aliases.items() if target == verb)

    def verbs(self) -> list[str]:
        """Primary verbs in registration order."""
        return [v for v in self._handlers if v not in self._aliases]

    def __contains__(self, verb: object) -> bool:
        return verb in self._handlers


def default_registry() -> CommandRegistry:
    """Registry with every doomsday verb and alias."""
    from doomsday.services.auth import LoginHandler
    from doomsday.services.cache import DashboardHandler, ListHandler, RefreshHandler
    from doomsday.services.info import InfoHandler
    from doomsday.services.scheduler import SchedulerHandler
    from doomsday.services.server import ServerHandler
    from doomsday.services.targets import TargetHandler, TargetsHandler

    registry = CommandRegistry()
    registry.register(Verb.SERVER, ServerHandler())
    registry.register(Verb.TARGET, TargetHandler())
    registry.register(Verb.TARGETS, TargetsHandler())
    registry.register(Verb.LOGIN, LoginHandler())
    registry.register(Verb.LIST, ListHandler())
    registry.register(Verb.DASHBOARD, DashboardHandler())
    registry.register(Verb.SCHEDULER, SchedulerHandler())
    registry.register(Verb.REFRESH, RefreshHandler())
    registry.register(Verb.INFO, InfoHandler())
    for alias, verb in ALIASES.items():
        registry.alias(alias, verb)
    return registry
