"""Handler and SessionContext: the foundation every command handler builds on.

A handler is a stateless object registered under one or more verbs. It
declares through ``kind`` what the dispatcher must prepare before calling
:meth:`Handler.execute`, and receives all of it through an explicit
:class:`SessionContext` built fresh for the invocation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar

from doomsday.domain.errors import NoTargetSelectedError
from doomsday.domain.types import HandlerKind

if TYPE_CHECKING:
    from doomsday.config.settings import DoomsdaySettings
    from doomsday.domain.session import SessionConfig, TargetRecord
    from doomsday.infrastructure.client import DoomsdayClient
    from doomsday.services.result import ServiceResult

logger = logging.getLogger(__name__)

# (text, hide_input) -> answer
PromptFn = Callable[[str, bool], str]


def no_prompt(text: str, hide_input: bool) -> str:
    raise RuntimeError(f"interactive prompt not available: {text}")


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class SessionContext:
    """Everything a handler may use during one invocation.

    ``config`` and ``target`` are populated for every handler except the
    server handler; ``client`` only for remote handlers.
    """

    settings: DoomsdaySettings
    options: dict[str, Any] = field(default_factory=dict)
    config: SessionConfig | None = None
    target: TargetRecord | None = None
    client: DoomsdayClient | None = None
    prompt: PromptFn = no_prompt
    clock: Callable[[], datetime] = _utcnow

    def option(self, name: str, default: Any = None) -> Any:
        value = self.options.get(name)
        return default if value is None else value

    def require_config(self) -> SessionConfig:
        assert self.config is not None, "session config not loaded"
        return self.config

    def require_target(self) -> TargetRecord:
        if self.target is None:
            raise NoTargetSelectedError()
        return self.target

    def require_client(self) -> DoomsdayClient:
        assert self.client is not None, "client not bootstrapped"
        return self.client


class Handler(ABC):
    """Abstract base for all command handlers.

    Subclasses set ``op`` (the canonical verb used in results) and ``kind``,
    and implement :meth:`execute`. Handlers raise DoomsdayError subclasses
    (or let ``httpx.HTTPError`` escape) for failures; presentation of those
    failures belongs to the dispatcher.

    Usage::

        class InfoHandler(Handler):
            op = "info"

            def execute(self, ctx: SessionContext) -> ServiceResult:
                return success(self.op, ctx.require_client().info())
    """

    op: ClassVar[str]
    kind: ClassVar[HandlerKind] = HandlerKind.REMOTE

    @property
    def needs_session(self) -> bool:
        return self.kind is not HandlerKind.SERVER

    @property
    def needs_client(self) -> bool:
        return self.kind is HandlerKind.REMOTE

    @abstractmethod
    def execute(self, ctx: SessionContext) -> ServiceResult:
        """Run the command against *ctx*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} op={self.op!r} kind={self.kind.value}>"
