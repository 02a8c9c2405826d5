"""Tests for the command registry."""

from __future__ import annotations

import pytest

from doomsday.domain.errors import UnknownCommandError
from doomsday.domain.types import HandlerKind, Verb
from doomsday.services.base import Handler, SessionContext
from doomsday.services.registry import ALIASES, CommandRegistry, default_registry
from doomsday.services.result import ServiceResult, success


class _Echo(Handler):
    op = "echo"
    kind = HandlerKind.SESSION

    def execute(self, ctx: SessionContext) -> ServiceResult:
        return success(self.op)


class TestCommandRegistry:
    def test_register_and_resolve(self) -> None:
        registry = CommandRegistry()
        handler = _Echo()
        registry.register("echo", handler)
        assert registry.resolve("echo") is handler

    def test_duplicate_register_rejected(self) -> None:
        registry = CommandRegistry()
        registry.register("echo", _Echo())
        with pytest.raises(ValueError):
            registry.register("echo", _Echo())

    def test_alias_binds_same_object(self) -> None:
        registry = CommandRegistry()
        registry.register("echo", _Echo())
        registry.alias("say", "echo")
        assert registry.resolve("say") is registry.resolve("echo")
        assert registry.canonical("say") == "echo"
        assert registry.aliases_for("echo") == ["say"]

    def test_alias_of_alias_points_at_primary(self) -> None:
        registry = CommandRegistry()
        registry.register("echo", _Echo())
        registry.alias("say", "echo")
        registry.alias("shout", "say")
        assert registry.canonical("shout") == "echo"
        assert registry.resolve("shout") is registry.resolve("echo")

    def test_alias_to_unknown_verb(self) -> None:
        with pytest.raises(UnknownCommandError):
            CommandRegistry().alias("say", "echo")

    def test_unknown_verb(self) -> None:
        with pytest.raises(UnknownCommandError) as exc_info:
            CommandRegistry().resolve("nope")
        assert exc_info.value.code == "UNKNOWN_COMMAND"
        assert "nope" in str(exc_info.value)

    def test_verbs_exclude_aliases(self) -> None:
        registry = CommandRegistry()
        registry.register("echo", _Echo())
        registry.alias("say", "echo")
        assert registry.verbs() == ["echo"]
        assert "say" in registry


class TestDefaultRegistry:
    @pytest.mark.parametrize(("alias", "verb"), list(ALIASES.items()))
    def test_aliases_share_handler(self, alias: str, verb: str) -> None:
        registry = default_registry()
        assert registry.resolve(alias) is registry.resolve(verb)

    def test_spec_aliases(self) -> None:
        registry = default_registry()
        assert registry.resolve("auth") is registry.resolve("login")
        assert registry.resolve("dash") is registry.resolve("dashboard")
        assert registry.resolve("sched") is registry.resolve("scheduler")

    def test_every_verb_registered(self) -> None:
        registry = default_registry()
        for verb in Verb:
            assert verb.value in registry

    def test_primary_verbs(self) -> None:
        assert default_registry().verbs() == [
            "server",
            "target",
            "targets",
            "login",
            "list",
            "dashboard",
            "scheduler",
            "refresh",
            "info",
        ]

    @pytest.mark.parametrize(
        ("verb", "kind"),
        [
            ("server", HandlerKind.SERVER),
            ("target", HandlerKind.SESSION),
            ("targets", HandlerKind.SESSION),
            ("login", HandlerKind.REMOTE),
            ("list", HandlerKind.REMOTE),
            ("dashboard", HandlerKind.REMOTE),
            ("scheduler", HandlerKind.REMOTE),
            ("refresh", HandlerKind.REMOTE),
            ("info", HandlerKind.REMOTE),
        ],
    )
    def test_handler_kinds(self, verb: str, kind: HandlerKind) -> None:
        handler = default_registry().resolve(verb)
        assert handler.kind is kind
        assert handler.op == verb
        assert handler.needs_client is (kind is HandlerKind.REMOTE)
        assert handler.needs_session is (kind is not HandlerKind.SERVER)
