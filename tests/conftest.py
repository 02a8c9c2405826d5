"""Shared pytest fixtures and test helpers for doomsday tests."""

from __future__ import annotations

import json
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from doomsday.config.settings import DoomsdaySettings
from doomsday.domain.session import SessionConfig, set_target
from doomsday.infrastructure import client as client_module
from doomsday.infrastructure.session_store import save_session

# Fixed "now" for cache tests: 2024-01-01T00:00:00Z
NOW_TS = 1_704_067_200
DAY = 24 * 60 * 60
NOW = datetime.fromtimestamp(NOW_TS, tz=UTC)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def session_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated session file location, wired in through the environment."""
    path = tmp_path / "doomsdayrc"
    monkeypatch.setenv("DOOMSDAY_CONFIG_PATH", str(path))
    return path


@pytest.fixture
def settings(session_path: Path) -> DoomsdaySettings:
    return DoomsdaySettings.from_cli()


@pytest.fixture
def targeted(session_path: Path) -> SessionConfig:
    """A saved session with one current target, ``prod``, and no token."""
    config = SessionConfig()
    set_target(config, "prod", "https://prod.example")
    save_session(config, session_path)
    return config


class FakeServer:
    """Records requests and answers them from a route table.

    Routes map ``"METHOD /path"`` to ``(status, json_body)`` or to a callable
    taking the request and returning an ``httpx.Response``.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def route(self, key: str, status: int = 200, body: Any = None) -> None:
        self.routes[key] = (status, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self.routes.get(f"{request.method} {request.url.path}")
        if entry is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(entry):
            return entry(request)
        status, body = entry
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, content=json.dumps(body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def fake_server(monkeypatch: pytest.MonkeyPatch) -> Generator[FakeServer]:
    """Route every client the dispatcher builds to an in-memory server."""
    server = FakeServer()
    real_build = client_module.build_client

    def build(target: Any, **kwargs: Any) -> client_module.DoomsdayClient:
        kwargs["transport"] = server.transport
        return real_build(target, **kwargs)

    monkeypatch.setattr("doomsday.services.dispatch.build_client", build)
    yield server


def cert(
    common_name: str, days: float, *, backend: str = "vault", base: float | None = None
) -> dict[str, Any]:
    """A ``/v1/cache`` entry expiring *days* after *base* (default: NOW_TS).

    CLI tests run against the real clock and pass ``base=time.time()``.
    """
    start = NOW_TS if base is None else base
    return {
        "common_name": common_name,
        "not_after": int(start + days * DAY),
        "paths": [{"backend": backend, "location": f"secret/{common_name}"}],
    }

