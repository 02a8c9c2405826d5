"""CLI tests for the verbs that talk to the targeted server."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from doomsday.cli import cli
from doomsday.domain.session import SessionConfig
from doomsday.infrastructure.session_store import load_session
from doomsday.services.dispatch import Dispatcher
from doomsday.services.result import ServiceResult
from tests.conftest import FakeServer, cert


@pytest.fixture
def now() -> float:
    return time.time()


def _content(*entries: dict[str, Any]) -> dict[str, Any]:
    return {"content": list(entries)}


class TestLogin:
    def test_login_with_flags(
        self,
        cli_runner: CliRunner,
        session_path: Path,
        targeted: SessionConfig,
        fake_server: FakeServer,
    ) -> None:
        fake_server.route("GET /v1/info", body={"version": "1.0", "auth_type": "userpass"})
        fake_server.route("POST /v1/auth", body={"token": "fresh-token"})
        result = cli_runner.invoke(cli, ["login", "-u", "admin", "-p", "pw"])
        assert result.exit_code == 0, result.output
        assert "Logged in to prod as admin" in result.stdout
        assert load_session(session_path).targets["prod"].token == "fresh-token"

    def test_auth_alias_prompts(
        self,
        cli_runner: CliRunner,
        session_path: Path,
        targeted: SessionConfig,
        fake_server: FakeServer,
    ) -> None:
        fake_server.route("GET /v1/info", body={"auth_type": "userpass"})
        fake_server.route("POST /v1/auth", body={"token": "t2"})
        result = cli_runner.invoke(cli, ["auth"], input="admin\npw\n")
        assert result.exit_code == 0, result.output
        assert load_session(session_path).targets["prod"].token == "t2"

    def test_no_interact_missing_password(
        self,
        cli_runner: CliRunner,
        session_path: Path,
        targeted: SessionConfig,
        fake_server: FakeServer,
    ) -> None:
        fake_server.route("GET /v1/info", body={"auth_type": "userpass"})
        result = cli_runner.invoke(cli, ["--no-interact", "login", "-u", "admin"])
        assert result.exit_code == 1
        assert "missing password" in result.stderr
        assert all(r.url.path != "/v1/auth" for r in fake_server.requests)

    def test_rejected_credentials_not_saved(
        self,
        cli_runner: CliRunner,
        session_path: Path,
        targeted: SessionConfig,
        fake_server: FakeServer,
    ) -> None:
        before = session_path.read_text()
        fake_server.route("GET /v1/info", body={"auth_type": "userpass"})
        fake_server.route("POST /v1/auth", 401, {"error": "bad credentials"})
        result = cli_runner.invoke(cli, ["login", "-u", "admin", "-p", "wrong"])
        assert result.exit_code == 1
        assert "Please log in" in result.stderr
        assert session_path.read_text() == before

    def test_open_server(
        self,
        cli_runner: CliRunner,
        session_path: Path,
        targeted: SessionConfig,
        fake_server: FakeServer,
    ) -> None:
        fake_server.route("GET /v1/info", body={"auth_type": "none"})
        result = cli_runner.invoke(cli, ["login"])
        assert result.exit_code == 0
        assert "does not require authentication" in result.stderr


class TestList:
    def test_table(
        self,
        cli_runner: CliRunner,
        targeted: SessionConfig,
        fake_server: FakeServer,
        now: float,
    ) -> None:
        fake_server.route(
            "GET /v1/cache",
            body=_content(cert("later.example", 90, base=now), cert("soon.example", 3, base=now)),
        )
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert result.stdout.index("soon.example") < result.stdout.index("later.example")

    def test_within_filter_json(
        self,
        cli_runner: CliRunner,
        targeted: SessionConfig,
        fake_server: FakeServer,
        now: float,
    ) -> None:
        fake_server.route(
            "GET /v1/cache",
            body=_content(cert("later.example", 90, base=now), cert("soon.example", 3, base=now)),
        )
        result = cli_runner.invoke(cli, ["--json", "list", "--within", "30d"])
        payload = json.loads(result.stdout)
        assert [i["common_name"] for i in payload["data"]["items"]] == ["soon.example"]

    def test_bad_duration(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        result = cli_runner.invoke(cli, ["list", "-w", "fortnight"])
        assert result.exit_code == 1
        assert "Invalid duration 'fortnight'" in result.stderr
        assert fake_server.requests == []

    def test_malformed_cache_fails_cleanly(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("GET /v1/cache", body=_content({"common_name": "x"}))
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert result.stderr.strip().splitlines() == [
            "ERROR  list: Server returned an unexpected cache payload"
        ]


class TestDashboard:
    @pytest.mark.parametrize("verb", ["dashboard", "dash"])
    def test_buckets(
        self,
        cli_runner: CliRunner,
        targeted: SessionConfig,
        fake_server: FakeServer,
        now: float,
        verb: str,
    ) -> None:
        fake_server.route(
            "GET /v1/cache",
            body=_content(cert("dead.example", -2, base=now), cert("ok.example", 400, base=now)),
        )
        result = cli_runner.invoke(cli, [verb])
        assert result.exit_code == 0, result.output
        assert "Expired (1)" in result.stdout
        assert "1 certificate(s) further out" in result.stdout

    def test_json_op_is_canonical(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("GET /v1/cache", body={"content": []})
        result = cli_runner.invoke(cli, ["--json", "dash"])
        assert json.loads(result.stdout)["op"] == "dashboard"


class TestSchedulerRefreshInfo:
    @pytest.mark.parametrize("verb", ["scheduler", "sched"])
    def test_scheduler(
        self,
        cli_runner: CliRunner,
        targeted: SessionConfig,
        fake_server: FakeServer,
        verb: str,
    ) -> None:
        fake_server.route("GET /v1/scheduler", body={"workers": 2, "running": [], "pending": []})
        result = cli_runner.invoke(cli, [verb])
        assert result.exit_code == 0, result.output
        assert "workers: 2" in result.stdout

    def test_refresh(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("POST /v1/cache/refresh", body={})
        result = cli_runner.invoke(cli, ["refresh"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Refresh successful"

    def test_info(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("GET /v1/info", body={"version": "0.9.1", "auth_type": "userpass"})
        result = cli_runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "0.9.1" in result.stdout

    def test_server_error(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("POST /v1/cache/refresh", 500, {"error": "backend unreachable"})
        result = cli_runner.invoke(cli, ["refresh"])
        assert result.exit_code == 1
        assert "backend unreachable" in result.stderr
        assert result.stdout == ""

    def test_trace_dumps_traffic(
        self, cli_runner: CliRunner, targeted: SessionConfig, fake_server: FakeServer
    ) -> None:
        fake_server.route("GET /v1/info", body={"version": "0.9.1"})
        result = cli_runner.invoke(cli, ["--trace", "info"])
        assert result.exit_code == 0
        assert "GET https://prod.example/v1/info" in result.stderr
        assert "0.9.1" in result.stderr


class TestAliasDispatch:
    @pytest.mark.parametrize(
        ("typed", "path"),
        [("dash", "/v1/cache"), ("sched", "/v1/scheduler"), ("dashboard", "/v1/cache")],
    )
    def test_verb_dispatched_as_typed(
        self,
        cli_runner: CliRunner,
        targeted: SessionConfig,
        fake_server: FakeServer,
        monkeypatch: pytest.MonkeyPatch,
        typed: str,
        path: str,
    ) -> None:
        seen: list[str] = []
        real_dispatch = Dispatcher.dispatch

        def recording(self: Dispatcher, verb: str, **options: Any) -> ServiceResult:
            seen.append(str(verb))
            return real_dispatch(self, verb, **options)

        monkeypatch.setattr(Dispatcher, "dispatch", recording)
        fake_server.route(f"GET {path}", body={})
        result = cli_runner.invoke(cli, [typed])
        assert result.exit_code == 0, result.output
        assert seen == [typed]
