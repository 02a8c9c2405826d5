"""HTTP client for a doomsday server, bound to a single target.

One client is built per invocation by :func:`build_client` from the current
target. The TLS trust policy comes from that target alone; there is no global
default to fall back on.
"""

from __future__ import annotations

import logging
from typing import Any, TextIO

import httpx

from doomsday.domain.errors import AddressParseError, APIError, UnauthorizedError
from doomsday.domain.session import TargetRecord

TOKEN_HEADER = "X-Doomsday-Token"

logger = logging.getLogger(__name__)


def normalize_address(address: str) -> str:
    """Default a scheme-less address to https and drop trailing slashes."""
    value = address.strip()
    if value and "://" not in value:
        value = f"https://{value}"
    return value.rstrip("/")


def parse_address(address: str) -> httpx.URL:
    """Parse a target address into an absolute http(s) URL."""
    try:
        url = httpx.URL(address)
    except (httpx.InvalidURL, TypeError) as exc:
        raise AddressParseError(address) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise AddressParseError(address)
    return url


class DoomsdayClient:
    """Synchronous client for the doomsday ``/v1`` API.

    Usage::

        with build_client(target) as client:
            info = client.info()

    Every call issues one request and waits for it. 401 responses raise
    :class:`UnauthorizedError`; other error statuses raise :class:`APIError`.
    Network failures propagate as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        base_url: httpx.URL,
        *,
        transport: httpx.BaseTransport,
        token: str = "",
        skip_verify: bool = False,
        trace_sink: TextIO | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url
        self.token = token
        self.skip_verify = skip_verify
        self.trace_sink = trace_sink

        headers = {"Accept": "application/json"}
        if token:
            headers[TOKEN_HEADER] = token

        event_hooks: dict[str, list[Any]] = {}
        if trace_sink is not None:
            event_hooks = {"request": [self._trace_request], "response": [self._trace_response]}

        self._http = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
            event_hooks=event_hooks,
        )

    def __enter__(self) -> DoomsdayClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # --- API ---

    def info(self) -> dict[str, Any]:
        return self._request("GET", "/v1/info")

    def authenticate(self, username: str, password: str) -> str:
        """Exchange credentials for a session token."""
        credentials = {"username": username, "password": password}
        body = self._request("POST", "/v1/auth", json=credentials)
        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise APIError(200, "Server did not return a token")
        return token

    def cache(self) -> dict[str, Any]:
        return self._request("GET", "/v1/cache")

    def scheduler(self) -> dict[str, Any]:
        return self._request("GET", "/v1/scheduler")

    def refresh(self) -> dict[str, Any]:
        return self._request("POST", "/v1/cache/refresh", json={})

    # --- Internals ---

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug("API request %s %s", method, path)
        response = self._http.request(method, path, **kwargs)
        logger.debug("API response %s %s -> %d", method, path, response.status_code)

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise UnauthorizedError(_error_message(response))
        if response.is_error:
            raise APIError(response.status_code, _error_message(response))
        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as exc:
            raise APIError(response.status_code, "Server returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise APIError(response.status_code, "Server returned an unexpected payload")
        return body

    def _trace_request(self, request: httpx.Request) -> None:
        assert self.trace_sink is not None
        lines = [f"{request.method} {request.url} HTTP/1.1"]
        lines.extend(f"{k}: {v}" for k, v in request.headers.items())
        self.trace_sink.write("\n".join(lines) + "\n\n")
        if request.content:
            self.trace_sink.write(request.content.decode("utf-8", errors="replace") + "\n")
        self.trace_sink.flush()

    def _trace_response(self, response: httpx.Response) -> None:
        assert self.trace_sink is not None
        response.read()
        lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
        lines.extend(f"{k}: {v}" for k, v in response.headers.items())
        self.trace_sink.write("\n".join(lines) + "\n\n")
        if response.content:
            self.trace_sink.write(response.text + "\n")
        self.trace_sink.flush()


def _error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    if text:
        return text
    return f"{response.status_code} {response.reason_phrase}"


def build_client(
    target: TargetRecord,
    *,
    trace_sink: TextIO | None = None,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> DoomsdayClient:
    """Construct a client for *target*.

    The certificate-validation policy is exactly ``not target.skip_verify``.
    *trace_sink* receives raw request/response dumps and does not change
    behaviour. *transport* replaces the network transport (tests).
    """
    base_url = parse_address(target.address)
    if transport is None:
        transport = httpx.HTTPTransport(verify=not target.skip_verify)
    return DoomsdayClient(
        base_url,
        transport=transport,
        token=target.token,
        skip_verify=target.skip_verify,
        trace_sink=trace_sink,
        timeout=timeout,
    )
