"""Compact duration strings such as ``1y2d3h4m``.

Years are 365 days. Units must appear at most once each, largest first.
"""

from __future__ import annotations

import re
from datetime import timedelta

from doomsday.domain.errors import InvalidDurationError

_UNIT_SECONDS: dict[str, int] = {
    "y": 365 * 24 * 60 * 60,
    "d": 24 * 60 * 60,
    "h": 60 * 60,
    "m": 60,
    "s": 1,
}

_DURATION_RE = re.compile(r"^(?:(\d+)y)?(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$")


def parse_duration(text: str | None) -> timedelta | None:
    """Parse *text* into a timedelta. Empty input means "no duration"."""
    if text is None:
        return None
    raw = text.strip().lower()
    if not raw:
        return None
    match = _DURATION_RE.match(raw)
    if match is None:
        raise InvalidDurationError(text)
    total = 0
    for unit, amount in zip("ydhms", match.groups(), strict=True):
        if amount is not None:
            total += int(amount) * _UNIT_SECONDS[unit]
    return timedelta(seconds=total)


def format_duration(delta: timedelta) -> str:
    """Render *delta* in the same compact form, dropping seconds.

    Anything under a minute renders as ``0m``.
    """
    remaining = max(int(delta.total_seconds()), 0)
    parts: list[str] = []
    for unit in "ydhm":
        size = _UNIT_SECONDS[unit]
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{unit}")
    return "".join(parts) or "0m"
