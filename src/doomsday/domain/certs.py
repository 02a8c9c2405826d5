"""Certificate cache items as served by ``/v1/cache``, plus the rules the CLI
applies to them (duration filters and dashboard buckets).
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from doomsday.domain.errors import APIError


class CertPath(BaseModel):
    """Where a certificate was found: backend name plus location in it."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    backend: str = ""
    location: str = ""


class CacheItem(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    common_name: str = ""
    not_after: int
    paths: list[CertPath] = Field(default_factory=list)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.not_after, tz=UTC)

    def remaining(self, now: datetime) -> timedelta:
        return self.expires_at - now

    def to_row(self, now: datetime) -> dict[str, Any]:
        """Flatten for output: one dict per certificate."""
        remaining = self.remaining(now)
        return {
            "common_name": self.common_name,
            "not_after": self.not_after,
            "expires_at": self.expires_at.isoformat(),
            "remaining_seconds": int(remaining.total_seconds()),
            "expired": remaining <= timedelta(0),
            "paths": [p.model_dump() for p in self.paths],
        }


def parse_cache(payload: dict[str, Any]) -> list[CacheItem]:
    """Build CacheItems from a ``/v1/cache`` response body, soonest first."""
    raw_items = payload.get("content") or []
    if not isinstance(raw_items, list):
        raise APIError(200, "Server returned an unexpected cache payload")
    try:
        items = [CacheItem.model_validate(raw) for raw in raw_items]
    except ValidationError as exc:
        raise APIError(200, "Server returned an unexpected cache payload") from exc
    return sorted(items, key=lambda item: (item.not_after, item.common_name))


def filter_items(
    items: list[CacheItem],
    now: datetime,
    *,
    beyond: timedelta | None = None,
    within: timedelta | None = None,
) -> list[CacheItem]:
    """Keep items expiring later than *beyond* and sooner than *within*."""
    kept: list[CacheItem] = []
    for item in items:
        remaining = item.remaining(now)
        if beyond is not None and remaining <= beyond:
            continue
        if within is not None and remaining >= within:
            continue
        kept.append(item)
    return kept


# (key, label, upper bound). Items are placed in the first bucket whose bound
# they fall under; anything past the last bound is not shown.
DASHBOARD_BUCKETS: tuple[tuple[str, str, timedelta], ...] = (
    ("expired", "Expired", timedelta(0)),
    ("48h", "Expiring within 48 hours", timedelta(hours=48)),
    ("7d", "Expiring within 7 days", timedelta(days=7)),
    ("28d", "Expiring within 28 days", timedelta(days=28)),
)


def dashboard_buckets(
    items: list[CacheItem], now: datetime
) -> tuple[dict[str, list[CacheItem]], int]:
    """Split *items* into dashboard buckets.

    Returns ``(buckets, healthy)`` where *healthy* counts items beyond the
    last bucket.
    """
    buckets: dict[str, list[CacheItem]] = {key: [] for key, _, _ in DASHBOARD_BUCKETS}
    healthy = 0
    for item in items:
        remaining = item.remaining(now)
        for key, _label, bound in DASHBOARD_BUCKETS:
            if remaining <= bound:
                buckets[key].append(item)
                break
        else:
            healthy += 1
    return buckets, healthy
