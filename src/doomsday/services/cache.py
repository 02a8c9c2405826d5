"""Certificate cache handlers: ``list``, ``dashboard`` (alias ``dash``), ``refresh``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doomsday.domain.certs import DASHBOARD_BUCKETS, dashboard_buckets, filter_items, parse_cache
from doomsday.domain.durations import parse_duration
from doomsday.domain.types import Verb
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult


class ListHandler(Handler):
    """List cached certificates, soonest expiry first.

    Options: ``beyond`` / ``within`` durations (``1y2d3h4m``).
    """

    op = Verb.LIST.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        # Parse filters before touching the network.
        beyond = parse_duration(ctx.option("beyond"))
        within = parse_duration(ctx.option("within"))

        now = ctx.clock()
        items = parse_cache(ctx.require_client().cache())
        kept = filter_items(items, now, beyond=beyond, within=within)
        return success(
            self.op,
            {
                "items": [item.to_row(now) for item in kept],
                "count": len(kept),
                "total": len(items),
            },
        )


class DashboardHandler(Handler):
    """Summarize certificates by how soon they expire."""

    op = Verb.DASHBOARD.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        now = ctx.clock()
        items = parse_cache(ctx.require_client().cache())
        buckets, healthy = dashboard_buckets(items, now)
        return success(
            self.op,
            {
                "buckets": [
                    {
                        "key": key,
                        "label": label,
                        "items": [item.to_row(now) for item in buckets[key]],
                    }
                    for key, label, _bound in DASHBOARD_BUCKETS
                ],
                "healthy": healthy,
                "total": len(items),
            },
        )


class RefreshHandler(Handler):
    """Ask the server to refresh its certificate cache."""

    op = Verb.REFRESH.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        body = ctx.require_client().refresh()
        return success(self.op, {"refreshed": True, **body})
