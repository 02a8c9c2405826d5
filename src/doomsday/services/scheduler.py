"""``scheduler`` (alias ``sched``): show the server's refresh scheduler state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from doomsday.domain.types import Verb
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult

_TASK_KEYS = ("id", "at", "backend", "reason", "kind", "state", "ready")


def _task(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    return {key: raw.get(key) for key in _TASK_KEYS if key in raw}


class SchedulerHandler(Handler):
    op = Verb.SCHEDULER.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        body = ctx.require_client().scheduler()
        running = [_task(t) for t in body.get("running") or []]
        pending = [_task(t) for t in body.get("pending") or []]
        return success(
            self.op,
            {
                "workers": body.get("workers"),
                "running": running,
                "pending": pending,
            },
        )
