"""``info``: describe the currently targeted server."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doomsday.domain.types import Verb
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult


class InfoHandler(Handler):
    op = Verb.INFO.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        target = ctx.require_target()
        body = ctx.require_client().info()
        return success(
            self.op,
            {
                "target": target.name,
                "address": target.address,
                "version": body.get("version", "unknown"),
                "auth_type": body.get("auth_type", "none"),
            },
        )
