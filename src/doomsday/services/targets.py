"""Target management handlers: ``target`` and ``targets``.

Both work on the loaded session config only and never build a client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from doomsday.domain.errors import UsageError
from doomsday.domain.session import (
    current_target,
    delete_target,
    select_target,
    set_target,
)
from doomsday.domain.types import HandlerKind, Verb
from doomsday.infrastructure.client import normalize_address, parse_address
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.domain.session import SessionConfig, TargetRecord
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult


def describe_target(record: TargetRecord, config: SessionConfig) -> dict[str, Any]:
    """Public view of a target. The token itself is never exposed."""
    return {
        "name": record.name,
        "address": record.address,
        "skip_verify": record.skip_verify,
        "authenticated": bool(record.token),
        "current": config.current == record.name,
    }


class TargetHandler(Handler):
    """Show, select, create/update, or delete a target.

    Options: ``name``, ``address``, ``skip_verify``, ``delete``.
    """

    op = Verb.TARGET.value
    kind = HandlerKind.SESSION

    def execute(self, ctx: SessionContext) -> ServiceResult:
        config = ctx.require_config()
        name: str | None = ctx.option("name")
        address: str | None = ctx.option("address")
        skip_verify = bool(ctx.option("skip_verify", False))
        warnings: list[str] = []

        if ctx.option("delete", False):
            if not name:
                raise UsageError("--delete requires a target name")
            if address:
                raise UsageError("--delete does not take an address")
            removed = delete_target(config, name)
            return success(self.op, {"action": "deleted" if removed else "absent", "name": name})

        if not name:
            record = current_target(config)
            target = describe_target(record, config) if record else None
            return success(self.op, {"action": "show", "target": target})

        if not address:
            if skip_verify:
                warnings.append("--insecure only applies when an address is given")
            record = select_target(config, name)
            return success(
                self.op,
                {"action": "selected", "target": describe_target(record, config)},
                warnings=warnings,
            )

        normalized = normalize_address(address)
        parse_address(normalized)
        created = name not in config.targets
        record = set_target(config, name, normalized, skip_verify)
        if skip_verify:
            warnings.append(f"TLS certificate validation is disabled for target '{name}'")
        return success(
            self.op,
            {
                "action": "created" if created else "updated",
                "target": describe_target(record, config),
            },
            warnings=warnings,
        )


class TargetsHandler(Handler):
    """List all configured targets, current one marked."""

    op = Verb.TARGETS.value
    kind = HandlerKind.SESSION

    def execute(self, ctx: SessionContext) -> ServiceResult:
        config = ctx.require_config()
        targets = [describe_target(config.targets[n], config) for n in sorted(config.targets)]
        selected = current_target(config)
        return success(
            self.op,
            {
                "targets": targets,
                "current": selected.name if selected else None,
                "count": len(targets),
            },
        )
