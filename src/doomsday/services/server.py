"""``server``: start a doomsday server through an installed plugin.

This is the only handler that never loads the session file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from doomsday.domain.errors import (
    ManifestNotFoundError,
    ServerFailedError,
    ServerUnavailableError,
)
from doomsday.domain.types import HandlerKind, Verb
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.plugins.manager import PluginManager
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult

DEFAULT_MANIFEST = "ddayconfig.yml"

logger = logging.getLogger(__name__)


class ServerHandler(Handler):
    """Hand the manifest to the first plugin implementing ``doomsday_start_server``."""

    op = Verb.SERVER.value
    kind = HandlerKind.SERVER

    def __init__(self, plugins: PluginManager | None = None) -> None:
        self._plugins = plugins

    def execute(self, ctx: SessionContext) -> ServiceResult:
        manifest = Path(ctx.option("manifest", DEFAULT_MANIFEST)).expanduser()
        if not manifest.is_file():
            raise ManifestNotFoundError(manifest)

        plugins = self._load_plugins()
        logger.debug("Starting server with manifest %s", manifest)
        try:
            status = plugins.hook.doomsday_start_server(manifest_path=str(manifest))
        except Exception as exc:
            raise ServerFailedError(str(exc) or type(exc).__name__) from exc
        if status is None:
            raise ServerUnavailableError()
        if int(status) != 0:
            raise ServerFailedError(f"exited with status {status}", exit_code=int(status))
        return success(self.op, {"manifest": str(manifest), "exit_code": int(status)})

    def _load_plugins(self) -> PluginManager:
        if self._plugins is None:
            from doomsday.plugins.manager import PluginManager

            self._plugins = PluginManager()
        if not self._plugins.is_loaded:
            self._plugins.discover_and_load()
        return self._plugins
