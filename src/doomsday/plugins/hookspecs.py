"""Pluggy hook specifications for doomsday extensions."""

from __future__ import annotations

import pluggy

PROJECT_NAME = "doomsday"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DoomsdayHookSpec:
    """Hook specifications for the doomsday plugin system."""

    @hookspec(firstresult=True)
    def doomsday_start_server(self, manifest_path: str) -> int | None:
        """Run a doomsday server configured by *manifest_path* until it stops.

        Return the process exit status, or None to let another plugin handle it.
        """
