"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``doomsday.plugins`` group.
The server implementation is provided this way; the CLI does not bundle one.
"""

from doomsday.plugins.hookspecs import hookimpl
from doomsday.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
