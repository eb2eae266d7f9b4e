"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) in the ``capsule.plugins`` group,
plus an optional local plugin directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from capsule.plugins.hookspecs import hookimpl
from capsule.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
