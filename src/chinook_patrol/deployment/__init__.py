"""
Chinook Patrol Deployment Module.

This module connects the patrol planner to the host server:
- Tick scheduler for deferred, single-threaded tasks
- Hook registry for external vetoes
- The plugin that attaches patrol paths to spawned chinooks

Usage:
    from chinook_patrol.deployment import ChinookPatrolPlugin
    plugin = ChinookPatrolPlugin(config)
    plugin.on_server_initialized(monuments, drop_zones)
    plugin.on_entity_spawned(chinook)
"""

from .hooks import ON_BETTER_CHINOOK_PATROL, HookRegistry
from .plugin import ChinookPatrolPlugin
from .scheduler import TickScheduler

__all__ = [
    "ON_BETTER_CHINOOK_PATROL",
    "HookRegistry",
    "ChinookPatrolPlugin",
    "TickScheduler",
]
