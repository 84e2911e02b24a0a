"""
Core data structures and configuration for chinook patrol planning.

This module provides the fundamental building blocks for representing:
- Map locations and monuments
- Monument categories and tiers
- Drop zones and crate drop ranges
- The host chinook agent and its brain
- Plugin configuration and filter rules
"""

from chinook_patrol.core.types import (
    Location,
    MonumentCategory,
    MonumentTier,
    WaypointCandidate,
    DropZone,
    CargoDropRange,
    AIState,
    AgentBrain,
    CargoAgent,
)
from chinook_patrol.core.config import (
    ConfigError,
    FilterRules,
    PatrolConfig,
    load_config,
    merge_missing_keys,
)
from chinook_patrol.core.map_data import load_map_yaml, parse_monument

__all__ = [
    # Data structures
    "Location",
    "MonumentCategory",
    "MonumentTier",
    "WaypointCandidate",
    "DropZone",
    "CargoDropRange",
    "AIState",
    "AgentBrain",
    "CargoAgent",
    # Configuration
    "ConfigError",
    "FilterRules",
    "PatrolConfig",
    "load_config",
    "merge_missing_keys",
    # Map data
    "load_map_yaml",
    "parse_monument",
]
