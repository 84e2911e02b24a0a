"""
Monument filtering and eligible waypoint selection.

This module decides which monuments a chinook may visit and builds the
session-wide eligible waypoint set from the map's monuments.
"""

from chinook_patrol.planning.monument_filter import (
    MonumentFilter,
    is_eligible,
    matches_exact,
    matches_partial,
)
from chinook_patrol.planning.eligible_set import (
    DROP_ZONE_DISTANCE_TOLERANCE,
    DropZoneReport,
    DropZoneReportEntry,
    EligibleWaypointSet,
    build_eligible_set,
    has_nearby_drop_zone,
)

__all__ = [
    "MonumentFilter",
    "is_eligible",
    "matches_exact",
    "matches_partial",
    "DROP_ZONE_DISTANCE_TOLERANCE",
    "DropZoneReport",
    "DropZoneReportEntry",
    "EligibleWaypointSet",
    "build_eligible_set",
    "has_nearby_drop_zone",
]
