"""
Eligible waypoint set construction.

Runs once per world load: scans every monument, keeps the ones the filter
allows, and records which of them have a cargo drop zone nearby. The
resulting set is immutable and shared by every patrol path of the session.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from chinook_patrol.core.config import FilterRules
from chinook_patrol.core.types import DropZone, Location, WaypointCandidate
from chinook_patrol.planning.monument_filter import MonumentFilter
from chinook_patrol.utils.math import distances_2d

# Horizontal distance within which a drop zone counts as belonging to a monument
DROP_ZONE_DISTANCE_TOLERANCE = 200.0


@dataclass(frozen=True)
class EligibleWaypointSet:
    """
    Ordered, read-only sequence of eligible waypoint locations.

    Order is discovery order; patrol paths reshuffle it.
    """
    points: Tuple[Location, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Location]:
        return iter(self.points)

    def __getitem__(self, index: int) -> Location:
        return self.points[index]


@dataclass(frozen=True)
class DropZoneReportEntry:
    """One eligible monument in the drop zone report."""
    name: str
    has_drop_zone: bool


@dataclass(frozen=True)
class DropZoneReport:
    """
    Summary of eligible monuments and their drop zones.

    Attributes:
        entries: One entry per eligible monument, in discovery order
    """
    entries: Tuple[DropZoneReportEntry, ...] = ()

    @property
    def eligible_count(self) -> int:
        return len(self.entries)

    @property
    def drop_zone_count(self) -> int:
        return sum(1 for entry in self.entries if entry.has_drop_zone)

    def format(self) -> str:
        """Render the report as human-readable text."""
        lines = [
            f"{self.eligible_count} monuments on this map may be visited by Chinooks. "
            f"{self.drop_zone_count} have drop zones."
        ]
        for entry in self.entries:
            suffix = " -- HAS DROP ZONE" if entry.has_drop_zone else ""
            lines.append(f"- {entry.name}{suffix}")
        return "\n".join(lines)


def has_nearby_drop_zone(
    position: Location,
    drop_zones: Sequence[DropZone],
    tolerance: float = DROP_ZONE_DISTANCE_TOLERANCE,
) -> bool:
    """
    Check whether the closest drop zone lies within tolerance.

    Args:
        position: Monument position
        drop_zones: All known drop zones
        tolerance: Maximum horizontal distance (exclusive)

    Returns:
        True if the closest drop zone is closer than tolerance
    """
    if len(drop_zones) == 0:
        return False

    # Columns 0 and 2 are the horizontal x/z plane
    origin = position.as_array()[[0, 2]]
    zones = np.array([zone.position.as_array() for zone in drop_zones])[:, [0, 2]]
    distances = distances_2d(origin, zones)
    return bool(distances[int(np.argmin(distances))] < tolerance)


def build_eligible_set(
    candidates: Iterable[WaypointCandidate],
    rules: FilterRules,
    drop_zones: Sequence[DropZone] = (),
) -> Tuple[EligibleWaypointSet, DropZoneReport]:
    """
    Filter all monuments into the eligible waypoint set.

    Args:
        candidates: Every monument on the map
        rules: Filter rules
        drop_zones: Known drop zones, used only for the report

    Returns:
        (eligible_set, report)
    """
    monument_filter = MonumentFilter(rules)
    points: List[Location] = []
    entries: List[DropZoneReportEntry] = []

    for candidate in candidates:
        allowed, name = monument_filter.check(candidate)
        if not allowed:
            continue

        points.append(candidate.position)
        entries.append(DropZoneReportEntry(
            name=name,
            has_drop_zone=has_nearby_drop_zone(candidate.position, drop_zones),
        ))

    return EligibleWaypointSet(tuple(points)), DropZoneReport(tuple(entries))
