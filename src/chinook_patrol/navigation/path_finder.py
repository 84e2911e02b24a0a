"""
Patrol path generation for chinooks.

Provides the path finder abstraction queried by the host agent controller
and the shuffled, proximity-deduplicated patrol path that replaces the
host's default behaviour.

The host default picks a random monument on every query, so a chinook can
fly back to the monument it just left, or to one right next to it. A
PatrolPath instead visits every eligible monument once per cycle in a
random order, skipping monuments that sit within MIN_WAYPOINT_SEPARATION
of one already on the path.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

import numpy as np

from chinook_patrol.core.types import Location

# Two waypoints closer than this (horizontal distance) count as the same place
MIN_WAYPOINT_SEPARATION = 100.0


class PathFinder(ABC):
    """
    Abstract interface for chinook path finders.

    The host agent controller asks its path finder for the next waypoint
    whenever the current one has been reached. Implementations:
    - HostPathFinder: host default, uniform random pick per query
    - PatrolPath: shuffled round-robin over a deduplicated path
    """

    @abstractmethod
    def next_waypoint(self) -> Location:
        """
        Return the next waypoint to fly to.

        Returns:
            Waypoint location, or Location.ZERO when none is available
        """
        pass


class HostPathFinder(PathFinder):
    """
    Host default path finder: a random point on every query.

    Args:
        points: Candidate waypoints
        rng: Random generator
    """

    def __init__(self, points: Sequence[Location], rng: Optional[np.random.Generator] = None):
        self.points = tuple(points)
        self.rng = rng if rng is not None else np.random.default_rng()

    def next_waypoint(self) -> Location:
        if not self.points:
            return Location.ZERO
        return self.points[int(self.rng.integers(0, len(self.points)))]


def deduplicate_by_proximity(
    points: Sequence[Location],
    min_separation: float = MIN_WAYPOINT_SEPARATION,
) -> List[Location]:
    """
    Remove points lying too close to an earlier point.

    Scans from the last point toward the first. Each point is compared with
    every point before it and removed at the first one closer than
    min_separation. Earlier points are therefore always kept over later ones.

    Args:
        points: Ordered waypoints
        min_separation: Minimum horizontal distance between survivors

    Returns:
        New list in which no two points are closer than min_separation

    Example:
        >>> a, b, c = Location(0, 0, 0), Location(50, 0, 0), Location(300, 0, 0)
        >>> deduplicate_by_proximity([a, b, c])
        [Location(x=0, y=0, z=0), Location(x=300, y=0, z=0)]
    """
    path = list(points)

    for i in range(len(path) - 1, -1, -1):
        for j in range(i):
            if path[i].distance_2d(path[j]) < min_separation:
                del path[i]
                break

    return path


class PatrolPath(PathFinder):
    """
    Per-chinook patrol path served round-robin.

    The cursor wraps lazily: it is checked against the path length before
    each read, so the call after the last waypoint returns the first one
    again. An empty path returns Location.ZERO forever.

    Attributes:
        sequence: Waypoints in visiting order
        cursor: Index of the waypoint returned by the next query

    Example:
        >>> path = PatrolPath([a, b])
        >>> [path.next_waypoint() for _ in range(3)] == [a, b, a]
        True
    """

    def __init__(self, sequence: Sequence[Location]):
        self._sequence: Tuple[Location, ...] = tuple(sequence)
        self.cursor = 0

    @property
    def sequence(self) -> Tuple[Location, ...]:
        return self._sequence

    def __len__(self) -> int:
        return len(self._sequence)

    def next_waypoint(self) -> Location:
        if not self._sequence:
            return Location.ZERO

        if self.cursor >= len(self._sequence):
            self.cursor = 0

        waypoint = self._sequence[self.cursor]
        self.cursor += 1
        return waypoint


class PatrolPathGenerator:
    """
    Builds an independent patrol path for each chinook.

    Algorithm:
        1. Take a uniformly random permutation of the eligible waypoints
        2. Drop waypoints within min_separation of an earlier one
           (see deduplicate_by_proximity)

    Args:
        rng: Random generator shared by all generated paths
        min_separation: Minimum horizontal distance between waypoints

    Example:
        >>> generator = PatrolPathGenerator(np.random.default_rng(42))
        >>> path = generator.generate(eligible_set)
        >>> waypoint = path.next_waypoint()
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        min_separation: float = MIN_WAYPOINT_SEPARATION,
    ):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.min_separation = min_separation

    def shuffle(self, points: Sequence[Location]) -> List[Location]:
        """Return a uniformly random permutation of points."""
        order = self.rng.permutation(len(points))
        return [points[int(idx)] for idx in order]

    def generate(self, eligible_points: Sequence[Location]) -> PatrolPath:
        """
        Generate a shuffled, deduplicated patrol path.

        Args:
            eligible_points: Session-wide eligible waypoints (not modified)

        Returns:
            New PatrolPath, possibly empty
        """
        shuffled = self.shuffle(list(eligible_points))
        return PatrolPath(deduplicate_by_proximity(shuffled, self.min_separation))
