"""
Path finders for patrolling chinooks.

Provides the path finder interface queried by the host agent controller,
the host's default random path finder, and the shuffled patrol path.
"""

from .path_finder import (
    MIN_WAYPOINT_SEPARATION,
    HostPathFinder,
    PathFinder,
    PatrolPath,
    PatrolPathGenerator,
    deduplicate_by_proximity,
)

__all__ = [
    "MIN_WAYPOINT_SEPARATION",
    "HostPathFinder",
    "PathFinder",
    "PatrolPath",
    "PatrolPathGenerator",
    "deduplicate_by_proximity",
]
