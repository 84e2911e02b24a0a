"""
Core data structures for chinook patrol planning.

This module defines the value types shared by every component:
- Locations on the map and their horizontal distance
- Monument classification (category and tier)
- Waypoint candidates sourced from static map data
- Drop zones used for observability reporting
- The host-side agent model (brain, AI state, crate count)
"""

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import ClassVar, Optional, TYPE_CHECKING

import numpy as np

from chinook_patrol.utils.math import distance_2d

if TYPE_CHECKING:
    from chinook_patrol.navigation.path_finder import PathFinder


MONUMENT_MARKER_PREFAB = "monument_marker.prefab"


@dataclass(frozen=True)
class Location:
    """
    Immutable 3D point on the map.

    Follows the host engine convention: x and z span the horizontal plane,
    y is height. All proximity checks use the horizontal distance.

    Example:
        >>> a = Location(0.0, 50.0, 0.0)
        >>> b = Location(3.0, 0.0, 4.0)
        >>> a.distance_2d(b)
        5.0
    """
    x: float
    y: float
    z: float

    ZERO: ClassVar["Location"]

    def distance_2d(self, other: "Location") -> float:
        """Horizontal distance to another location, ignoring height."""
        return distance_2d(self.x, self.z, other.x, other.z)

    @property
    def is_zero(self) -> bool:
        """True for the sentinel "no destination" location."""
        return self == Location.ZERO

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


Location.ZERO = Location(0.0, 0.0, 0.0)


class MonumentCategory(Enum):
    """Monument categories known to the host map data."""
    CAVE = "Cave"
    AIRPORT = "Airport"
    BUILDING = "Building"
    TOWN = "Town"
    RADTOWN = "Radtown"
    LIGHTHOUSE = "Lighthouse"
    WATER_WELL = "WaterWell"
    ROADSIDE = "Roadside"
    MOUNTAIN = "Mountain"
    LAKE = "Lake"

    @classmethod
    def parse(cls, name: str) -> Optional["MonumentCategory"]:
        """
        Look up a category by its configured name, ignoring case.

        Returns:
            Matching category, or None if the name is unknown
        """
        if not isinstance(name, str):
            return None
        key = name.strip().lower()
        for category in cls:
            if category.value.lower() == key:
                return category
        return None


class MonumentTier(IntFlag):
    """Monument tier bitmask. A monument may belong to several tiers."""
    NONE = 0
    TIER0 = 1
    TIER1 = 2
    TIER2 = 4

    @classmethod
    def parse(cls, name: str) -> Optional["MonumentTier"]:
        """Look up a single tier by name (e.g. "Tier0"), ignoring case."""
        if not isinstance(name, str):
            return None
        key = name.strip().upper()
        if key == "NONE" or key not in cls.__members__:
            return None
        return cls[key]


@dataclass(frozen=True)
class WaypointCandidate:
    """
    One monument on the map, read from static map data.

    Attributes:
        name: Raw prefab name of the monument
        category: Monument category
        tier: Tier bitmask
        is_safe_zone: Whether the monument is a safe zone
        position: World position of the monument
        root_name: Name of the topmost structure containing the monument,
            used when the raw name is a generic marker prefab
    """
    name: str
    category: MonumentCategory
    tier: MonumentTier
    is_safe_zone: bool
    position: Location
    root_name: Optional[str] = None

    @property
    def effective_name(self) -> str:
        """Name used for pattern matching and reporting."""
        if MONUMENT_MARKER_PREFAB in self.name and self.root_name:
            return self.root_name
        return self.name


@dataclass(frozen=True)
class DropZone:
    """A location where a chinook may deliver cargo."""
    position: Location


@dataclass(frozen=True)
class CargoDropRange:
    """
    Range of crates dropped by one chinook.

    The count is only randomized when both bounds exceed 1; otherwise the
    host keeps its own default.

    Example:
        >>> CargoDropRange(2, 4).sample(np.random.default_rng(0)) in (2, 3, 4)
        True
        >>> CargoDropRange(1, 4).sample(np.random.default_rng(0)) is None
        True
    """
    min: int = 1
    max: int = 1

    @property
    def is_randomized(self) -> bool:
        return self.min > 1 and self.max > 1

    def sample(self, rng: np.random.Generator) -> Optional[int]:
        """Draw an inclusive crate count, or None when not randomized."""
        if not self.is_randomized:
            return None
        low, high = sorted((self.min, self.max))
        return int(rng.integers(low, high + 1))


class AIState(Enum):
    """Behaviour states of the host chinook brain."""
    IDLE = "idle"
    PATROL = "patrol"
    ORBIT = "orbit"
    EGRESS = "egress"
    DROP_CRATE = "drop_crate"
    LAND = "land"


@dataclass
class AgentBrain:
    """
    Host behaviour controller of a chinook.

    Attributes:
        path_finder: Object answering "what is my next waypoint"
        current_state: State the brain is executing, if any
        main_interest_point: Waypoint the brain is currently flying to
    """
    path_finder: Optional["PathFinder"] = None
    current_state: Optional[AIState] = None
    main_interest_point: Optional[Location] = None


@dataclass
class CargoAgent:
    """
    A spawned chinook as seen by the attachment hook.

    Attributes:
        agent_id: Host entity id
        is_reinforcement: Reinforcement chinooks land and are never patrolled
        brain: Behaviour controller, absent for agents managed elsewhere
        num_crates: Number of crates the chinook will drop
    """
    agent_id: int
    is_reinforcement: bool = False
    brain: Optional[AgentBrain] = None
    num_crates: int = 1
