"""
Static map data loading.

Reads monuments and drop zones from a YAML map description, standing in for
the host's map data when running outside the server (demos, tests).

Format:
    monuments:
      - name: assets/.../airfield_1.prefab
        category: Airport
        tiers: [Tier2]
        safe_zone: false          # optional
        root_name: null           # optional
        position: [x, y, z]
    drop_zones:
      - [x, y, z]
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from chinook_patrol.core.types import (
    DropZone,
    Location,
    MonumentCategory,
    MonumentTier,
    WaypointCandidate,
)

logger = logging.getLogger(__name__)


def _parse_location(value: Any) -> Location:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"Position must be [x, y, z], got {value!r}")
    x, y, z = (float(v) for v in value)
    return Location(x, y, z)


def parse_monument(data: Dict[str, Any]) -> WaypointCandidate:
    """
    Build a waypoint candidate from one map entry.

    Raises:
        ValueError: If the name or position is missing, or the category,
            a tier or the position is invalid
    """
    name = data.get("name")
    if name is None:
        raise ValueError(f"Monument entry has no name: {data!r}")

    position = data.get("position")
    if position is None:
        raise ValueError(f"Monument {name!r} has no position")

    category = MonumentCategory.parse(data.get("category", ""))
    if category is None:
        raise ValueError(f"Unknown monument category: {data.get('category')!r}")

    tier = MonumentTier.NONE
    for tier_name in data.get("tiers") or []:
        parsed = MonumentTier.parse(tier_name)
        if parsed is None:
            raise ValueError(f"Unknown monument tier: {tier_name!r}")
        tier |= parsed

    return WaypointCandidate(
        name=str(name),
        category=category,
        tier=tier,
        is_safe_zone=bool(data.get("safe_zone", False)),
        position=_parse_location(position),
        root_name=data.get("root_name"),
    )


def load_map_yaml(
    path: Union[str, Path],
) -> Tuple[List[WaypointCandidate], List[DropZone]]:
    """
    Load monuments and drop zones from a YAML map file.

    Args:
        path: Path to the map file

    Returns:
        (monuments, drop_zones)
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    monuments = [parse_monument(entry) for entry in data.get("monuments") or []]
    drop_zones = [
        DropZone(_parse_location(entry)) for entry in data.get("drop_zones") or []
    ]

    logger.info(f"Loaded {len(monuments)} monuments and {len(drop_zones)} drop zones from {path}")
    return monuments, drop_zones
