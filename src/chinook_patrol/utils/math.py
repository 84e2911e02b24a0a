"""
Distance helpers for waypoint planning.

Provides the horizontal-plane distance used by every proximity rule:
- Pairwise distance between two points
- Distance from one point to many (vectorized)
"""

import numpy as np
from typing import Sequence, Tuple


def distance_2d(x1: float, z1: float, x2: float, z2: float) -> float:
    """
    Calculate horizontal distance between two points.

    Args:
        x1, z1: First point horizontal coordinates
        x2, z2: Second point horizontal coordinates

    Returns:
        Euclidean distance in the horizontal plane
    """
    return float(np.hypot(x2 - x1, z2 - z1))


def distances_2d(
    origin: Tuple[float, float],
    points: Sequence[Tuple[float, float]],
) -> np.ndarray:
    """
    Calculate horizontal distances from one point to many.

    Args:
        origin: (x, z) of the reference point
        points: Sequence of (x, z) coordinates

    Returns:
        Array of distances, one per point (empty if no points)

    Example:
        >>> distances_2d((0.0, 0.0), [(3.0, 4.0), (0.0, 1.0)])
        array([5., 1.])
    """
    if len(points) == 0:
        return np.zeros(0, dtype=np.float64)

    coords = np.asarray(points, dtype=np.float64)
    return np.hypot(coords[:, 0] - origin[0], coords[:, 1] - origin[1])
