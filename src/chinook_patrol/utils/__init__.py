"""
Utility functions for chinook patrol planning.

This module provides horizontal-plane distance helpers shared by the
filter, the eligible set builder and the path generator.
"""

from chinook_patrol.utils.math import distance_2d, distances_2d

__all__ = [
    "distance_2d",
    "distances_2d",
]
