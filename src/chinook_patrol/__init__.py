"""
Chinook patrol planning.

Gives each cargo chinook a shuffled patrol over the map's monuments,
filtered by category, tier, safe zone status and name patterns, without
revisiting nearby monuments back to back.
"""

__version__ = "0.2.0"
