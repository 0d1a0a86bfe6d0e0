# climbcue/util/geomath.py
"""
Great-circle distance helpers.
"""

from __future__ import annotations

from haversine import Unit, haversine

# Mean Earth radius used for every distance in climbcue.
EARTH_RADIUS_M = 6_371_000.0


def distance_meters(a: tuple[float, float], b: tuple[float, float]) -> float:
    """
    Haversine surface distance in meters between two (lat, lon) pairs in degrees.

    `haversine` gives the central angle with Unit.RADIANS; scaling it here keeps
    the radius at 6,371,000 m instead of the library's own mean radius.
    """
    return EARTH_RADIUS_M * haversine(a, b, unit=Unit.RADIANS)
