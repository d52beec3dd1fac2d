"""Great-circle distance on a sphere (Haversine formula).

Assumes a perfect sphere, so on Earth the error versus the ellipsoidal
distance can reach about 0.3% (roughly 22 km).  It is cheap, never fails and
preserves the ordering of distances, which is all the optimizer needs.
"""

from __future__ import annotations

import math

from geotour.models import Point


def hav(theta: float) -> float:
    """Haversine of an angle in radians, ``sin^2(theta / 2)``.

    The ``(1 - cos theta) / 2`` definition loses precision for small angles.
    """
    return math.sin(theta / 2) ** 2


def haversine_angle_radians(phi1: float, lambda1: float, phi2: float, lambda2: float) -> float:
    """Central angle in radians between two (latitude, longitude) pairs in radians."""
    a = hav(phi2 - phi1) + math.cos(phi1) * math.cos(phi2) * hav(lambda2 - lambda1)
    a = min(1.0, max(0.0, a))
    # atan2 instead of asin(sqrt(a)): stable when the points are far apart
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_angle(p1: Point, p2: Point) -> float:
    """Central angle in radians between two points."""
    return haversine_angle_radians(
        p1.latitude_radians, p1.longitude_radians,
        p2.latitude_radians, p2.longitude_radians,
    )


def haversine_distance(radius: float, p1: Point, p2: Point) -> float:
    """Great-circle distance between two points, in the unit of *radius*."""
    return radius * haversine_angle(p1, p2)
