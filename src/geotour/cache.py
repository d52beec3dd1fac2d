"""Memoized pairwise distances and the distance formulas the optimizer uses.

Looking up a known result in a dictionary is much faster than evaluating a
trigonometric formula again; the annealing loop evaluates the same pairs
thousands of times.
"""

from __future__ import annotations

import logging
from typing import Callable

from geotour.config import EllipsoidConfig
from geotour.errors import VincentyError
from geotour.geo import haversine_angle, haversine_distance
from geotour.models import Point
from geotour.vincenty import vincenty_distance

logger = logging.getLogger(__name__)

DistanceFormula = Callable[[Point, Point], float]
PairKey = tuple[Point, Point]


def _sort_key(p: Point) -> tuple[str, float, float]:
    return (p.name, p.latitude_degrees, p.longitude_degrees)


def pair_key(p1: Point, p2: Point) -> PairKey:
    """Order-independent key for two points: ``pair_key(a, b) == pair_key(b, a)``."""
    if _sort_key(p2) < _sort_key(p1):
        return (p2, p1)
    return (p1, p2)


class DistanceCache:
    """Insert-only store of pairwise distances for a single optimizer run.

    Not safe for concurrent mutation; give each concurrent run its own cache.
    """

    def __init__(self) -> None:
        self._distances: dict[PairKey, float] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._distances)

    def __contains__(self, key: PairKey) -> bool:
        return key in self._distances

    def get(self, key: PairKey) -> float | None:
        return self._distances.get(key)

    def insert(self, key: PairKey, distance: float) -> None:
        # existing entries are never overwritten
        self._distances.setdefault(key, distance)


def get_distance(cache: DistanceCache, formula: DistanceFormula, p1: Point, p2: Point) -> float:
    """Return the distance between two points, computing it at most once per pair."""
    key = pair_key(p1, p2)
    known = cache.get(key)
    if known is not None:
        cache.hits += 1
        return known

    cache.misses += 1
    distance = formula(key[0], key[1])
    cache.insert(key, distance)
    return distance


def haversine_formula(radius: float = 1.0) -> DistanceFormula:
    """Great-circle formula; with the default radius it yields the central angle."""
    if radius == 1.0:
        return haversine_angle

    def _formula(p1: Point, p2: Point) -> float:
        return haversine_distance(radius, p1, p2)

    return _formula


def vincenty_formula(ellipsoid: EllipsoidConfig) -> DistanceFormula:
    """Ellipsoidal formula in relative units, interchangeable with the Haversine angle.

    Distances are divided by the semi-major axis so the default annealing
    temperatures apply to both formulas. Pairs Vincenty cannot solve fall back
    to the Haversine central angle.
    """
    ellipsoid.validate()
    a = ellipsoid.semi_major_axis
    b = ellipsoid.semi_minor_axis

    def _formula(p1: Point, p2: Point) -> float:
        try:
            return vincenty_distance(a, b, p1, p2) / a
        except VincentyError as exc:
            logger.warning(
                "Vincenty failed for %s -> %s (%s), using Haversine", p1.name, p2.name, exc,
            )
            return haversine_angle(p1, p2)

    return _formula
