"""Short closed tours over geographic points by simulated annealing."""

from geotour.annealing import AnnealingResult, AnnealingSchedule, optimize
from geotour.cache import DistanceCache, get_distance, haversine_formula, vincenty_formula
from geotour.errors import (
    FailedToConverge,
    GeotourError,
    InvalidConfiguration,
    NoSolution,
    VincentyError,
)
from geotour.geo import haversine_angle, haversine_distance
from geotour.models import Point, TimestampedPoint
from geotour.vincenty import vincenty_distance

__all__ = [
    "AnnealingResult",
    "AnnealingSchedule",
    "DistanceCache",
    "FailedToConverge",
    "GeotourError",
    "InvalidConfiguration",
    "NoSolution",
    "Point",
    "TimestampedPoint",
    "VincentyError",
    "get_distance",
    "haversine_angle",
    "haversine_distance",
    "haversine_formula",
    "optimize",
    "vincenty_distance",
    "vincenty_formula",
]
