"""Point data models shared by the distance formulas and the optimizer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def normalize_degrees(degrees: float) -> float:
    """Wrap an angle into ``[0, 360)`` (``-90 -> 270``, ``361 -> 1``)."""
    wrapped = degrees % 360.0
    # tiny negatives round up to exactly 360.0
    if wrapped == 360.0:
        return 0.0
    return wrapped


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def signed_degrees(degrees: float) -> float:
    """Map a normalized angle back into ``(-180, 180]`` for display and GPX."""
    return degrees - 360.0 if degrees > 180.0 else degrees


@dataclass(frozen=True)
class Point:
    """A named location on the surface of a sphere or ellipsoid."""

    name: str
    latitude_degrees: float     # normalized to [0, 360)
    longitude_degrees: float    # normalized to [0, 360)

    def __post_init__(self) -> None:
        object.__setattr__(self, "latitude_degrees", normalize_degrees(self.latitude_degrees))
        object.__setattr__(self, "longitude_degrees", normalize_degrees(self.longitude_degrees))

    @property
    def latitude_radians(self) -> float:
        return degrees_to_radians(self.latitude_degrees)

    @property
    def longitude_radians(self) -> float:
        return degrees_to_radians(self.longitude_degrees)

    @property
    def latitude(self) -> float:
        """Latitude in the conventional signed range."""
        return signed_degrees(self.latitude_degrees)

    @property
    def longitude(self) -> float:
        """Longitude in the conventional signed range."""
        return signed_degrees(self.longitude_degrees)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "lat": self.latitude, "lon": self.longitude}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Point:
        return cls(d["name"], float(d["lat"]), float(d["lon"]))


@dataclass(frozen=True)
class TimestampedPoint:
    """A point visited at a specific moment, as written to track files."""

    point: Point
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def name(self) -> str:
        return self.point.name

    @property
    def latitude_degrees(self) -> float:
        return self.point.latitude_degrees

    @property
    def longitude_degrees(self) -> float:
        return self.point.longitude_degrees
