"""Ellipsoid registry and optimizer settings."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from geotour.errors import InvalidConfiguration

EARTH_RADIUS_KM = 6371.0


def validate_axes(semi_major_axis: float, semi_minor_axis: float) -> list[str]:
    """Validate ellipsoid axes. Returns list of error messages (empty = valid)."""
    errors: list[str] = []

    if not math.isfinite(semi_major_axis) or semi_major_axis <= 0:
        errors.append(f"semi_major_axis {semi_major_axis} must be positive")
    if not math.isfinite(semi_minor_axis) or semi_minor_axis < 0:
        errors.append(f"semi_minor_axis {semi_minor_axis} must not be negative")
    elif semi_minor_axis > semi_major_axis:
        errors.append(
            f"semi_minor_axis {semi_minor_axis} exceeds semi_major_axis {semi_major_axis}"
        )

    return errors


@dataclass
class EllipsoidConfig:
    """Reference ellipsoid, axes in kilometres."""

    name: str
    semi_major_axis: float
    semi_minor_axis: float

    @property
    def flattening(self) -> float:
        # (a - b) / a is more accurate than 1 - b / a
        return (self.semi_major_axis - self.semi_minor_axis) / self.semi_major_axis

    @property
    def mean_radius(self) -> float:
        return (2 * self.semi_major_axis + self.semi_minor_axis) / 3

    def validate(self) -> None:
        errors = validate_axes(self.semi_major_axis, self.semi_minor_axis)
        if errors:
            raise InvalidConfiguration([f"{self.name}: {e}" for e in errors])


ELLIPSOIDS: dict[str, EllipsoidConfig] = {
    "wgs84": EllipsoidConfig(
        name="wgs84",
        semi_major_axis=6378.1370,
        semi_minor_axis=6356.752314245,
    ),
    "grs80": EllipsoidConfig(
        name="grs80",
        semi_major_axis=6378.1370,
        semi_minor_axis=6356.752314140,
    ),
    "sphere": EllipsoidConfig(
        name="sphere",
        semi_major_axis=EARTH_RADIUS_KM,
        semi_minor_axis=EARTH_RADIUS_KM,
    ),
}


def get_ellipsoid(name: str) -> EllipsoidConfig:
    try:
        return ELLIPSOIDS[name.lower()]
    except KeyError:
        raise InvalidConfiguration(
            [f"unknown ellipsoid '{name}' (known: {', '.join(sorted(ELLIPSOIDS))})"]
        ) from None


@dataclass
class OptimizerSettings:
    """Parameters the driver hands to the annealing optimizer."""

    # Magnitudes suit relative distances (fractions of the Earth radius) between nearby points
    starting_temperature: float = 5e-7
    final_temperature: float = 1e-16
    cooling_rate: float = 0.01

    timeout_seconds: float | None = 10.0
    max_attempts: int = 50
    ellipsoid: str = "wgs84"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> OptimizerSettings:
        """Build settings from ``GEOTOUR_*`` environment variables."""
        defaults = cls()
        errors: list[str] = []

        def _read(var: str, cast, default):
            raw = os.getenv(var)
            if raw is None or raw.strip() == "":
                return default
            try:
                return cast(raw)
            except ValueError:
                errors.append(f"{var}={raw!r} is not a valid {cast.__name__}")
                return default

        settings = cls(
            starting_temperature=_read("GEOTOUR_STARTING_TEMPERATURE", float, defaults.starting_temperature),
            final_temperature=_read("GEOTOUR_FINAL_TEMPERATURE", float, defaults.final_temperature),
            cooling_rate=_read("GEOTOUR_COOLING_RATE", float, defaults.cooling_rate),
            timeout_seconds=_read("GEOTOUR_TIMEOUT_SECONDS", float, defaults.timeout_seconds),
            max_attempts=_read("GEOTOUR_MAX_ATTEMPTS", int, defaults.max_attempts),
            ellipsoid=os.getenv("GEOTOUR_ELLIPSOID", defaults.ellipsoid),
            seed=_read("GEOTOUR_SEED", int, defaults.seed),
        )
        if errors:
            raise InvalidConfiguration(errors)
        return settings
