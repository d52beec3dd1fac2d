"""Repeated, time-boxed annealing runs over one point set.

A single annealing run can end on a tour that is no better than the order
the points arrived in.  The driver keeps re-annealing from the best route so
far until it beats the original order, runs out of attempts, or hits the
wall-clock deadline.  A timeout is not an error: the best route found so far
is returned.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Sequence

from geotour.annealing import AnnealingSchedule, optimize, shuffle_tour, tour_energy
from geotour.cache import DistanceCache, DistanceFormula, haversine_formula
from geotour.config import OptimizerSettings
from geotour.errors import InvalidConfiguration
from geotour.models import Point

logger = logging.getLogger(__name__)

# Every cycle through three or fewer points has the same length
_TRIVIAL_TOUR_SIZE = 3


class Deadline:
    """Monotonic wall-clock deadline; ``None`` seconds never expires."""

    def __init__(self, seconds: float | None):
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at


@dataclass
class SolveReport:
    """Best route found for a point set and how it was reached."""

    route: list[Point]
    original_energy: float
    energy: float
    attempts: int = 0
    timed_out: bool = False
    cache_size: int = 0
    attempt_energies: list[float] = field(default_factory=list)

    @property
    def improved(self) -> bool:
        return self.energy < self.original_energy


def schedule_from_settings(settings: OptimizerSettings) -> AnnealingSchedule:
    schedule = AnnealingSchedule(
        starting_temperature=settings.starting_temperature,
        final_temperature=settings.final_temperature,
        cooling_rate=settings.cooling_rate,
    )
    schedule.validate()

    errors: list[str] = []
    if settings.max_attempts < 1:
        errors.append(f"max_attempts {settings.max_attempts} must be at least 1")
    if settings.timeout_seconds is not None and settings.timeout_seconds <= 0:
        errors.append(f"timeout_seconds {settings.timeout_seconds} must be positive")
    if errors:
        raise InvalidConfiguration(errors)

    return schedule


def solve(
    points: Sequence[Point],
    settings: OptimizerSettings,
    rng: random.Random | None = None,
    formula: DistanceFormula | None = None,
) -> SolveReport:
    """Find a route through *points* shorter than their given order, within the deadline."""
    schedule = schedule_from_settings(settings)
    if rng is None:
        rng = random.Random(settings.seed)
    if formula is None:
        formula = haversine_formula()

    cache = DistanceCache()
    deadline = Deadline(settings.timeout_seconds)

    original_energy = tour_energy(cache, formula, points)
    route = shuffle_tour(rng, points)
    energy = tour_energy(cache, formula, route)
    report = SolveReport(route=route, original_energy=original_energy, energy=energy)

    if len(points) < 2:
        report.cache_size = len(cache)
        return report

    while report.attempts < settings.max_attempts:
        if deadline.expired():
            report.timed_out = True
            break

        report.attempts += 1
        result = optimize(
            schedule, rng, report.route,
            cache=cache, formula=formula, should_stop=deadline.expired,
        )
        report.attempt_energies.append(result.energy)
        logger.info(
            "Attempt %d: energy %.6g after %d iterations (best %.6g, original %.6g)",
            report.attempts, result.energy, result.iterations,
            min(report.energy, result.energy), original_energy,
        )

        if result.energy < report.energy:
            report.route = result.tour
            report.energy = result.energy

        if result.cancelled:
            report.timed_out = True
            logger.warning("Deadline of %ss reached, keeping best route so far", deadline.seconds)
            break
        if report.energy < original_energy or len(points) <= _TRIVIAL_TOUR_SIZE:
            break

    if report.energy > original_energy:
        report.route = list(points)
        report.energy = original_energy

    report.cache_size = len(cache)
    return report
