"""Simulated annealing search for a short closed tour.

Algorithm
---------
1. **Neighbour**  -- swap two *adjacent* positions of the working tour
   (index ``i`` drawn uniformly, partner ``(i + 1) % n``).  Adjacent swaps are
   low-disruption moves that suit geographic tours.
2. **Score**      -- normalized energy: closed-loop length divided by the
   number of points, every edge looked up through the distance cache.
3. **Accept**     -- a better candidate is always kept; a worse one is kept
   with probability ``exp((best - candidate) / temperature)``.
4. **Cool**       -- ``temperature *= (1 - cooling_rate)`` until it drops to
   ``final_temperature``.

The temperature is a computation budget, not a physical quantity: the loop
runs at most ``ceil(log(final / start) / log(1 - cooling_rate))`` times.

**Note:** this is a heuristic; it does not guarantee an optimal tour.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from geotour.cache import DistanceCache, DistanceFormula, get_distance, haversine_formula
from geotour.errors import InvalidConfiguration
from geotour.models import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnealingSchedule:
    """Temperature parameters of one optimizer run."""

    starting_temperature: float
    final_temperature: float
    cooling_rate: float

    def validate(self) -> None:
        """Raise ``InvalidConfiguration`` if the schedule would never terminate."""
        errors: list[str] = []
        values = (self.starting_temperature, self.final_temperature, self.cooling_rate)

        if not all(math.isfinite(v) for v in values):
            errors.append("temperatures and cooling_rate must be finite")
        else:
            if self.final_temperature <= 0:
                errors.append(f"final_temperature {self.final_temperature} must be positive")
            if self.starting_temperature <= self.final_temperature:
                errors.append(
                    f"starting_temperature {self.starting_temperature} must exceed "
                    f"final_temperature {self.final_temperature}"
                )
            if not 0 < self.cooling_rate < 1:
                errors.append(f"cooling_rate {self.cooling_rate} not in (0, 1)")

        if errors:
            raise InvalidConfiguration(errors)

    def max_iterations(self) -> int:
        """Upper bound on the number of cooling steps."""
        return math.ceil(
            math.log(self.final_temperature / self.starting_temperature)
            / math.log(1 - self.cooling_rate)
        )


@dataclass
class AnnealingResult:
    """Outcome of one optimizer run."""

    tour: list[Point]
    energy: float
    iterations: int = 0
    accepted: int = 0
    uphill: int = 0
    cancelled: bool = False
    final_temperature: float = 0.0


def temperatures(schedule: AnnealingSchedule) -> Iterator[float]:
    """Yield the strictly decreasing temperatures above ``final_temperature``."""
    temperature = schedule.starting_temperature
    while temperature > schedule.final_temperature:
        yield temperature
        temperature *= 1 - schedule.cooling_rate


def swap_adjacent(rng: random.Random, tour: Sequence[Point]) -> list[Point]:
    """Return a copy of *tour* with a random position swapped with its cyclic successor."""
    candidate = list(tour)
    i = rng.randrange(len(candidate))
    j = (i + 1) % len(candidate)
    candidate[i], candidate[j] = candidate[j], candidate[i]
    return candidate


def shuffle_tour(rng: random.Random, tour: Sequence[Point]) -> list[Point]:
    """Fisher-Yates shuffled copy of *tour* driven by *rng*."""
    shuffled = list(tour)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def total_relative_distance(
    cache: DistanceCache, formula: DistanceFormula, tour: Sequence[Point]
) -> float:
    """Length of the closed loop, including the edge from the last point back to the first."""
    n = len(tour)
    if n < 2:
        return 0.0
    return sum(get_distance(cache, formula, tour[i], tour[(i + 1) % n]) for i in range(n))


def tour_energy(cache: DistanceCache, formula: DistanceFormula, tour: Sequence[Point]) -> float:
    """Closed-loop length per point, comparable across tours of different sizes."""
    if not tour:
        return 0.0
    return total_relative_distance(cache, formula, tour) / len(tour)


def acceptance_probability(best_energy: float, candidate_energy: float, temperature: float) -> float:
    """Probability of keeping a candidate; 1.0 when it is no worse than the best."""
    if candidate_energy <= best_energy:
        return 1.0
    return math.exp((best_energy - candidate_energy) / temperature)


def optimize(
    schedule: AnnealingSchedule,
    rng: random.Random,
    initial_tour: Sequence[Point],
    *,
    cache: DistanceCache | None = None,
    formula: DistanceFormula | None = None,
    shuffle: bool = False,
    should_stop: Callable[[], bool] | None = None,
) -> AnnealingResult:
    """Search for a shorter closed tour through *initial_tour*.

    Args:
        schedule: Temperature parameters; validated before anything else.
        rng: Random source for the shuffle, the swaps and the acceptance draws.
        initial_tour: Points to visit; the result is always a permutation of them.
        cache: Pairwise distance cache; a fresh one is created when omitted.
        formula: Distance formula; defaults to the Haversine central angle.
        shuffle: Start from a shuffled copy of *initial_tour*.
        should_stop: Polled once per iteration; returning True ends the search
            early and the best tour so far is returned.

    Returns:
        AnnealingResult with the best tour and its normalized energy.
    """
    schedule.validate()

    if len(initial_tour) < 2:
        return AnnealingResult(tour=list(initial_tour), energy=0.0,
                               final_temperature=schedule.starting_temperature)

    if cache is None:
        cache = DistanceCache()
    if formula is None:
        formula = haversine_formula()

    best = shuffle_tour(rng, initial_tour) if shuffle else list(initial_tour)
    best_energy = tour_energy(cache, formula, best)
    result = AnnealingResult(tour=best, energy=best_energy,
                             final_temperature=schedule.starting_temperature)

    logger.debug(
        "Annealing %d points from energy %.6g (at most %d iterations)",
        len(best), best_energy, schedule.max_iterations(),
    )

    for temperature in temperatures(schedule):
        if should_stop is not None and should_stop():
            result.cancelled = True
            break

        result.iterations += 1
        result.final_temperature = temperature

        candidate = swap_adjacent(rng, best)
        candidate_energy = tour_energy(cache, formula, candidate)

        if candidate_energy < best_energy:
            accept = True
        else:
            p = acceptance_probability(best_energy, candidate_energy, temperature)
            accept = rng.random() < p

        if accept:
            if candidate_energy > best_energy:
                result.uphill += 1
            best, best_energy = candidate, candidate_energy
            result.accepted += 1

    result.tour = best
    result.energy = best_energy

    logger.debug(
        "Annealing finished after %d iterations (%d accepted, %d uphill, cancelled=%s), energy %.6g",
        result.iterations, result.accepted, result.uphill, result.cancelled, best_energy,
    )
    return result
