"""Geodesic distance on an oblate ellipsoid (Vincenty inverse formula).

Accurate to about a millimetre on Earth, but there is a set of point pairs it
cannot compute: both points on the equator, coincident points, and some
nearly antipodal pairs where the iteration never settles.  Those cases raise
``NoSolution`` or ``FailedToConverge`` so callers can fall back to Haversine.

Reference: T. Vincenty, "Direct and Inverse Solutions of Geodesics on the
Ellipsoid with Application of Nested Equations" (1975).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from geotour.config import validate_axes
from geotour.errors import FailedToConverge, InvalidConfiguration, NoSolution
from geotour.models import Point

MAX_ITERATIONS = 200
CONVERGENCE_THRESHOLD = 1e-12  # radians


@dataclass(frozen=True)
class LambdaTerms:
    """Intermediate quantities of the last iteration, once lambda has converged."""

    sin_sigma: float
    cos_sigma: float
    sigma: float
    sin_alpha: float
    cos_sq_alpha: float
    cos_2sigma_m: float
    c: float
    iterations: int


def _signed_radians(angle: float) -> float:
    """Map a radian angle in ``[0, 2pi)`` into ``(-pi, pi]``."""
    return angle - 2 * math.pi if angle > math.pi else angle


def _reduced_latitude(f: float, phi: float) -> tuple[float, float]:
    """Return ``(sin U, cos U)`` for the reduced latitude of *phi*."""
    tan_u = (1.0 - f) * math.tan(phi)
    cos_u = 1.0 / math.sqrt(1.0 + tan_u * tan_u)
    return tan_u * cos_u, cos_u


def iterate_lambda(
    f: float,
    big_l: float,
    sin_u1: float,
    cos_u1: float,
    sin_u2: float,
    cos_u2: float,
    max_iterations: int = MAX_ITERATIONS,
) -> LambdaTerms:
    """Refine lambda until successive values differ by at most 1e-12 radians.

    Raises:
        NoSolution: a divisor (sin sigma, cos^2 alpha, the C factor) is zero.
        FailedToConverge: *max_iterations* passes without settling.
    """
    lam = big_l

    for iteration in range(1, max_iterations + 1):
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)

        east = cos_u2 * sin_lam
        north = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam
        sin_sq_sigma = east * east + north * north
        sin_sigma = math.sqrt(sin_sq_sigma)
        if sin_sigma == 0.0:
            raise NoSolution("sin(sigma) is zero: points coincide or collapse the formula")

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1.0 - sin_alpha * sin_alpha
        if cos_sq_alpha == 0.0:
            raise NoSolution("cos^2(alpha) is zero: both points lie on the equator")

        cos_2sigma_m = cos_sigma - 2.0 * sin_u1 * sin_u2 / cos_sq_alpha
        # never zero for 0 <= f < 1 once cos^2(alpha) != 0
        c_factor = 16.0 * cos_sq_alpha * (4.0 + f * (4.0 - 3.0 * cos_sq_alpha))
        if c_factor == 0.0:
            raise NoSolution("C factor is zero")
        c = f * c_factor / 256.0

        lam_prev = lam
        lam = big_l + (1.0 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos_2sigma_m + c * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m ** 2))
        )

        if abs(lam - lam_prev) <= CONVERGENCE_THRESHOLD:
            return LambdaTerms(
                sin_sigma=sin_sigma,
                cos_sigma=cos_sigma,
                sigma=sigma,
                sin_alpha=sin_alpha,
                cos_sq_alpha=cos_sq_alpha,
                cos_2sigma_m=cos_2sigma_m,
                c=c,
                iterations=iteration,
            )

    raise FailedToConverge(max_iterations)


def vincenty_distance(
    semi_major_axis: float,
    semi_minor_axis: float,
    p1: Point,
    p2: Point,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """Distance between two points on an ellipsoid, in the unit of the axes.

    Raises:
        InvalidConfiguration: the axes do not describe an oblate ellipsoid.
        NoSolution: the point configuration makes the formula undefined.
        FailedToConverge: lambda did not settle within *max_iterations*.
    """
    errors = validate_axes(semi_major_axis, semi_minor_axis)
    if errors:
        raise InvalidConfiguration(errors)

    a = semi_major_axis
    b = semi_minor_axis
    if b == 0.0:
        raise NoSolution("semi-minor axis is zero")
    f = (a - b) / a

    big_l = _signed_radians(p2.longitude_radians) - _signed_radians(p1.longitude_radians)
    if big_l > math.pi:
        big_l -= 2 * math.pi
    elif big_l <= -math.pi:
        big_l += 2 * math.pi

    sin_u1, cos_u1 = _reduced_latitude(f, _signed_radians(p1.latitude_radians))
    sin_u2, cos_u2 = _reduced_latitude(f, _signed_radians(p2.latitude_radians))

    t = iterate_lambda(f, big_l, sin_u1, cos_u1, sin_u2, cos_u2, max_iterations)

    u_sq = t.cos_sq_alpha * (a * a - b * b) / (b * b)
    big_a = 1.0 + u_sq / 16384.0 * (4096.0 + u_sq * (-768.0 + u_sq * (320.0 - 175.0 * u_sq)))
    big_b = u_sq / 1024.0 * (256.0 + u_sq * (-128.0 + u_sq * (74.0 - 47.0 * u_sq)))
    delta_sigma = big_b * t.sin_sigma * (
        t.cos_2sigma_m + big_b / 4.0 * (
            t.cos_sigma * (-1.0 + 2.0 * t.cos_2sigma_m ** 2)
            - big_b / 6.0 * t.cos_2sigma_m
            * (-3.0 + 4.0 * t.sin_sigma ** 2)
            * (-3.0 + 4.0 * t.cos_2sigma_m ** 2)
        )
    )

    return b * big_a * (t.sigma - delta_sigma)
