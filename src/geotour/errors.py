"""Exception hierarchy for geotour."""

from __future__ import annotations


class GeotourError(Exception):
    """Base class for every error raised by geotour."""


class InvalidConfiguration(GeotourError):
    """Raised when parameters fail validation before any work starts."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Invalid configuration: {'; '.join(errors)}")


class VincentyError(GeotourError):
    """The Vincenty inverse formula could not produce a distance."""


class NoSolution(VincentyError):
    """An intermediate quantity of the formula is zero and would be divided by."""


class FailedToConverge(VincentyError):
    """Lambda did not settle within the iteration cap."""

    def __init__(self, iterations: int):
        self.iterations = iterations
        super().__init__(f"failed to converge after {iterations} iterations")


class GpxError(GeotourError):
    """Raised when a GPX document cannot be read."""
