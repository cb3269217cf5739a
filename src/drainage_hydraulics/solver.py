"""Bisection solver that inverts discharge(depth) for a target discharge.

q(y) is monotone increasing over each shape's search interval, so a plain
bisection on [lo, hi] converges. The first midpoint whose discharge is within
`tolerance` of the target is returned immediately without further refinement.
When the iteration cap is reached the midpoint of the final bracket is returned
as a best-effort answer with `converged=False`. Targets outside
[q(lo), q(hi)] are not rejected: the result is clamped to the nearest bound.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from loguru import logger

from .classes_references import InvalidGeometry, InvalidInput
from .geometry import max_depth
from .manning import check_roughness, check_slope, discharge_at_depth
from .models.flow_state import DepthSolution
from .models.geometry import ConduitGeometry
from .type_helpers import ConduitShape

DEFAULT_TOLERANCE = 1e-4
DEFAULT_MAX_ITERATIONS = 100
# Heuristic ceiling for open channels; not derived from the geometry.
TRAPEZOIDAL_SEARCH_CEILING = 10.0
MIN_SEARCH_DEPTH = 0.01


def search_interval(geometry: ConduitGeometry) -> tuple[float, float]:
    """Return the (lo, hi) depth bracket searched for `geometry`."""

    shape: ConduitShape = geometry.shape
    if shape is ConduitShape.CIRCULAR:
        diameter: float = geometry.diameter  # type: ignore[union-attr]
        return 0.01 * diameter, 0.99 * diameter
    if shape is ConduitShape.BOX:
        return MIN_SEARCH_DEPTH, 0.99 * geometry.height  # type: ignore[union-attr]
    if shape is ConduitShape.TRAPEZOIDAL:
        return MIN_SEARCH_DEPTH, TRAPEZOIDAL_SEARCH_CEILING
    raise InvalidGeometry(f"Unsupported conduit shape '{shape}'.")


@dataclass(slots=True)
class _DepthBracket:
    """Stateful lo/hi bracket narrowed towards the target discharge."""

    lo: float
    hi: float

    def midpoint(self) -> float:
        return (self.lo + self.hi) / 2.0

    def narrow(self, depth: float, discharge: float, target: float) -> None:
        if discharge < target:
            self.lo = depth
        else:
            self.hi = depth


def solve_depth(
    geometry: ConduitGeometry,
    target_discharge: float,
    roughness: float,
    slope: float,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> DepthSolution:
    """Return the uniform-flow depth that carries `target_discharge`."""

    if math.isnan(target_discharge):
        raise InvalidInput("Target discharge cannot be NaN.")
    geometry.assert_valid()
    check_roughness(roughness)
    check_slope(slope)
    if tolerance <= 0 or max_iterations < 1:
        raise InvalidInput("Solver tolerance must be > 0 and max_iterations >= 1.")

    lo, hi = search_interval(geometry)
    limit: float | None = max_depth(geometry)
    if limit is not None and lo > limit:
        raise InvalidGeometry(f"{geometry.describe()} is too shallow for the depth search interval.")
    bracket = _DepthBracket(lo=lo, hi=hi)
    logger.debug(
        "Solving depth for Q={target:.4f} in {geometry} over [{lo:.4f}, {hi:.4f}]",
        target=target_discharge,
        geometry=geometry.describe(),
        lo=lo,
        hi=hi,
    )

    for iteration in range(1, max_iterations + 1):
        depth: float = bracket.midpoint()
        discharge, velocity = discharge_at_depth(geometry, depth, roughness, slope)
        if abs(discharge - target_discharge) < tolerance:
            logger.debug(
                "Depth {depth:.5f} matches Q={target:.4f} after {count} iterations",
                depth=depth,
                target=target_discharge,
                count=iteration,
            )
            return DepthSolution(
                target_discharge=target_discharge,
                depth=depth,
                discharge=discharge,
                velocity=velocity,
                iterations=iteration,
                converged=True,
            )
        bracket.narrow(depth, discharge, target_discharge)

    depth = bracket.midpoint()
    discharge, velocity = discharge_at_depth(geometry, depth, roughness, slope)
    logger.warning(
        "Depth search for Q={target:.4f} in {geometry} did not converge; returning y={depth:.5f} (residual {residual:.3g})",
        target=target_discharge,
        geometry=geometry.describe(),
        depth=depth,
        residual=discharge - target_discharge,
    )
    return DepthSolution(
        target_discharge=target_discharge,
        depth=depth,
        discharge=discharge,
        velocity=velocity,
        iterations=max_iterations,
        converged=False,
    )


__all__: list[str] = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "TRAPEZOIDAL_SEARCH_CEILING",
    "search_interval",
    "solve_depth",
]
