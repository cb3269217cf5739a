"""Gutter spread for triangular and composite street sections (HEC-22 Manning form).

A triangular gutter inverts in closed form:

    Q = (Ku/n)·Sx^(5/3)·S0^(1/2)·T^(8/3)   ->   T = [Q·n / (Ku·Sx^(5/3)·S0^(1/2))]^(3/8)

A composite section (gutter slope Sx over width W, street slope Sw beyond it)
superposes the gutter running at full width and the street excess:

    Q(T) = Q_Sx(T)                      for T <= W
    Q(T) = Q_Sx(W) + Q_Sw(T - W)        for T >  W

and has no closed-form inverse. The default search is the fixed-step heuristic
(start at T = 1 m, +0.1 m when short of the target, -0.05 m when over it). It does
not bracket the root and may stop without meeting the tolerance, so callers
should inspect `converged` and `residual`. `CompositeSearch.BISECTION` is
available when a converged spread matters more than matching that heuristic.
"""

from __future__ import annotations

import math

from loguru import logger

from .classes_references import GRAVITY, InvalidInput
from .models.gutter import GutterFlowResult, GutterSection
from .type_helpers import CompositeSearch

# SI constant of the triangular-gutter Manning equation.
KU_SI = 0.376
DEFAULT_TOLERANCE = 1e-4
DEFAULT_MAX_ITERATIONS = 100
INITIAL_SPREAD = 1.0
SPREAD_STEP_UP = 0.1
SPREAD_STEP_DOWN = 0.05
BISECTION_MAX_SPREAD = 1000.0
# Stepped spreads at or below this are float drift around zero.
MIN_SPREAD = 1e-9


def triangular_discharge(spread: float, cross_slope: float, longitudinal_slope: float, roughness: float) -> float:
    """Discharge (m³/s) of a triangular gutter running at `spread`; zero for a non-positive spread."""

    if spread <= 0:
        return 0.0
    return (
        (KU_SI / roughness)
        * cross_slope ** (5.0 / 3.0)
        * math.sqrt(longitudinal_slope)
        * spread ** (8.0 / 3.0)
    )


def gutter_discharge(section: GutterSection, spread: float) -> float:
    """Discharge carried by `section` at `spread`, superposing the street excess for composite sections."""

    width: float = section.gutter_width
    if section.street_cross_slope is None or spread <= width:
        return triangular_discharge(spread, section.gutter_cross_slope, section.longitudinal_slope, section.roughness)
    gutter: float = triangular_discharge(
        width, section.gutter_cross_slope, section.longitudinal_slope, section.roughness
    )
    street: float = triangular_discharge(
        spread - width, section.street_cross_slope, section.longitudinal_slope, section.roughness
    )
    return gutter + street


def gutter_capacity(section: GutterSection, max_spread: float) -> float:
    """Discharge the section carries when water spreads to the allowable `max_spread`."""

    section.assert_valid()
    if not math.isfinite(max_spread) or max_spread <= 0:
        raise InvalidInput(f"Allowable spread must be greater than zero (got {max_spread}).")
    return gutter_discharge(section, max_spread)


def gutter_spread(
    section: GutterSection,
    *,
    method: CompositeSearch = CompositeSearch.FIXED_STEP,
) -> GutterFlowResult:
    """Solve the spread of `section`, dispatching on whether it has a street cross slope."""

    if section.is_composite:
        return composite_spread(section, method=method)
    return triangular_spread(section)


def triangular_spread(section: GutterSection) -> GutterFlowResult:
    """Closed-form spread of a single triangular gutter (the street slope is ignored)."""

    section.assert_valid()
    conveyance: float = KU_SI * section.gutter_cross_slope ** (5.0 / 3.0) * math.sqrt(section.longitudinal_slope)
    spread: float = ((section.discharge * section.roughness) / conveyance) ** (3.0 / 8.0)
    logger.info("Triangular gutter spread {spread:.3f} m for {section}", spread=spread, section=section.describe())
    return _result(section, spread, triangular=True, iterations=0, converged=True)


def composite_spread(
    section: GutterSection,
    *,
    method: CompositeSearch = CompositeSearch.FIXED_STEP,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> GutterFlowResult:
    """Iteratively solve the spread of a gutter + street composite section."""

    section.assert_valid()
    if section.street_cross_slope is None:
        raise InvalidInput("Composite gutter sections require a street cross slope.")
    if method is CompositeSearch.BISECTION:
        spread, iterations, converged = _bisect_spread(section, tolerance, max_iterations)
    else:
        spread, iterations, converged = _step_spread(section, tolerance, max_iterations)
    if not converged:
        logger.warning(
            "Composite spread search ({method}) did not converge for {section}; using T={spread:.3f} m",
            method=method.value,
            section=section.describe(),
            spread=spread,
        )
    else:
        logger.info(
            "Composite gutter spread {spread:.3f} m after {count} iterations for {section}",
            spread=spread,
            count=iterations,
            section=section.describe(),
        )
    return _result(section, spread, triangular=False, iterations=iterations, converged=converged)


def _step_spread(section: GutterSection, tolerance: float, max_iterations: int) -> tuple[float, int, bool]:
    """Fixed-step search; returns (spread, iterations, converged)."""

    spread: float = INITIAL_SPREAD
    last_evaluated: float = spread
    for iteration in range(1, max_iterations + 1):
        if spread <= MIN_SPREAD:
            # A non-positive spread carries nothing, so it is always short of the target.
            spread += SPREAD_STEP_UP
            continue
        last_evaluated = spread
        discharge: float = gutter_discharge(section, spread)
        if abs(discharge - section.discharge) < tolerance:
            return spread, iteration, True
        if discharge < section.discharge:
            spread += SPREAD_STEP_UP
        else:
            spread -= SPREAD_STEP_DOWN
    # The final step can walk past zero; the spread evaluated before it is positive.
    if spread <= MIN_SPREAD:
        spread = last_evaluated
    return spread, max_iterations, False


def _bisect_spread(section: GutterSection, tolerance: float, max_iterations: int) -> tuple[float, int, bool]:
    """Bracketing search on [0, BISECTION_MAX_SPREAD]; returns (spread, iterations, converged)."""

    lo: float = 0.0
    hi: float = BISECTION_MAX_SPREAD
    for iteration in range(1, max_iterations + 1):
        mid: float = (lo + hi) / 2.0
        discharge: float = gutter_discharge(section, mid)
        if abs(discharge - section.discharge) < tolerance:
            return mid, iteration, True
        if discharge < section.discharge:
            lo = mid
        else:
            hi = mid
    return (lo + hi) / 2.0, max_iterations, False


def _result(
    section: GutterSection,
    spread: float,
    *,
    triangular: bool,
    iterations: int,
    converged: bool,
) -> GutterFlowResult:
    sx: float = section.gutter_cross_slope
    width: float = section.gutter_width
    if triangular or section.street_cross_slope is None or spread <= width:
        depth: float = sx * spread
        area: float = 0.5 * spread * depth
        perimeter: float = spread * math.sqrt(1.0 + sx * sx)
    else:
        sw: float = section.street_cross_slope
        excess: float = spread - width
        depth = sx * width + sw * excess
        area = 0.5 * sx * width**2 + width * sw * excess + 0.5 * sw * excess**2
        perimeter = width * math.sqrt(1.0 + sx * sx) + excess * math.sqrt(1.0 + sw * sw)

    velocity: float = 0.0
    froude: float = 0.0
    hydraulic_radius: float = 0.0
    if spread > 0 and area > 0:
        velocity = section.discharge / area
        froude = velocity / math.sqrt(GRAVITY * area / spread)
        hydraulic_radius = area / perimeter
    reference_width: float = width
    if not triangular and section.street_width is not None:
        reference_width = width + section.street_width
    computed: float = section.discharge
    if not triangular:
        computed = gutter_discharge(section, spread)
    return GutterFlowResult(
        discharge=section.discharge,
        spread=spread,
        depth=depth,
        flow_area=area,
        wetted_perimeter=perimeter,
        hydraulic_radius=hydraulic_radius,
        velocity=velocity,
        froude=froude,
        spread_ratio=spread / reference_width * 100.0,
        computed_discharge=computed,
        iterations=iterations,
        converged=converged,
    )


__all__: list[str] = [
    "KU_SI",
    "composite_spread",
    "gutter_capacity",
    "gutter_discharge",
    "gutter_spread",
    "triangular_discharge",
    "triangular_spread",
]
