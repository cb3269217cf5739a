"""Storm-drain inlet interception (HEC-22 empirical relations).

On-grade inlets (grate, curb opening, combination) take the approach discharge,
depth and velocity of the gutter flow; sag inlets take the discharge and the
ponding depth. Flows are m³/s, lengths metres, slopes decimal.
"""

from __future__ import annotations

import math

from loguru import logger

from .classes_references import GRAVITY, InvalidInput
from .models.gutter import GutterFlowResult
from .models.inlet import Combination, Curb, Grate, InletGeometry, InletResult, Sag, SpacingPlan
from .type_helpers import AreaType, CurbOpeningKind, InletKind, SagRegime

DEFAULT_CLOGGING_FACTOR = 0.5
CLOGGING_RISK_THRESHOLD = 0.6
ASSUMED_CATCHMENT_LENGTH = 100.0
DEFAULT_SPACING = 30.0
MIN_SPACING = 15.0
MAX_SPACING = 60.0
MAX_SPACING_FACTOR = 1.5
WEIR_COEFFICIENT = 1.66
ORIFICE_COEFFICIENT = 0.67


def _check_approach(discharge: float, depth: float, velocity: float, *, depth_required: bool) -> None:
    errors: list[str] = []
    if not math.isfinite(discharge) or discharge < 0:
        errors.append(f"Approach discharge must be >= 0 (got {discharge}).")
    if not math.isfinite(depth) or depth < 0 or (depth_required and depth == 0):
        errors.append(f"Approach depth must be {'greater than zero' if depth_required else '>= 0'} (got {depth}).")
    if not math.isfinite(velocity) or velocity < 0:
        errors.append(f"Approach velocity must be >= 0 (got {velocity}).")
    if errors:
        raise InvalidInput(errors)


def _check_clogging(clogging_factor: float) -> None:
    if not math.isfinite(clogging_factor) or not 0.0 <= clogging_factor <= 1.0:
        raise InvalidInput(f"Clogging factor must lie in [0, 1] (got {clogging_factor}).")


def _fraction(part: float, whole: float) -> float:
    """part/whole, defined as 0.0 when there is no approach flow."""

    if whole <= 0:
        return 0.0
    return part / whole


def splash_over_velocity(grate: Grate) -> float:
    """Velocity above which frontal flow starts to skip over the grate."""

    return grate.orientation.coefficient * math.sqrt(grate.length)


def frontal_flow_ratio(velocity: float, splash_over: float) -> float:
    """Rf = 1 below splash-over, else 1 - 0.09·(V - Vo)^1.8 clamped at zero."""

    if velocity < splash_over:
        return 1.0
    return max(0.0, 1.0 - 0.09 * (velocity - splash_over) ** 1.8)


def side_flow_ratio(velocity: float, grate: Grate) -> float:
    """Rs = 1 / (1 + 0.15·V^2.3 / (Eo·L)^1.8) with Eo = W/L."""

    eo: float = grate.width / grate.length
    return 1.0 / (1.0 + 0.15 * velocity**2.3 / (eo * grate.length) ** 1.8)


def curb_interception_length(discharge: float, slope: float, depth: float, curb: Curb) -> float:
    """Length Lt needed to intercept all of `discharge`; depressed openings use (a + d) in place of d."""

    effective_depth: float = depth
    if curb.opening_kind is CurbOpeningKind.DEPRESSED:
        effective_depth = curb.depression + depth
    return 0.6 * (discharge / math.sqrt(slope)) ** 0.42 * (1.0 / effective_depth) ** 0.3


def recommended_spacing(
    total_flow: float,
    intercepted_flow: float,
    catchment_length: float = ASSUMED_CATCHMENT_LENGTH,
) -> float:
    """Spacing that splits the catchment between the inlets needed, clamped to [15, 60] m."""

    if intercepted_flow <= 0:
        return DEFAULT_SPACING
    count: int = max(1, math.ceil(total_flow / intercepted_flow))
    spacing: float = catchment_length / count
    return min(max(spacing, MIN_SPACING), MAX_SPACING)


def inlets_required(
    segment_length: float,
    total_flow: float,
    single_inlet_capacity: float,
    max_spacing: float = AreaType.DEFAULT.coefficient,
) -> int:
    """Inlets needed on a segment: the larger of the capacity count and the spacing count."""

    errors: list[str] = []
    if not math.isfinite(single_inlet_capacity) or single_inlet_capacity <= 0:
        errors.append(f"Single inlet capacity must be greater than zero (got {single_inlet_capacity}).")
    if not math.isfinite(max_spacing) or max_spacing <= 0:
        errors.append(f"Maximum spacing must be greater than zero (got {max_spacing}).")
    if not math.isfinite(segment_length) or segment_length < 0:
        errors.append(f"Segment length must be >= 0 (got {segment_length}).")
    if not math.isfinite(total_flow) or total_flow < 0:
        errors.append(f"Total flow must be >= 0 (got {total_flow}).")
    if errors:
        raise InvalidInput(errors)
    by_capacity: int = math.ceil(total_flow / single_inlet_capacity)
    by_spacing: int = math.ceil(segment_length / max_spacing)
    return max(by_capacity, by_spacing)


def plan_inlet_spacing(
    segment_length: float,
    total_flow: float,
    single_inlet_capacity: float,
    area_type: AreaType = AreaType.DEFAULT,
) -> SpacingPlan:
    """Lay out inlets along a street segment using the allowable spacing of `area_type`."""

    count: int = inlets_required(segment_length, total_flow, single_inlet_capacity, area_type.coefficient)
    actual: float = segment_length / count if count > 0 else 0.0
    plan = SpacingPlan(
        segment_length=segment_length,
        inlet_count=count,
        actual_spacing=actual,
        max_allowed_spacing=area_type.coefficient,
        area_type=area_type,
    )
    logger.info(
        "Spacing plan for {length:.1f} m ({area}): {count} inlets at {spacing:.1f} m",
        length=segment_length,
        area=area_type.label,
        count=count,
        spacing=actual,
    )
    return plan


def grate_inlet(
    grate: Grate,
    discharge: float,
    depth: float,
    velocity: float,
    *,
    clogging_factor: float = DEFAULT_CLOGGING_FACTOR,
    catchment_length: float = ASSUMED_CATCHMENT_LENGTH,
) -> InletResult:
    """Interception of an on-grade grate.

    `clogging_factor` is the unclogged fraction of the grate and scales the
    combined frontal/side efficiency E = (Rf + Rs·(1 - Rf))·clogging_factor.
    """
    grate.assert_valid()
    _check_approach(discharge, depth, velocity, depth_required=False)
    _check_clogging(clogging_factor)

    rf: float = frontal_flow_ratio(velocity, splash_over_velocity(grate))
    rs: float = side_flow_ratio(velocity, grate)
    efficiency: float = (rf + rs * (1.0 - rf)) * clogging_factor
    intercepted: float = discharge * efficiency
    spacing: float = recommended_spacing(discharge, intercepted, catchment_length)

    if efficiency < 0.5:
        note = "Low efficiency. Consider a larger grate or a combination inlet."
    elif efficiency > 0.9:
        note = "Good efficiency. Design is adequate."
    else:
        note = "Acceptable efficiency."
    logger.info(
        "Grate {grate}: Rf={rf:.3f} Rs={rs:.3f} E={efficiency:.1f}%",
        grate=grate.describe(),
        rf=rf,
        rs=rs,
        efficiency=efficiency * 100.0,
    )
    return InletResult(
        kind=InletKind.GRATE,
        length=grate.length,
        width=grate.width,
        approach_flow=discharge,
        approach_depth=depth,
        approach_velocity=velocity,
        intercepted_flow=intercepted,
        bypass_flow=discharge - intercepted,
        efficiency=efficiency * 100.0,
        recommended_spacing=spacing,
        max_spacing=spacing * MAX_SPACING_FACTOR,
        is_clogging_risk=clogging_factor < CLOGGING_RISK_THRESHOLD,
        note=note,
    )


def curb_inlet(
    curb: Curb,
    discharge: float,
    depth: float,
    velocity: float,
    slope: float,
    *,
    catchment_length: float = ASSUMED_CATCHMENT_LENGTH,
) -> InletResult:
    """Interception of an on-grade curb opening: E = 1 when L >= Lt, else (L/Lt)^1.8."""

    curb.assert_valid()
    _check_approach(discharge, depth, velocity, depth_required=True)
    if not math.isfinite(slope) or slope <= 0:
        raise InvalidInput(f"Longitudinal slope must be greater than zero (got {slope}).")

    required: float = curb_interception_length(discharge, slope, depth, curb)
    if curb.length >= required:
        efficiency: float = 1.0
        note = "Opening length is adequate for 100% interception."
    else:
        efficiency = (curb.length / required) ** 1.8
        note = f"Opening length ({curb.length:.2f} m) is less than the required length ({required:.2f} m)."
    intercepted: float = discharge * efficiency
    spacing: float = recommended_spacing(discharge, intercepted, catchment_length)
    logger.info(
        "Curb {curb}: Lt={required:.3f} m E={efficiency:.1f}%",
        curb=curb.describe(),
        required=required,
        efficiency=efficiency * 100.0,
    )
    return InletResult(
        kind=InletKind.CURB,
        length=curb.length,
        width=curb.height,
        approach_flow=discharge,
        approach_depth=depth,
        approach_velocity=velocity,
        intercepted_flow=intercepted,
        bypass_flow=discharge - intercepted,
        efficiency=efficiency * 100.0,
        recommended_spacing=spacing,
        max_spacing=spacing * MAX_SPACING_FACTOR,
        is_clogging_risk=False,
        note=note,
        required_length=required,
    )


def combination_inlet(
    inlet: Combination,
    discharge: float,
    depth: float,
    velocity: float,
    slope: float,
    *,
    clogging_factor: float = DEFAULT_CLOGGING_FACTOR,
    catchment_length: float = ASSUMED_CATCHMENT_LENGTH,
) -> InletResult:
    """Grate first; its bypass is the approach discharge of the curb opening."""

    inlet.assert_valid()
    grate_result: InletResult = grate_inlet(
        inlet.grate,
        discharge,
        depth,
        velocity,
        clogging_factor=clogging_factor,
        catchment_length=catchment_length,
    )
    curb_result: InletResult = curb_inlet(
        inlet.curb,
        grate_result.bypass_flow,
        depth,
        velocity,
        slope,
        catchment_length=catchment_length,
    )
    intercepted: float = grate_result.intercepted_flow + curb_result.intercepted_flow
    efficiency: float = _fraction(intercepted, discharge) * 100.0
    spacing: float = recommended_spacing(discharge, intercepted, catchment_length)
    note: str = (
        f"Combination inlet: grate captures {grate_result.efficiency:.1f}%, "
        f"curb captures {curb_result.efficiency:.1f}% of the bypass. "
        f"Total efficiency: {efficiency:.1f}%."
    )
    return InletResult(
        kind=InletKind.COMBINATION,
        length=max(inlet.grate.length, inlet.curb.length),
        width=inlet.grate.width,
        approach_flow=discharge,
        approach_depth=depth,
        approach_velocity=velocity,
        intercepted_flow=intercepted,
        bypass_flow=discharge - intercepted,
        efficiency=efficiency,
        recommended_spacing=spacing,
        max_spacing=spacing * MAX_SPACING_FACTOR,
        is_clogging_risk=grate_result.is_clogging_risk,
        note=note,
        required_length=curb_result.required_length,
    )


def sag_capacity(inlet: Sag, depth: float) -> tuple[float, SagRegime]:
    """Return the controlling capacity (m³/s) at ponding `depth` and which regime controls it."""

    weir: float = WEIR_COEFFICIENT * inlet.weir_perimeter * depth**1.5
    orifice: float = ORIFICE_COEFFICIENT * inlet.opening_area * math.sqrt(2.0 * GRAVITY * depth)
    if weir <= orifice:
        return weir, SagRegime.WEIR
    return orifice, SagRegime.ORIFICE


def sag_inlet(inlet: Sag, discharge: float, depth: float) -> InletResult:
    """Interception of a sag inlet: min(Q, min(weir, orifice) capacity)."""

    inlet.assert_valid()
    _check_approach(discharge, depth, 0.0, depth_required=True)
    capacity, regime = sag_capacity(inlet, depth)
    intercepted: float = min(discharge, capacity)
    if capacity >= discharge:
        note = f"Inlet has adequate capacity for the sag location ({regime.value} control)."
    else:
        note = f"Inlet undersized ({regime.value} control). Ponding depth will increase; consider a larger inlet."
    logger.info(
        "Sag {inlet}: capacity {capacity:.4f} m3/s ({regime}) for Q={discharge:.4f}",
        inlet=inlet.describe(),
        capacity=capacity,
        regime=regime.value,
        discharge=discharge,
    )
    return InletResult(
        kind=InletKind.SAG,
        length=inlet.length,
        width=inlet.width,
        approach_flow=discharge,
        approach_depth=depth,
        approach_velocity=0.0,
        intercepted_flow=intercepted,
        bypass_flow=discharge - intercepted,
        efficiency=_fraction(intercepted, discharge) * 100.0,
        recommended_spacing=None,
        max_spacing=None,
        is_clogging_risk=False,
        note=note,
        controlling_regime=regime,
    )


def intercept(
    inlet: InletGeometry,
    gutter: GutterFlowResult,
    slope: float,
    *,
    clogging_factor: float = DEFAULT_CLOGGING_FACTOR,
    catchment_length: float = ASSUMED_CATCHMENT_LENGTH,
) -> InletResult:
    """Evaluate any inlet variant against a solved gutter flow."""

    if isinstance(inlet, Grate):
        return grate_inlet(
            inlet,
            gutter.discharge,
            gutter.depth,
            gutter.velocity,
            clogging_factor=clogging_factor,
            catchment_length=catchment_length,
        )
    if isinstance(inlet, Curb):
        return curb_inlet(
            inlet, gutter.discharge, gutter.depth, gutter.velocity, slope, catchment_length=catchment_length
        )
    if isinstance(inlet, Combination):
        return combination_inlet(
            inlet,
            gutter.discharge,
            gutter.depth,
            gutter.velocity,
            slope,
            clogging_factor=clogging_factor,
            catchment_length=catchment_length,
        )
    if isinstance(inlet, Sag):
        return sag_inlet(inlet, gutter.discharge, gutter.depth)
    raise InvalidInput(f"Unsupported inlet geometry {inlet!r}.")


__all__: list[str] = [
    "combination_inlet",
    "curb_inlet",
    "curb_interception_length",
    "frontal_flow_ratio",
    "grate_inlet",
    "inlets_required",
    "intercept",
    "plan_inlet_spacing",
    "recommended_spacing",
    "sag_capacity",
    "sag_inlet",
    "side_flow_ratio",
    "splash_over_velocity",
]
