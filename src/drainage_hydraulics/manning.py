"""Manning uniform-flow model shared by every conduit shape."""

from __future__ import annotations

import math

from loguru import logger

from .classes_references import GRAVITY, UNIT_WEIGHT_WATER, InvalidRoughness, InvalidSlope
from .geometry import _full_section, _section_properties, check_depth
from .models.flow_state import FlowState, FullSection, SectionProperties
from .models.geometry import ConduitGeometry


def check_roughness(roughness: float) -> None:
    """Raise `InvalidRoughness` unless Manning's n is a finite positive number."""

    if not math.isfinite(roughness) or roughness <= 0:
        raise InvalidRoughness(f"Manning roughness must be greater than zero (got {roughness}).")


def check_slope(slope: float) -> None:
    """Raise `InvalidSlope` unless the longitudinal slope is positive; flat and adverse slopes are unsupported."""

    if not math.isfinite(slope) or slope <= 0:
        raise InvalidSlope(f"Longitudinal slope must be greater than zero (got {slope}).")


def manning_velocity(hydraulic_radius: float, roughness: float, slope: float) -> float:
    """V = (1/n)·Rh^(2/3)·S0^(1/2)."""

    return (1.0 / roughness) * hydraulic_radius ** (2.0 / 3.0) * math.sqrt(slope)


def velocity_head(velocity: float) -> float:
    """Hv = V²/(2g)."""

    return velocity * velocity / (2.0 * GRAVITY)


def froude_number(velocity: float, area: float, top_width: float) -> float | None:
    """Froude number on the mean hydraulic depth A/T; None when there is no free surface."""

    if top_width <= 0 or area <= 0:
        return None
    return velocity / math.sqrt(GRAVITY * area / top_width)


def bed_shear(hydraulic_radius: float, slope: float) -> float:
    """τ = γ·Rh·S0 with γ = 9810 N/m³."""

    return UNIT_WEIGHT_WATER * hydraulic_radius * slope


def ratio(numerator: float, denominator: float) -> float:
    """Return numerator/denominator, defined as 1.0 when the denominator is zero."""

    if denominator == 0:
        return 1.0
    return numerator / denominator


def discharge_at_depth(geometry: ConduitGeometry, depth: float, roughness: float, slope: float) -> tuple[float, float]:
    """Return (discharge, velocity) at `depth` for an already validated geometry."""

    properties: SectionProperties = _section_properties(geometry, depth)
    velocity: float = manning_velocity(properties.hydraulic_radius, roughness, slope)
    return properties.area * velocity, velocity


def flow_state(geometry: ConduitGeometry, depth: float, roughness: float, slope: float) -> FlowState:
    """Evaluate the full uniform-flow state of `geometry` at `depth`."""

    check_depth(geometry, depth)
    check_roughness(roughness)
    check_slope(slope)

    properties: SectionProperties = _section_properties(geometry, depth)
    velocity: float = manning_velocity(properties.hydraulic_radius, roughness, slope)
    discharge: float = properties.area * velocity

    full: FullSection | None = _full_section(geometry)
    full_area: float | None = None
    full_discharge: float | None = None
    area_ratio: float = 1.0
    discharge_ratio: float = 1.0
    if full is not None:
        full_area = full.area
        full_discharge = full.area * manning_velocity(full.hydraulic_radius, roughness, slope)
        area_ratio = ratio(properties.area, full_area)
        discharge_ratio = ratio(discharge, full_discharge)

    state = FlowState(
        shape=geometry.shape,
        depth=depth,
        area=properties.area,
        wetted_perimeter=properties.wetted_perimeter,
        top_width=properties.top_width,
        hydraulic_radius=properties.hydraulic_radius,
        velocity=velocity,
        discharge=discharge,
        velocity_head=velocity_head(velocity),
        froude=froude_number(velocity, properties.area, properties.top_width),
        shear_stress=bed_shear(properties.hydraulic_radius, slope),
        full_area=full_area,
        full_discharge=full_discharge,
        area_ratio=area_ratio,
        discharge_ratio=discharge_ratio,
    )
    logger.debug(
        "{geometry} at y={depth:.4f}: V={velocity:.4f} Q={discharge:.4f} regime={regime}",
        geometry=geometry.describe(),
        depth=depth,
        velocity=velocity,
        discharge=discharge,
        regime=state.regime.value,
    )
    return state


__all__: list[str] = [
    "bed_shear",
    "check_roughness",
    "check_slope",
    "discharge_at_depth",
    "flow_state",
    "froude_number",
    "manning_velocity",
    "ratio",
    "velocity_head",
]
