"""Geometry solvers that map a flow depth onto section properties.

Every geometry operation dispatches on the variant's `shape` tag in exactly one
place, so the Manning, Froude and shear logic downstream is shared by all shapes.
Public helpers validate their inputs and raise `InvalidGeometry`; the underscore
variants assume a validated geometry and are what the iterative solvers call.
"""

from __future__ import annotations

import math

from loguru import logger

from .classes_references import InvalidGeometry
from .models.flow_state import FullSection, SectionProperties
from .models.geometry import Box, Circular, ConduitGeometry, Trapezoidal
from .type_helpers import ConduitShape


def max_depth(geometry: ConduitGeometry) -> float | None:
    """Return the largest valid flow depth, or None for open channels."""

    shape: ConduitShape = geometry.shape
    if shape is ConduitShape.CIRCULAR:
        return geometry.diameter  # type: ignore[union-attr]
    if shape is ConduitShape.BOX:
        return geometry.height  # type: ignore[union-attr]
    if shape is ConduitShape.TRAPEZOIDAL:
        return None
    raise InvalidGeometry(f"Unsupported conduit shape '{shape}'.")


def check_depth(geometry: ConduitGeometry, depth: float) -> None:
    """Raise `InvalidGeometry` unless `depth` lies in the shape's valid domain."""

    geometry.assert_valid()
    if not math.isfinite(depth) or depth <= 0:
        raise InvalidGeometry(f"Flow depth must be greater than zero (got {depth}).")
    limit: float | None = max_depth(geometry)
    if limit is not None and depth > limit:
        raise InvalidGeometry(f"Flow depth {depth} exceeds the maximum depth {limit} of {geometry.describe()}.")


def section_properties(geometry: ConduitGeometry, depth: float) -> SectionProperties:
    """Return area, wetted perimeter, top width and hydraulic radius at `depth`."""

    check_depth(geometry, depth)
    properties: SectionProperties = _section_properties(geometry, depth)
    logger.debug(
        "{geometry} at y={depth:.4f}: A={area:.4f} Pw={perimeter:.4f} Rh={radius:.4f}",
        geometry=geometry.describe(),
        depth=depth,
        area=properties.area,
        perimeter=properties.wetted_perimeter,
        radius=properties.hydraulic_radius,
    )
    return properties


def full_section(geometry: ConduitGeometry) -> FullSection | None:
    """Return the full-flow area and hydraulic radius of a closed conduit, None for open channels."""

    geometry.assert_valid()
    return _full_section(geometry)


def central_angle(diameter: float, depth: float) -> float:
    """Return the angle (radians) subtended at the pipe centre by the wetted arc."""

    radius: float = diameter / 2.0
    return 2.0 * math.acos((radius - depth) / radius)


def _section_properties(geometry: ConduitGeometry, depth: float) -> SectionProperties:
    shape: ConduitShape = geometry.shape
    if shape is ConduitShape.CIRCULAR:
        return _circular(geometry, depth)  # type: ignore[arg-type]
    if shape is ConduitShape.BOX:
        return _box(geometry, depth)  # type: ignore[arg-type]
    if shape is ConduitShape.TRAPEZOIDAL:
        return _trapezoidal(geometry, depth)  # type: ignore[arg-type]
    raise InvalidGeometry(f"Unsupported conduit shape '{shape}'.")


def _full_section(geometry: ConduitGeometry) -> FullSection | None:
    shape: ConduitShape = geometry.shape
    if shape is ConduitShape.CIRCULAR:
        diameter: float = geometry.diameter  # type: ignore[union-attr]
        return FullSection(area=math.pi * diameter**2 / 4.0, hydraulic_radius=diameter / 4.0)
    if shape is ConduitShape.BOX:
        width: float = geometry.width  # type: ignore[union-attr]
        height: float = geometry.height  # type: ignore[union-attr]
        area: float = width * height
        return FullSection(area=area, hydraulic_radius=area / (width + 2.0 * height))
    if shape is ConduitShape.TRAPEZOIDAL:
        return None
    raise InvalidGeometry(f"Unsupported conduit shape '{shape}'.")


def _circular(geometry: Circular, depth: float) -> SectionProperties:
    diameter: float = geometry.diameter
    theta: float = central_angle(diameter, depth)
    area: float = (diameter**2 / 8.0) * (theta - math.sin(theta))
    perimeter: float = diameter * theta / 2.0
    # sin(pi) is not exactly zero; a full pipe has no free surface.
    top_width: float = 0.0 if depth >= diameter else diameter * math.sin(theta / 2.0)
    return SectionProperties(
        depth=depth,
        area=area,
        wetted_perimeter=perimeter,
        top_width=top_width,
        hydraulic_radius=area / perimeter,
    )


def _box(geometry: Box, depth: float) -> SectionProperties:
    area: float = geometry.width * depth
    perimeter: float = geometry.width + 2.0 * depth
    return SectionProperties(
        depth=depth,
        area=area,
        wetted_perimeter=perimeter,
        top_width=geometry.width,
        hydraulic_radius=area / perimeter,
    )


def _trapezoidal(geometry: Trapezoidal, depth: float) -> SectionProperties:
    b: float = geometry.bottom_width
    m: float = geometry.side_slope
    area: float = (b + m * depth) * depth
    perimeter: float = b + 2.0 * depth * math.sqrt(1.0 + m * m)
    return SectionProperties(
        depth=depth,
        area=area,
        wetted_perimeter=perimeter,
        top_width=b + 2.0 * m * depth,
        hydraulic_radius=area / perimeter,
    )


__all__: list[str] = [
    "central_angle",
    "check_depth",
    "full_section",
    "max_depth",
    "section_properties",
]
