"""Gutter cross-section inputs and spread results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any
from _collections_abc import Mapping

from .base import Validatable, check_non_negative, check_positive, optional_float


@dataclass(frozen=True, slots=True)
class GutterSection(Validatable):
    """Street gutter carrying `discharge` along a longitudinal slope.

    All slopes are decimal (m/m) and the discharge is in m³/s. When
    `street_cross_slope` is None the section is a single triangular gutter;
    otherwise the gutter slope applies over `gutter_width` from the curb and
    the street slope beyond it. `street_width` only affects the reported
    spread ratio.
    """

    gutter_width: float
    gutter_cross_slope: float
    longitudinal_slope: float
    roughness: float
    discharge: float
    street_cross_slope: float | None = None
    street_width: float | None = None

    @property
    def is_composite(self) -> bool:
        return self.street_cross_slope is not None

    def describe(self) -> str:
        kind: str = "composite" if self.is_composite else "triangular"
        return (
            f"GutterSection({kind}, W={self.gutter_width:.3f}, Sx={self.gutter_cross_slope:.4f}, "
            f"S0={self.longitudinal_slope:.4f}, Q={self.discharge:.4f})"
        )

    def __str__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GutterSection":
        return cls(
            gutter_width=float(data.get("gutter_width", 0.0)),
            gutter_cross_slope=float(data.get("gutter_cross_slope", 0.0)),
            longitudinal_slope=float(data.get("longitudinal_slope", 0.0)),
            roughness=float(data.get("roughness", 0.0)),
            discharge=float(data.get("discharge", 0.0)),
            street_cross_slope=optional_float(data, "street_cross_slope"),
            street_width=optional_float(data, "street_width"),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.gutter_width, "Gutter width", prefix)
        check_positive(errors, self.gutter_cross_slope, "Gutter cross slope", prefix)
        check_positive(errors, self.longitudinal_slope, "Longitudinal slope", prefix)
        check_positive(errors, self.roughness, "Manning roughness", prefix)
        check_positive(errors, self.discharge, "Gutter discharge", prefix)
        if self.street_cross_slope is not None:
            check_positive(errors, self.street_cross_slope, "Street cross slope", prefix)
        if self.street_width is not None:
            check_non_negative(errors, self.street_width, "Street width", prefix)
        return errors


@dataclass(frozen=True, slots=True)
class GutterFlowResult:
    """Spread and flow properties of a gutter section.

    `computed_discharge` is the discharge the returned spread actually carries;
    for the composite search it can differ from `discharge` by `residual`.
    `spread_ratio` is reported in percent.
    """

    discharge: float
    spread: float
    depth: float
    flow_area: float
    wetted_perimeter: float
    hydraulic_radius: float
    velocity: float
    froude: float
    spread_ratio: float
    computed_discharge: float
    iterations: int = 0
    converged: bool = True

    @property
    def residual(self) -> float:
        return self.computed_discharge - self.discharge

    def exceeds_spread(self, max_spread: float) -> bool:
        """Return True when the spread is wider than the allowable `max_spread`."""

        return self.spread > max_spread

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = asdict(self)
        data["residual"] = self.residual
        return data
