"""Immutable result records produced by the conduit calculators."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from ..type_helpers import ConduitShape, FlowRegime


@dataclass(frozen=True, slots=True)
class SectionProperties:
    """Geometric properties of the flow area at a given depth."""

    depth: float
    area: float
    wetted_perimeter: float
    top_width: float
    hydraulic_radius: float


@dataclass(frozen=True, slots=True)
class FullSection:
    """Area and hydraulic radius of a closed conduit flowing full."""

    area: float
    hydraulic_radius: float


@dataclass(frozen=True, slots=True)
class FlowState:
    """Uniform-flow state of a conduit at a given depth.

    Attributes:
        shape: Conduit shape that produced the state.
        depth: Flow depth y (m).
        area: Flow area A (m²).
        wetted_perimeter: Wetted perimeter Pw (m).
        top_width: Free-surface width T (m). Zero for a circular pipe flowing full.
        hydraulic_radius: Rh = A / Pw (m).
        velocity: Manning velocity V (m/s).
        discharge: Q = A·V (m³/s).
        velocity_head: Hv = V² / 2g (m).
        froude: V / sqrt(g·A/T), or None when the top width is zero.
        shear_stress: Bed shear τ (N/m²).
        full_area: A0 for closed shapes, None for open channels.
        full_discharge: Q0 for closed shapes, None for open channels.
        area_ratio: A / A0 (1.0 for open channels).
        discharge_ratio: Q / Q0 (1.0 for open channels).
    """

    shape: ConduitShape
    depth: float
    area: float
    wetted_perimeter: float
    top_width: float
    hydraulic_radius: float
    velocity: float
    discharge: float
    velocity_head: float
    froude: float | None
    shear_stress: float
    full_area: float | None = None
    full_discharge: float | None = None
    area_ratio: float = 1.0
    discharge_ratio: float = 1.0

    @property
    def regime(self) -> FlowRegime:
        if self.froude is None:
            return FlowRegime.UNDEFINED
        if self.froude < 1.0:
            return FlowRegime.SUBCRITICAL
        if self.froude > 1.0:
            return FlowRegime.SUPERCRITICAL
        return FlowRegime.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = asdict(self)
        data["shape"] = self.shape.value
        data["regime"] = self.regime.value
        return data


@dataclass(frozen=True, slots=True)
class HeadwaterResult:
    """Energy losses and headwater depth at a conduit inlet (m)."""

    entrance_loss: float
    friction_loss: float
    exit_loss: float
    total_loss: float
    headwater: float


@dataclass(frozen=True, slots=True)
class ConduitFlowResult:
    """Forward-solve payload: the flow state and its headwater."""

    state: FlowState
    headwater: HeadwaterResult

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = self.state.to_dict()
        data.update(asdict(self.headwater))
        return data


@dataclass(frozen=True, slots=True)
class DepthSolution:
    """Result of inverting discharge(depth) for a target discharge.

    `converged` is False when the iteration cap was reached; `depth` is then the
    midpoint of the final bracket and `residual` tells the caller how far off it is.
    """

    target_discharge: float
    depth: float
    discharge: float
    velocity: float
    iterations: int
    converged: bool

    @property
    def residual(self) -> float:
        return self.discharge - self.target_discharge
