"""Uniform-flow states and headwater for the worked examples."""

from __future__ import annotations

import math

import pytest

from drainage_hydraulics import (
    Box,
    Circular,
    ConduitFlowResult,
    FlowRegime,
    FlowState,
    InvalidRoughness,
    InvalidSlope,
    box_culvert_flow,
    circular_pipe_flow,
    trapezoidal_channel_flow,
)
from drainage_hydraulics.manning import flow_state, froude_number, ratio

from .sample_data import ROUGHNESS, SLOPE, sample_channel


def test_box_culvert_example() -> None:
    result: ConduitFlowResult = box_culvert_flow(2.0, 2.0, 1.0, ROUGHNESS, SLOPE, length=10.0, entrance_loss=0.5)
    state: FlowState = result.state
    assert state.area == pytest.approx(2.0)
    assert state.wetted_perimeter == pytest.approx(4.0)
    assert state.hydraulic_radius == pytest.approx(0.5)
    assert state.velocity == pytest.approx(4.846, abs=1e-3)
    assert state.discharge == pytest.approx(9.69, abs=1e-2)
    assert state.velocity_head == pytest.approx(1.197, abs=1e-3)

    losses = result.headwater
    assert losses.entrance_loss == pytest.approx(0.599, abs=2e-3)
    assert losses.friction_loss == pytest.approx(0.100, abs=1e-3)
    assert losses.exit_loss == pytest.approx(1.197, abs=1e-3)
    assert losses.total_loss == pytest.approx(1.896, abs=2e-3)
    assert losses.headwater == pytest.approx(4.09, abs=1e-2)
    assert losses.total_loss == pytest.approx(losses.entrance_loss + losses.friction_loss + losses.exit_loss)


def test_trapezoidal_channel_example() -> None:
    result: ConduitFlowResult = trapezoidal_channel_flow(2.0, 1.0, 1.0, 0.02, SLOPE)
    state: FlowState = result.state
    assert state.area == pytest.approx(3.0)
    assert state.top_width == pytest.approx(4.0)
    assert state.wetted_perimeter == pytest.approx(4.828, abs=1e-3)
    assert state.hydraulic_radius == pytest.approx(0.6215, abs=1e-3)
    assert state.velocity == pytest.approx(3.64, abs=1e-2)
    assert state.discharge == pytest.approx(10.92, abs=1e-2)
    assert state.froude == pytest.approx(1.34, abs=1e-2)
    assert state.regime is FlowRegime.SUPERCRITICAL

    # Open channels carry no losses; HW is the specific energy.
    assert result.headwater.total_loss == 0.0
    assert result.headwater.headwater == pytest.approx(1.676, abs=1e-3)
    assert state.area_ratio == 1.0
    assert state.discharge_ratio == 1.0
    assert state.full_discharge is None


def test_half_full_pipe_example() -> None:
    state: FlowState = circular_pipe_flow(1.0, 0.5, ROUGHNESS, SLOPE).state
    assert state.area == pytest.approx(0.3927, abs=1e-4)
    assert state.wetted_perimeter == pytest.approx(1.5708, abs=1e-4)
    assert state.hydraulic_radius == 0.25
    assert state.top_width == pytest.approx(1.0)
    assert state.velocity == pytest.approx(3.055, abs=5e-3)
    assert state.discharge == pytest.approx(1.200, abs=2e-3)
    assert state.area_ratio == pytest.approx(0.5)
    # Rh at half full equals Rh full, so V and Q ratios follow the area ratio.
    assert state.discharge_ratio == pytest.approx(0.5)


def test_shear_and_velocity_head() -> None:
    state: FlowState = flow_state(Box(width=2.0, height=2.0), 1.0, ROUGHNESS, SLOPE)
    assert state.shear_stress == pytest.approx(9810.0 * 0.5 * 0.01)
    assert state.velocity_head == pytest.approx(state.velocity**2 / (2.0 * 9.81))


def test_full_pipe_froude_is_undefined() -> None:
    state: FlowState = flow_state(Circular(diameter=1.0), 1.0, ROUGHNESS, SLOPE)
    assert state.froude is None
    assert state.regime is FlowRegime.UNDEFINED
    assert math.isfinite(state.velocity)
    assert state.area_ratio == pytest.approx(1.0)
    assert state.discharge_ratio == pytest.approx(1.0)


def test_subcritical_flow_on_a_mild_slope() -> None:
    state: FlowState = flow_state(sample_channel(), 1.0, 0.035, 0.0005)
    assert state.froude is not None and state.froude < 1.0
    assert state.regime is FlowRegime.SUBCRITICAL


def test_helpers_define_degenerate_results() -> None:
    assert froude_number(1.0, 1.0, 0.0) is None
    assert ratio(2.0, 0.0) == 1.0
    assert ratio(1.0, 4.0) == 0.25


@pytest.mark.parametrize("slope", [0.0, -0.01, float("inf")])
def test_flat_or_adverse_slope_is_rejected(slope: float) -> None:
    with pytest.raises(InvalidSlope):
        flow_state(sample_channel(), 1.0, 0.02, slope)


@pytest.mark.parametrize("roughness", [0.0, -0.013, float("nan")])
def test_non_positive_roughness_is_rejected(roughness: float) -> None:
    with pytest.raises(InvalidRoughness):
        flow_state(sample_channel(), 1.0, roughness, SLOPE)


def test_state_serialises_with_regime() -> None:
    data: dict[str, object] = flow_state(sample_channel(), 1.0, 0.02, SLOPE).to_dict()
    assert data["shape"] == "trapezoidal"
    assert data["regime"] == FlowRegime.SUPERCRITICAL.value
