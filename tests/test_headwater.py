"""Entrance, friction and exit losses."""

from __future__ import annotations

import pytest

from drainage_hydraulics import InvalidInput
from drainage_hydraulics.headwater import headwater, open_channel_headwater
from drainage_hydraulics.manning import flow_state
from drainage_hydraulics.models import FlowState, HeadwaterResult

from .sample_data import ROUGHNESS, SLOPE, sample_box, sample_channel, sample_pipe


def test_losses_scale_with_velocity_head() -> None:
    state: FlowState = flow_state(sample_pipe(), 0.6, ROUGHNESS, SLOPE)
    result: HeadwaterResult = headwater(state, ROUGHNESS, length=0.0, entrance_loss=0.9)
    assert result.entrance_loss == pytest.approx(0.9 * state.velocity_head)
    assert result.exit_loss == pytest.approx(state.velocity_head)
    assert result.friction_loss == 0.0
    assert result.headwater == pytest.approx(state.depth + state.velocity_head + result.total_loss)


def test_friction_loss_grows_with_length() -> None:
    state: FlowState = flow_state(sample_box(), 1.0, ROUGHNESS, SLOPE)
    short: HeadwaterResult = headwater(state, ROUGHNESS, length=10.0)
    long: HeadwaterResult = headwater(state, ROUGHNESS, length=40.0)
    assert long.friction_loss == pytest.approx(4.0 * short.friction_loss)
    assert long.headwater > short.headwater


def test_open_channel_has_no_losses() -> None:
    state: FlowState = flow_state(sample_channel(), 1.0, 0.02, SLOPE)
    # Length and Ke are irrelevant for an open channel.
    result: HeadwaterResult = headwater(state, 0.02, length=500.0, entrance_loss=0.9)
    assert result == open_channel_headwater(state)
    assert result.total_loss == 0.0
    assert result.headwater == pytest.approx(state.depth + state.velocity_head)


@pytest.mark.parametrize(("length", "entrance_loss"), [(-1.0, 0.5), (10.0, -0.1), (float("nan"), 0.5)])
def test_bad_loss_inputs_are_rejected(length: float, entrance_loss: float) -> None:
    state: FlowState = flow_state(sample_box(), 1.0, ROUGHNESS, SLOPE)
    with pytest.raises(InvalidInput):
        headwater(state, ROUGHNESS, length=length, entrance_loss=entrance_loss)
