"""Entry points, scenarios and pandas summaries."""

from __future__ import annotations

import pandas as pd
import pytest

from drainage_hydraulics import (
    Box,
    ConduitFlowResult,
    DepthSolution,
    InvalidGeometry,
    InvalidInput,
    compute_flow,
    rating_table,
    results_dataframe,
    run_scenario,
    scenario_from_mapping,
)

from .sample_data import (
    INVERSE_SCENARIO_MAPPING,
    ROUGHNESS,
    SCENARIO_MAPPING,
    SLOPE,
    sample_box,
    sample_channel,
    sample_pipe,
)


def test_forward_scenario_matches_compute_flow() -> None:
    result = run_scenario(scenario_from_mapping(SCENARIO_MAPPING))
    assert isinstance(result, ConduitFlowResult)
    expected: ConduitFlowResult = compute_flow(sample_box(), 1.0, ROUGHNESS, SLOPE, length=10.0, entrance_loss=0.5)
    assert result == expected
    assert result.headwater.headwater == pytest.approx(4.09, abs=1e-2)


def test_inverse_scenario_returns_a_depth() -> None:
    result = run_scenario(scenario_from_mapping(INVERSE_SCENARIO_MAPPING))
    assert isinstance(result, DepthSolution)
    assert result.converged
    assert result.discharge == pytest.approx(0.8, abs=1e-4)
    assert 0.0 < result.depth < 1.0


def test_depth_above_the_crown_is_rejected() -> None:
    with pytest.raises(InvalidGeometry, match="exceeds the maximum depth"):
        compute_flow(Box(width=2.0, height=1.0), 1.2, ROUGHNESS, SLOPE)


def test_closed_conduit_rating_table_excludes_the_full_point() -> None:
    df: pd.DataFrame = rating_table(sample_pipe(), ROUGHNESS, SLOPE, steps=10)
    assert len(df) == 9
    assert df.index.name == "depth"
    assert list(df.columns) == ["area", "velocity", "discharge", "froude"]
    assert df.index[0] == pytest.approx(0.1)
    assert df.index[-1] == pytest.approx(0.9)
    assert df.loc[df.index[4], "discharge"] == pytest.approx(1.200, abs=2e-3)
    assert df["area"].is_monotonic_increasing


def test_open_channel_rating_table_reaches_the_ceiling() -> None:
    df: pd.DataFrame = rating_table(sample_channel(), 0.02, SLOPE, steps=5)
    assert list(df.index) == pytest.approx([1.0, 2.0, 3.0, 4.0, 5.0])
    assert df.loc[df.index[0], "discharge"] == pytest.approx(10.92, abs=1e-2)
    assert df["discharge"].is_monotonic_increasing

    shallow: pd.DataFrame = rating_table(sample_channel(), 0.02, SLOPE, steps=4, max_depth_override=2.0)
    assert shallow.index[-1] == pytest.approx(2.0)


def test_rating_table_rejects_too_few_steps() -> None:
    with pytest.raises(InvalidInput, match="at least two steps"):
        rating_table(sample_box(), ROUGHNESS, SLOPE, steps=1)


def test_results_dataframe() -> None:
    results: list[ConduitFlowResult] = [
        compute_flow(sample_box(), depth, ROUGHNESS, SLOPE, length=10.0) for depth in (0.5, 1.0, 1.5)
    ]
    df: pd.DataFrame = results_dataframe(results)
    assert len(df) == 3
    assert {"depth", "discharge", "headwater", "regime", "shape"} <= set(df.columns)
    assert list(df["depth"]) == [0.5, 1.0, 1.5]
    assert (df["shape"] == "box").all()
