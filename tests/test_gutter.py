"""Triangular and composite gutter spread."""

from __future__ import annotations

import math

import pytest

from drainage_hydraulics import (
    CompositeSearch,
    GutterFlowResult,
    GutterSection,
    InvalidInput,
    composite_spread,
    gutter_capacity,
    gutter_discharge,
    gutter_spread,
    triangular_spread,
)
from drainage_hydraulics.gutter import DEFAULT_MAX_ITERATIONS, _result, triangular_discharge

from .sample_data import sample_gutter


def test_triangular_spread_matches_the_forward_equation() -> None:
    section: GutterSection = sample_gutter(discharge=0.05)
    result: GutterFlowResult = triangular_spread(section)
    assert triangular_discharge(result.spread, 0.05, 0.01, 0.016) == pytest.approx(0.05, rel=1e-9)
    assert result.converged
    assert result.iterations == 0
    assert result.residual == 0.0


def test_triangular_derived_properties() -> None:
    result: GutterFlowResult = triangular_spread(sample_gutter(discharge=0.05))
    spread: float = result.spread
    assert result.depth == pytest.approx(0.05 * spread)
    assert result.flow_area == pytest.approx(0.5 * spread * result.depth)
    assert result.wetted_perimeter == pytest.approx(spread * math.sqrt(1.0 + 0.05**2))
    assert result.hydraulic_radius == pytest.approx(result.flow_area / result.wetted_perimeter)
    assert result.velocity == pytest.approx(0.05 / result.flow_area)
    assert result.froude == pytest.approx(result.velocity / math.sqrt(9.81 * result.flow_area / spread))
    assert result.spread_ratio == pytest.approx(spread / 0.6 * 100.0)


def test_composite_reduces_to_triangular_when_slopes_match() -> None:
    # Wide gutter so the spread stays inside it.
    section = GutterSection(
        gutter_width=5.0,
        gutter_cross_slope=0.02,
        longitudinal_slope=0.01,
        roughness=0.016,
        discharge=0.05,
        street_cross_slope=0.02,
    )
    closed_form: float = triangular_spread(section).spread
    bisected: GutterFlowResult = composite_spread(section, method=CompositeSearch.BISECTION)
    stepped: GutterFlowResult = composite_spread(section, method=CompositeSearch.FIXED_STEP)
    assert bisected.converged
    assert bisected.spread == pytest.approx(closed_form, rel=1e-2)
    # The fixed-step search resolves the spread to about one step.
    assert stepped.spread == pytest.approx(closed_form, abs=0.15)


def test_composite_bisection_spills_onto_the_street() -> None:
    section: GutterSection = sample_gutter(discharge=0.05, street_cross_slope=0.02)
    result: GutterFlowResult = composite_spread(section, method=CompositeSearch.BISECTION)
    assert result.converged
    assert abs(result.residual) < 1e-4
    assert result.spread > section.gutter_width
    excess: float = result.spread - 0.6
    assert result.depth == pytest.approx(0.05 * 0.6 + 0.02 * excess)
    # Street width counts towards the spread ratio of a composite section.
    assert result.spread_ratio == pytest.approx(result.spread / 3.6 * 100.0)


def test_composite_superposition() -> None:
    section: GutterSection = sample_gutter(discharge=0.05, street_cross_slope=0.02)
    gutter_full: float = triangular_discharge(0.6, 0.05, 0.01, 0.016)
    street: float = triangular_discharge(1.4, 0.02, 0.01, 0.016)
    assert gutter_discharge(section, 2.0) == pytest.approx(gutter_full + street)
    assert gutter_discharge(section, 0.4) == pytest.approx(triangular_discharge(0.4, 0.05, 0.01, 0.016))
    assert gutter_discharge(section, 0.0) == 0.0


def test_fixed_step_search_is_bounded_and_reports_its_residual() -> None:
    section: GutterSection = sample_gutter(discharge=0.05, street_cross_slope=0.02)
    result: GutterFlowResult = gutter_spread(section)
    assert 1 <= result.iterations <= DEFAULT_MAX_ITERATIONS
    assert result.spread > 0
    assert result.computed_discharge == pytest.approx(gutter_discharge(section, result.spread))
    if not result.converged:
        assert result.iterations == DEFAULT_MAX_ITERATIONS


def test_fixed_step_search_stays_positive_for_tiny_flows() -> None:
    section: GutterSection = sample_gutter(discharge=1e-6, street_cross_slope=0.02)
    result: GutterFlowResult = composite_spread(section)
    assert result.spread > 0
    assert math.isfinite(result.velocity)


def test_fixed_step_search_never_settles_on_a_dry_spread() -> None:
    # Steep gutter: even T = 0.05 m carries more than the target, so the steps walk down towards zero.
    section = GutterSection(
        gutter_width=0.6,
        gutter_cross_slope=0.3,
        longitudinal_slope=0.05,
        roughness=0.012,
        discharge=5e-5,
        street_cross_slope=0.02,
    )
    assert gutter_discharge(section, 0.05) > section.discharge + 1e-4
    result: GutterFlowResult = composite_spread(section)
    assert result.spread > 0.01
    assert result.flow_area > 0
    assert math.isfinite(result.velocity)
    assert math.isfinite(result.froude)
    assert result.iterations == DEFAULT_MAX_ITERATIONS
    assert not result.converged


def test_dry_spread_reports_zero_velocity() -> None:
    result: GutterFlowResult = _result(
        sample_gutter(discharge=0.05, street_cross_slope=0.02), 0.0, triangular=False, iterations=1, converged=False
    )
    assert result.velocity == 0.0
    assert result.froude == 0.0
    assert result.hydraulic_radius == 0.0


def test_gutter_spread_dispatches_on_street_slope() -> None:
    triangular: GutterFlowResult = gutter_spread(sample_gutter(discharge=0.02))
    composite: GutterFlowResult = gutter_spread(
        sample_gutter(discharge=0.05, street_cross_slope=0.02), method=CompositeSearch.BISECTION
    )
    assert triangular.iterations == 0
    assert composite.iterations > 0


def test_capacity_and_spread_limit() -> None:
    section: GutterSection = sample_gutter(discharge=0.05)
    capacity: float = gutter_capacity(section, max_spread=2.0)
    at_capacity: GutterFlowResult = triangular_spread(sample_gutter(discharge=capacity))
    assert at_capacity.spread == pytest.approx(2.0)
    assert not at_capacity.exceeds_spread(2.5)
    assert at_capacity.exceeds_spread(1.5)


def test_invalid_sections_are_rejected() -> None:
    with pytest.raises(InvalidInput, match="Gutter discharge"):
        triangular_spread(sample_gutter(discharge=0.0))
    with pytest.raises(InvalidInput, match="street cross slope"):
        composite_spread(sample_gutter(discharge=0.05))
    with pytest.raises(InvalidInput, match="Allowable spread"):
        gutter_capacity(sample_gutter(), max_spread=0.0)
    with pytest.raises(InvalidInput, match="Longitudinal slope"):
        GutterSection(
            gutter_width=0.6,
            gutter_cross_slope=0.05,
            longitudinal_slope=-0.01,
            roughness=0.016,
            discharge=0.05,
        ).assert_valid()


def test_result_serialises_with_residual() -> None:
    data: dict[str, object] = triangular_spread(sample_gutter()).to_dict()
    assert data["residual"] == 0.0
    assert "spread_ratio" in data
