"""Public API for drainage-hydraulics."""

from .classes_references import InvalidGeometry, InvalidInput, InvalidRoughness, InvalidSlope
from .config import (
    CoefficientTable,
    DEFAULT_COEFFICIENTS,
    inlet_from_mapping,
    load_coefficient_table,
    load_scenario_from_json,
    scenario_from_mapping,
)
from .gutter import composite_spread, gutter_capacity, gutter_discharge, gutter_spread, triangular_spread
from .hydraulics import (
    box_culvert_flow,
    box_depth_from_q,
    circular_depth_from_q,
    circular_pipe_flow,
    compute_flow,
    depth_from_q,
    rating_table,
    results_dataframe,
    run_scenario,
    trapezoidal_channel_flow,
    trapezoidal_depth_from_q,
)
from .inlets import (
    combination_inlet,
    curb_inlet,
    grate_inlet,
    inlets_required,
    intercept,
    plan_inlet_spacing,
    recommended_spacing,
    sag_inlet,
)
from .models import (
    Box,
    Circular,
    Combination,
    ConduitFlowResult,
    Curb,
    DepthSolution,
    FlowState,
    Grate,
    GutterFlowResult,
    GutterSection,
    HeadwaterResult,
    InletResult,
    Sag,
    Scenario,
    SpacingPlan,
    Trapezoidal,
)
from .solver import solve_depth
from .type_helpers import (
    AreaType,
    CompositeSearch,
    ConduitShape,
    CurbOpeningKind,
    FlowRegime,
    GrateOrientation,
    InletKind,
    SagRegime,
)

__all__: list[str] = [
    "InvalidGeometry",
    "InvalidInput",
    "InvalidRoughness",
    "InvalidSlope",
    "CoefficientTable",
    "DEFAULT_COEFFICIENTS",
    "inlet_from_mapping",
    "load_coefficient_table",
    "load_scenario_from_json",
    "scenario_from_mapping",
    "composite_spread",
    "gutter_capacity",
    "gutter_discharge",
    "gutter_spread",
    "triangular_spread",
    "box_culvert_flow",
    "box_depth_from_q",
    "circular_depth_from_q",
    "circular_pipe_flow",
    "compute_flow",
    "depth_from_q",
    "rating_table",
    "results_dataframe",
    "run_scenario",
    "trapezoidal_channel_flow",
    "trapezoidal_depth_from_q",
    "combination_inlet",
    "curb_inlet",
    "grate_inlet",
    "inlets_required",
    "intercept",
    "plan_inlet_spacing",
    "recommended_spacing",
    "sag_inlet",
    "Box",
    "Circular",
    "Combination",
    "ConduitFlowResult",
    "Curb",
    "DepthSolution",
    "FlowState",
    "Grate",
    "GutterFlowResult",
    "GutterSection",
    "HeadwaterResult",
    "InletResult",
    "Sag",
    "Scenario",
    "SpacingPlan",
    "Trapezoidal",
    "solve_depth",
    "AreaType",
    "CompositeSearch",
    "ConduitShape",
    "CurbOpeningKind",
    "FlowRegime",
    "GrateOrientation",
    "InletKind",
    "SagRegime",
]
