"""
Value objects used by the drainage-hydraulics calculators.

Inputs (geometry and inlet variants, gutter sections, scenarios) validate
themselves through the `Validatable` mixin; results are frozen dataclasses
returned by value.
"""

from __future__ import annotations

from .base import Validatable
from .geometry import Box, Circular, ConduitGeometry, Trapezoidal
from .flow_state import ConduitFlowResult, DepthSolution, FlowState, FullSection, HeadwaterResult, SectionProperties
from .gutter import GutterFlowResult, GutterSection
from .inlet import Combination, Curb, Grate, InletGeometry, InletResult, Sag, SpacingPlan
from .scenario import Scenario

__all__: list[str] = [
    "Validatable",
    "Box",
    "Circular",
    "ConduitGeometry",
    "Trapezoidal",
    "ConduitFlowResult",
    "DepthSolution",
    "FlowState",
    "FullSection",
    "HeadwaterResult",
    "SectionProperties",
    "GutterFlowResult",
    "GutterSection",
    "Combination",
    "Curb",
    "Grate",
    "InletGeometry",
    "InletResult",
    "Sag",
    "SpacingPlan",
    "Scenario",
]
