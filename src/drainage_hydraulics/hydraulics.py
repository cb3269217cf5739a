"""Per-shape entry points for forward and inverse uniform-flow calculations.

Forward helpers take geometry, depth, roughness and slope and return a
`ConduitFlowResult` (flow state plus headwater). Inverse helpers take a target
discharge and return a `DepthSolution` from the bisection solver. Every helper
is a pure function of its scalar inputs and returns immutable records, so they
are safe to call concurrently and cheap enough to call on every input change.

Logging is routed through `loguru.logger`; the library never configures sinks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, cast

from loguru import logger

from .geometry import max_depth
from .headwater import DEFAULT_ENTRANCE_LOSS, headwater
from .manning import check_roughness, check_slope, flow_state
from .models.flow_state import ConduitFlowResult, DepthSolution, FlowState, HeadwaterResult
from .models.geometry import Box, Circular, ConduitGeometry, Trapezoidal
from .models.scenario import Scenario
from .solver import solve_depth
from .classes_references import InvalidInput

if TYPE_CHECKING:  # pragma: no cover - pandas is imported lazily
    import pandas as pd

DEFAULT_RATING_STEPS = 50
DEFAULT_OPEN_CHANNEL_RATING_DEPTH = 5.0


def compute_flow(
    geometry: ConduitGeometry,
    depth: float,
    roughness: float,
    slope: float,
    *,
    length: float = 0.0,
    entrance_loss: float = DEFAULT_ENTRANCE_LOSS,
) -> ConduitFlowResult:
    """Forward solve for any conduit shape."""

    state: FlowState = flow_state(geometry, depth, roughness, slope)
    losses: HeadwaterResult = headwater(state, roughness, length, entrance_loss)
    logger.info(
        "{geometry}: y={depth:.4f} V={velocity:.4f} Q={discharge:.4f} HW={hw:.4f}",
        geometry=geometry.describe(),
        depth=depth,
        velocity=state.velocity,
        discharge=state.discharge,
        hw=losses.headwater,
    )
    return ConduitFlowResult(state=state, headwater=losses)


def depth_from_q(geometry: ConduitGeometry, target_q: float, roughness: float, slope: float) -> DepthSolution:
    """Inverse solve for any conduit shape."""

    solution: DepthSolution = solve_depth(geometry, target_q, roughness, slope)
    logger.info(
        "{geometry}: Q={target:.4f} -> y={depth:.4f} (Q={discharge:.4f}, converged={converged})",
        geometry=geometry.describe(),
        target=target_q,
        depth=solution.depth,
        discharge=solution.discharge,
        converged=solution.converged,
    )
    return solution


def run_scenario(scenario: Scenario) -> ConduitFlowResult | DepthSolution:
    """Run a configured scenario: forward when it carries a depth, inverse when it carries a target discharge."""

    scenario.assert_valid()
    logger.info("Running {scenario}", scenario=scenario.describe())
    depth: float | None = scenario.depth
    if depth is None:
        target: float = cast(float, scenario.target_discharge)
        return depth_from_q(scenario.geometry, target, scenario.roughness, scenario.slope)
    return compute_flow(
        scenario.geometry,
        depth,
        scenario.roughness,
        scenario.slope,
        length=scenario.length,
        entrance_loss=scenario.entrance_loss,
    )


def circular_pipe_flow(
    diameter: float,
    depth: float,
    roughness: float,
    slope: float,
    *,
    length: float = 0.0,
    entrance_loss: float = DEFAULT_ENTRANCE_LOSS,
) -> ConduitFlowResult:
    """Uniform flow and headwater of a part-full circular pipe."""

    return compute_flow(Circular(diameter=diameter), depth, roughness, slope, length=length, entrance_loss=entrance_loss)


def box_culvert_flow(
    width: float,
    height: float,
    depth: float,
    roughness: float,
    slope: float,
    *,
    length: float = 0.0,
    entrance_loss: float = DEFAULT_ENTRANCE_LOSS,
) -> ConduitFlowResult:
    """Uniform flow and headwater of a box culvert."""

    return compute_flow(
        Box(width=width, height=height), depth, roughness, slope, length=length, entrance_loss=entrance_loss
    )


def trapezoidal_channel_flow(
    bottom_width: float,
    side_slope: float,
    depth: float,
    roughness: float,
    slope: float,
) -> ConduitFlowResult:
    """Uniform flow of an open trapezoidal channel; headwater is y + Hv."""

    return compute_flow(Trapezoidal(bottom_width=bottom_width, side_slope=side_slope), depth, roughness, slope)


def circular_depth_from_q(target_q: float, diameter: float, roughness: float, slope: float) -> DepthSolution:
    return depth_from_q(Circular(diameter=diameter), target_q, roughness, slope)


def box_depth_from_q(target_q: float, width: float, height: float, roughness: float, slope: float) -> DepthSolution:
    return depth_from_q(Box(width=width, height=height), target_q, roughness, slope)


def trapezoidal_depth_from_q(
    target_q: float, bottom_width: float, side_slope: float, roughness: float, slope: float
) -> DepthSolution:
    return depth_from_q(Trapezoidal(bottom_width=bottom_width, side_slope=side_slope), target_q, roughness, slope)


def rating_table(
    geometry: ConduitGeometry,
    roughness: float,
    slope: float,
    *,
    steps: int = DEFAULT_RATING_STEPS,
    max_depth_override: float | None = None,
) -> "pd.DataFrame":
    """
    Return a pandas DataFrame of depth, area, velocity, discharge and Froude number.

    Closed conduits are sampled at i/steps of their rise for i = 1..steps-1 (the
    full-pipe point is excluded); open channels at i/steps of `max_depth_override`
    (5 m by default) for i = 1..steps.
    """
    import pandas as pd

    geometry.assert_valid()
    check_roughness(roughness)
    check_slope(slope)
    if steps < 2:
        raise InvalidInput(f"Rating tables need at least two steps (got {steps}).")

    limit: float | None = max_depth(geometry)
    if limit is None:
        top: float = max_depth_override if max_depth_override is not None else DEFAULT_OPEN_CHANNEL_RATING_DEPTH
        indices: range = range(1, steps + 1)
    else:
        top = limit if max_depth_override is None else min(limit, max_depth_override)
        indices = range(1, steps)
    if top <= 0:
        raise InvalidInput(f"Rating table depth must be greater than zero (got {top}).")

    rows: list[dict[str, object]] = []
    for index in indices:
        state: FlowState = flow_state(geometry, top * index / steps, roughness, slope)
        rows.append(
            {
                "depth": state.depth,
                "area": state.area,
                "velocity": state.velocity,
                "discharge": state.discharge,
                "froude": state.froude,
            }
        )
    df = pd.DataFrame(rows)
    logger.debug("Built {count}-row rating table for {geometry}", count=len(df), geometry=geometry.describe())
    return df.set_index("depth")


def results_dataframe(results: Iterable[ConduitFlowResult | FlowState]) -> "pd.DataFrame":
    """Collect flow results into a pandas DataFrame, one row per result."""
    import pandas as pd

    rows: list[dict[str, object]] = []
    for result in results:
        rows.append(result.to_dict())
    return pd.DataFrame(rows)


__all__: list[str] = [
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
]
