"""Command-line wrapper around the drainage-hydraulics calculators.

Conduit flows are entered in m³/s; gutter and inlet flows in L/s. Every slope
on the command line is a percentage.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from loguru import logger

from .classes_references import InvalidInput
from .config import CoefficientTable, DEFAULT_COEFFICIENTS, load_coefficient_table, load_scenario_from_json
from .gutter import gutter_spread
from .hydraulics import compute_flow, depth_from_q, rating_table, run_scenario
from .inlets import intercept, plan_inlet_spacing
from .models import (
    Box,
    Circular,
    Combination,
    ConduitGeometry,
    Curb,
    GutterFlowResult,
    GutterSection,
    Grate,
    InletGeometry,
    InletResult,
    Sag,
    Trapezoidal,
)
from .models.flow_state import ConduitFlowResult, DepthSolution
from .type_helpers import AreaType, CompositeSearch, CurbOpeningKind, GrateOrientation
from .units import cms_to_litres_per_second, litres_per_second_to_cms, percent_to_decimal


def main(argv: Sequence[str] | None = None) -> int:
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(list(argv) if argv is not None else None)
    _configure_logging(verbose=args.verbose)
    try:
        if args.command in ("pipe", "box", "channel"):
            _run_conduit(args)
        elif args.command == "gutter":
            _run_gutter(args)
        elif args.command == "inlet":
            _run_inlet(args)
        elif args.command == "rating":
            _run_rating(args)
        elif args.command == "scenario":
            _run_scenario(args)
        else:
            parser.error(message=f"Unhandled command {args.command}")
            return 1
    except InvalidInput as exc:
        raise SystemExit(f"Invalid input: {exc}") from exc
    return 0


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Uniform-flow, gutter spread and inlet interception calculations.")
    parser.add_argument("--verbose", action="store_true", help="Log solver details to stderr.")
    parser.add_argument("--coefficients", type=Path, help="JSON file overriding the material / entrance tables.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    pipe_parser = subparsers.add_parser(name="pipe", help="Circular pipe flowing part full.")
    pipe_parser.add_argument("--diameter", type=float, required=True, help="Internal diameter (m).")
    _add_conduit_arguments(pipe_parser, closed=True)

    box_parser = subparsers.add_parser(name="box", help="Rectangular box culvert.")
    box_parser.add_argument("--width", type=float, required=True, help="Span (m).")
    box_parser.add_argument("--height", type=float, required=True, help="Rise (m).")
    _add_conduit_arguments(box_parser, closed=True)

    channel_parser = subparsers.add_parser(name="channel", help="Open trapezoidal channel.")
    channel_parser.add_argument("--bottom-width", type=float, required=True, help="Bottom width (m).")
    channel_parser.add_argument("--side-slope", type=float, default=0.0, help="Side slope m (H:1V).")
    _add_conduit_arguments(channel_parser, closed=False)

    gutter_parser = subparsers.add_parser(name="gutter", help="Gutter spread for a design flow.")
    _add_gutter_arguments(gutter_parser)
    gutter_parser.add_argument("--max-spread", type=float, help="Allowable spread (m) to check against.")

    inlet_parser = subparsers.add_parser(name="inlet", help="Inlet interception for the gutter flow.")
    inlet_parser.add_argument("kind", choices=["grate", "curb", "combination", "sag"])
    _add_gutter_arguments(inlet_parser)
    inlet_parser.add_argument("--grate-length", type=float, default=0.9, help="Grate length (m).")
    inlet_parser.add_argument("--grate-width", type=float, default=0.6, help="Grate width (m).")
    inlet_parser.add_argument(
        "--orientation",
        choices=[member.name.lower() for member in GrateOrientation],
        default=GrateOrientation.P_45_45.name.lower(),
        help="Grate bar orientation.",
    )
    inlet_parser.add_argument("--clogging-factor", type=float, default=0.5, help="Unclogged fraction of the grate.")
    inlet_parser.add_argument("--curb-length", type=float, default=1.5, help="Curb opening length (m).")
    inlet_parser.add_argument("--curb-height", type=float, default=0.15, help="Curb opening height (m).")
    inlet_parser.add_argument(
        "--opening", choices=[member.value for member in CurbOpeningKind], default=CurbOpeningKind.HORIZONTAL.value
    )
    inlet_parser.add_argument("--depression", type=float, default=0.0, help="Local depression (m).")
    inlet_parser.add_argument("--perimeter", type=float, help="Sag weir perimeter (m); defaults to 2(L+W).")
    inlet_parser.add_argument("--segment-length", type=float, help="Street segment length (m) for a spacing plan.")
    inlet_parser.add_argument(
        "--area-type", choices=[member.name.lower() for member in AreaType], default=AreaType.DEFAULT.name.lower()
    )

    rating_parser = subparsers.add_parser(name="rating", help="Depth-discharge table for a scenario's geometry.")
    rating_parser.add_argument("--config", type=Path, required=True, help="Scenario JSON file.")
    rating_parser.add_argument("--steps", type=int, default=50)

    scenario_parser = subparsers.add_parser(name="scenario", help="Run a scenario JSON file.")
    scenario_parser.add_argument("--config", type=Path, required=True, help="Scenario JSON file.")
    return parser


def _add_conduit_arguments(parser: argparse.ArgumentParser, *, closed: bool) -> None:
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--depth", type=float, help="Flow depth (m) for a forward solve.")
    mode.add_argument("--target-q", type=float, help="Target discharge (m³/s) for an inverse solve.")
    roughness = parser.add_mutually_exclusive_group(required=True)
    roughness.add_argument("--n", type=float, dest="roughness", help="Manning roughness.")
    roughness.add_argument("--material", help="Material name looked up in the coefficient table.")
    parser.add_argument("--slope", type=float, required=True, help="Longitudinal slope (%%).")
    if closed:
        parser.add_argument("--length", type=float, default=0.0, help="Barrel length (m).")
        entrance = parser.add_mutually_exclusive_group()
        entrance.add_argument("--ke", type=float, help="Entrance loss coefficient (default 0.5).")
        entrance.add_argument("--entrance", help="Entrance description looked up in the coefficient table.")


def _add_gutter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--flow", type=float, required=True, help="Design flow (L/s).")
    parser.add_argument("--gutter-width", type=float, required=True, help="Gutter width W (m).")
    parser.add_argument("--gutter-slope", type=float, required=True, help="Gutter cross slope Sx (%%).")
    parser.add_argument("--street-slope", type=float, help="Street cross slope Sw (%%); enables the composite section.")
    parser.add_argument("--street-width", type=float, help="Street width (m) for the spread ratio.")
    parser.add_argument("--slope", type=float, required=True, help="Longitudinal slope (%%).")
    parser.add_argument("--n", type=float, dest="roughness", default=0.016, help="Manning roughness.")
    parser.add_argument(
        "--method", choices=[member.value for member in CompositeSearch], default=CompositeSearch.FIXED_STEP.value
    )


def _coefficients(args: argparse.Namespace) -> CoefficientTable:
    if args.coefficients is not None:
        return load_coefficient_table(args.coefficients)
    return DEFAULT_COEFFICIENTS


def _run_conduit(args: argparse.Namespace) -> None:
    geometry: ConduitGeometry
    if args.command == "pipe":
        geometry = Circular(diameter=args.diameter)
    elif args.command == "box":
        geometry = Box(width=args.width, height=args.height)
    else:
        geometry = Trapezoidal(bottom_width=args.bottom_width, side_slope=args.side_slope)
    table: CoefficientTable = _coefficients(args)
    roughness: float = args.roughness if args.roughness is not None else table.manning_n(args.material)
    slope: float = percent_to_decimal(args.slope)

    if args.target_q is not None:
        solution: DepthSolution = depth_from_q(geometry, args.target_q, roughness, slope)
        _print_record(
            {
                "depth": solution.depth,
                "discharge": solution.discharge,
                "velocity": solution.velocity,
                "residual": solution.residual,
                "iterations": solution.iterations,
                "converged": solution.converged,
            }
        )
        return

    entrance_loss: float = 0.5
    length: float = 0.0
    if geometry.shape.is_closed:
        length = args.length
        if args.ke is not None:
            entrance_loss = args.ke
        elif args.entrance is not None:
            entrance_loss = table.entrance_loss_coefficient(args.entrance)
    result: ConduitFlowResult = compute_flow(
        geometry, args.depth, roughness, slope, length=length, entrance_loss=entrance_loss
    )
    _print_record(result.to_dict())


def _gutter_section(args: argparse.Namespace) -> GutterSection:
    return GutterSection(
        gutter_width=args.gutter_width,
        gutter_cross_slope=percent_to_decimal(args.gutter_slope),
        longitudinal_slope=percent_to_decimal(args.slope),
        roughness=args.roughness,
        discharge=litres_per_second_to_cms(args.flow),
        street_cross_slope=percent_to_decimal(args.street_slope) if args.street_slope is not None else None,
        street_width=args.street_width,
    )


def _run_gutter(args: argparse.Namespace) -> None:
    result: GutterFlowResult = gutter_spread(_gutter_section(args), method=CompositeSearch(args.method))
    record: dict[str, Any] = result.to_dict()
    if args.max_spread is not None:
        record["exceeds_spread"] = result.exceeds_spread(args.max_spread)
    _print_record(record)


def _run_inlet(args: argparse.Namespace) -> None:
    section: GutterSection = _gutter_section(args)
    gutter: GutterFlowResult = gutter_spread(section, method=CompositeSearch(args.method))
    grate = Grate(
        length=args.grate_length,
        width=args.grate_width,
        orientation=GrateOrientation[args.orientation.upper()],
    )
    curb = Curb(
        length=args.curb_length,
        height=args.curb_height,
        opening_kind=CurbOpeningKind(args.opening),
        depression=args.depression,
    )
    inlet: InletGeometry
    if args.kind == "grate":
        inlet = grate
    elif args.kind == "curb":
        inlet = curb
    elif args.kind == "combination":
        inlet = Combination(grate=grate, curb=curb)
    else:
        inlet = Sag(length=args.grate_length, width=args.grate_width, perimeter=args.perimeter)
    result: InletResult = intercept(inlet, gutter, section.longitudinal_slope, clogging_factor=args.clogging_factor)
    record: dict[str, Any] = result.to_dict()
    for key in ("approach_flow", "intercepted_flow", "bypass_flow"):
        record[f"{key}_lps"] = cms_to_litres_per_second(record.pop(key))
    _print_record(record)
    if args.segment_length is not None and result.intercepted_flow > 0:
        plan = plan_inlet_spacing(
            args.segment_length,
            section.discharge,
            result.intercepted_flow,
            AreaType[args.area_type.upper()],
        )
        _print_record(
            {
                "inlet_count": plan.inlet_count,
                "actual_spacing": plan.actual_spacing,
                "max_allowed_spacing": plan.max_allowed_spacing,
                "within_limit": plan.within_limit,
            }
        )


def _run_rating(args: argparse.Namespace) -> None:
    scenario = load_scenario_from_json(args.config, _coefficients(args))
    frame = rating_table(scenario.geometry, scenario.roughness, scenario.slope, steps=args.steps)
    print(frame.to_string())


def _run_scenario(args: argparse.Namespace) -> None:
    scenario = load_scenario_from_json(args.config, _coefficients(args))
    result: ConduitFlowResult | DepthSolution = run_scenario(scenario)
    if isinstance(result, DepthSolution):
        _print_record(
            {
                "depth": result.depth,
                "discharge": result.discharge,
                "velocity": result.velocity,
                "residual": result.residual,
                "converged": result.converged,
            }
        )
    else:
        _print_record(result.to_dict())


def _print_record(record: Mapping[str, Any]) -> None:
    width: int = max((len(key) for key in record), default=0)
    for key, value in record.items():
        if isinstance(value, float):
            text = f"{value:.4f}"
        elif value is None:
            text = "-"
        else:
            text = str(value)
        print(f"{key.ljust(width)}  {text}")
