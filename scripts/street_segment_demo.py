"""Size the inlets for a street segment and write the outfall pipe's rating table."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT: Path = Path(__file__).resolve().parent.parent
SRC_ROOT: Path = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from drainage_hydraulics import (  # noqa: E402
    AreaType,
    Circular,
    CompositeSearch,
    Grate,
    GrateOrientation,
    GutterSection,
    circular_depth_from_q,
    gutter_spread,
    intercept,
    plan_inlet_spacing,
    rating_table,
)
from drainage_hydraulics.units import litres_per_second_to_cms, percent_to_decimal  # noqa: E402

# Hard-coded configuration; edit these to suit each run.
SEGMENT_LENGTH = 180.0
GUTTER_WIDTH = 0.6
GUTTER_SLOPE_PERCENT = 5.0
STREET_SLOPE_PERCENT = 2.0
LONGITUDINAL_SLOPE_PERCENT = 1.0
GUTTER_ROUGHNESS = 0.016
OUTFALL_DIAMETER = 0.6
OUTFALL_ROUGHNESS = 0.013
OUTFALL_SLOPE_PERCENT = 0.5


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gutter spread, inlet spacing and outfall rating for one street.")
    parser.add_argument("--flow", type=float, default=60.0, help="Segment design flow in L/s (default: 60).")
    parser.add_argument(
        "--area-type",
        choices=[member.name.lower() for member in AreaType],
        default="residential",
    )
    parser.add_argument("--rating-csv", type=Path, help="Optional CSV path for the outfall rating table.")
    return parser.parse_args()


def main() -> int:
    args: argparse.Namespace = parse_args()
    discharge: float = litres_per_second_to_cms(args.flow)
    section = GutterSection(
        gutter_width=GUTTER_WIDTH,
        gutter_cross_slope=percent_to_decimal(GUTTER_SLOPE_PERCENT),
        longitudinal_slope=percent_to_decimal(LONGITUDINAL_SLOPE_PERCENT),
        roughness=GUTTER_ROUGHNESS,
        discharge=discharge,
        street_cross_slope=percent_to_decimal(STREET_SLOPE_PERCENT),
    )
    gutter = gutter_spread(section, method=CompositeSearch.BISECTION)
    print(f"Spread {gutter.spread:.2f} m, depth at curb {gutter.depth * 1000:.0f} mm")

    grate = Grate(length=0.9, width=0.6, orientation=GrateOrientation.P_45_45)
    inlet = intercept(grate, gutter, section.longitudinal_slope, clogging_factor=0.8)
    print(f"Grate captures {inlet.efficiency:.1f}% ({inlet.note})")

    plan = plan_inlet_spacing(SEGMENT_LENGTH, discharge, inlet.intercepted_flow, AreaType[args.area_type.upper()])
    print(f"{plan.inlet_count} inlets at {plan.actual_spacing:.1f} m (limit {plan.max_allowed_spacing:.0f} m)")

    outfall = Circular(diameter=OUTFALL_DIAMETER)
    slope: float = percent_to_decimal(OUTFALL_SLOPE_PERCENT)
    solution = circular_depth_from_q(discharge, OUTFALL_DIAMETER, OUTFALL_ROUGHNESS, slope)
    print(f"Outfall runs at y={solution.depth:.3f} m (y/d={solution.depth / OUTFALL_DIAMETER:.2f})")

    table = rating_table(outfall, OUTFALL_ROUGHNESS, slope, steps=20)
    if args.rating_csv is not None:
        table.to_csv(args.rating_csv)
        print(f"Rating table written to {args.rating_csv}")
    else:
        print(table.to_string(float_format=lambda value: f"{value:.4f}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
