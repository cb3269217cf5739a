"""Section properties of the three conduit shapes."""

from __future__ import annotations

import math

import pytest

from drainage_hydraulics import Box, Circular, InvalidGeometry, InvalidInput, Trapezoidal
from drainage_hydraulics.geometry import central_angle, full_section, max_depth, section_properties
from drainage_hydraulics.models import FullSection, SectionProperties

from .sample_data import sample_box, sample_channel, sample_pipe


def test_half_full_pipe_is_exact() -> None:
    pipe: Circular = sample_pipe()
    props: SectionProperties = section_properties(pipe, 0.5)
    full = full_section(pipe)
    assert full is not None

    assert central_angle(1.0, 0.5) == math.pi
    assert props.area == full.area / 2.0
    assert props.wetted_perimeter == pytest.approx(math.pi / 2.0)
    assert props.hydraulic_radius == 0.25
    assert props.top_width == pytest.approx(1.0)


def test_pipe_area_and_perimeter_increase_with_depth() -> None:
    pipe: Circular = Circular(diameter=1.2)
    depths: list[float] = [1.2 * i / 40 for i in range(1, 40)]
    props: list[SectionProperties] = [section_properties(pipe, depth) for depth in depths]
    for lower, upper in zip(props, props[1:]):
        assert upper.area > lower.area
        assert upper.wetted_perimeter > lower.wetted_perimeter


def test_full_pipe_has_no_free_surface() -> None:
    props: SectionProperties = section_properties(sample_pipe(), 1.0)
    assert props.top_width == 0.0
    assert props.area == pytest.approx(math.pi / 4.0)
    assert props.hydraulic_radius == pytest.approx(0.25)


def test_box_properties() -> None:
    props: SectionProperties = section_properties(sample_box(), 1.0)
    assert props.area == 2.0
    assert props.wetted_perimeter == 4.0
    assert props.hydraulic_radius == 0.5
    assert props.top_width == 2.0

    full = full_section(sample_box())
    assert full == FullSection(area=4.0, hydraulic_radius=4.0 / 6.0)


def test_trapezoid_properties() -> None:
    props: SectionProperties = section_properties(sample_channel(), 1.0)
    assert props.area == pytest.approx(3.0)
    assert props.top_width == pytest.approx(4.0)
    assert props.wetted_perimeter == pytest.approx(2.0 + 2.0 * math.sqrt(2.0))
    assert props.hydraulic_radius == pytest.approx(0.6213, abs=1e-4)


def test_rectangular_channel_is_a_zero_slope_trapezoid() -> None:
    props: SectionProperties = section_properties(Trapezoidal(bottom_width=2.0), 1.0)
    box_props: SectionProperties = section_properties(Box(width=2.0, height=5.0), 1.0)
    assert props.area == box_props.area
    assert props.wetted_perimeter == box_props.wetted_perimeter


def test_open_channel_has_no_full_state() -> None:
    assert full_section(sample_channel()) is None
    assert max_depth(sample_channel()) is None
    assert max_depth(sample_box()) == 2.0
    # Open channels are unbounded above.
    assert section_properties(sample_channel(), 25.0).area > 0


@pytest.mark.parametrize(
    ("geometry", "depth"),
    [
        (Circular(diameter=1.0), 0.0),
        (Circular(diameter=1.0), -0.1),
        (Circular(diameter=1.0), 1.01),
        (Box(width=2.0, height=1.0), 1.5),
        (Trapezoidal(bottom_width=2.0, side_slope=1.0), 0.0),
        (Circular(diameter=1.0), float("nan")),
    ],
)
def test_depth_outside_domain_is_rejected(geometry, depth: float) -> None:
    with pytest.raises(InvalidGeometry):
        section_properties(geometry, depth)


def test_bad_dimensions_are_rejected() -> None:
    with pytest.raises(InvalidGeometry, match="Box width"):
        section_properties(Box(width=0.0, height=1.0), 0.5)
    with pytest.raises(InvalidGeometry, match="side slope"):
        section_properties(Trapezoidal(bottom_width=2.0, side_slope=-1.0), 0.5)
    # Every geometry error is an input error.
    with pytest.raises(InvalidInput):
        section_properties(Circular(diameter=-1.0), 0.5)


def test_validate_collects_every_error() -> None:
    errors: list[str] = Box(width=0.0, height=-1.0).validate("Culvert: ")
    assert len(errors) == 2
    assert all(message.startswith("Culvert: ") for message in errors)
