"""Cross-section geometry variants for the uniform-flow calculators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union
from _collections_abc import Mapping

from .base import Validatable, check_non_negative, check_positive
from ..classes_references import InvalidGeometry, InvalidInput
from ..type_helpers import ConduitShape


@dataclass(frozen=True, slots=True)
class Circular(Validatable):
    """Circular pipe of internal diameter `diameter` (m)."""

    shape: ClassVar[ConduitShape] = ConduitShape.CIRCULAR
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    diameter: float

    def describe(self) -> str:
        return f"Circular(diameter={self.diameter:.3f})"

    def __str__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {"shape": self.shape.value, "diameter": self.diameter}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Circular":
        return cls(diameter=float(data.get("diameter", 0.0)))

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.diameter, "Pipe diameter", prefix)
        return errors


@dataclass(frozen=True, slots=True)
class Box(Validatable):
    """Rectangular box culvert with span `width` and rise `height` (m)."""

    shape: ClassVar[ConduitShape] = ConduitShape.BOX
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    width: float
    height: float

    def describe(self) -> str:
        return f"Box(width={self.width:.3f}, height={self.height:.3f})"

    def __str__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {"shape": self.shape.value, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Box":
        return cls(width=float(data.get("width", 0.0)), height=float(data.get("height", 0.0)))

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.width, "Box width", prefix)
        check_positive(errors, self.height, "Box height", prefix)
        return errors


@dataclass(frozen=True, slots=True)
class Trapezoidal(Validatable):
    """Open trapezoidal channel; `side_slope` is horizontal run per unit rise (m H : 1 V)."""

    shape: ClassVar[ConduitShape] = ConduitShape.TRAPEZOIDAL
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    bottom_width: float
    side_slope: float = 0.0

    def describe(self) -> str:
        return f"Trapezoidal(bottom_width={self.bottom_width:.3f}, side_slope={self.side_slope:.3f})"

    def __str__(self) -> str:
        return self.describe()

    def to_dict(self) -> dict[str, Any]:
        return {"shape": self.shape.value, "bottom_width": self.bottom_width, "side_slope": self.side_slope}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Trapezoidal":
        return cls(
            bottom_width=float(data.get("bottom_width", 0.0)),
            side_slope=float(data.get("side_slope", 0.0)),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.bottom_width, "Channel bottom width", prefix)
        check_non_negative(errors, self.side_slope, "Channel side slope", prefix)
        return errors


ConduitGeometry = Union[Circular, Box, Trapezoidal]

GEOMETRY_TYPES: dict[ConduitShape, type[Circular] | type[Box] | type[Trapezoidal]] = {
    ConduitShape.CIRCULAR: Circular,
    ConduitShape.BOX: Box,
    ConduitShape.TRAPEZOIDAL: Trapezoidal,
}
