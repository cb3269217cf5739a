"""Storm-drain inlet geometry variants and interception results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Union
from _collections_abc import Mapping

from .base import Validatable, check_non_negative, check_positive, normalize_mapping, optional_float
from ..classes_references import InvalidGeometry, InvalidInput
from ..type_helpers import AreaType, CurbOpeningKind, GrateOrientation, InletKind, SagRegime, coerce_enum


@dataclass(frozen=True, slots=True)
class Grate(Validatable):
    """On-grade grate inlet of `length` along the flow and `width` across it (m)."""

    kind: ClassVar[InletKind] = InletKind.GRATE
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    length: float
    width: float
    orientation: GrateOrientation = GrateOrientation.P_45_45

    def describe(self) -> str:
        return f"Grate(length={self.length:.3f}, width={self.width:.3f}, orientation={self.orientation.name})"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "length": self.length, "width": self.width, "orientation": self.orientation.name}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Grate":
        return cls(
            length=float(data.get("length", 0.0)),
            width=float(data.get("width", 0.0)),
            orientation=coerce_enum(GrateOrientation, data.get("orientation"), default=GrateOrientation.P_45_45),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.length, "Grate length", prefix)
        check_positive(errors, self.width, "Grate width", prefix)
        return errors


@dataclass(frozen=True, slots=True)
class Curb(Validatable):
    """Curb-opening inlet; `depression` (m) only applies to depressed openings."""

    kind: ClassVar[InletKind] = InletKind.CURB
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    length: float
    height: float
    opening_kind: CurbOpeningKind = CurbOpeningKind.HORIZONTAL
    depression: float = 0.0

    def describe(self) -> str:
        return f"Curb(length={self.length:.3f}, height={self.height:.3f}, opening={self.opening_kind.value})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "length": self.length,
            "height": self.height,
            "opening_kind": self.opening_kind.value,
            "depression": self.depression,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Curb":
        return cls(
            length=float(data.get("length", 0.0)),
            height=float(data.get("height", 0.0)),
            opening_kind=coerce_enum(CurbOpeningKind, data.get("opening_kind"), default=CurbOpeningKind.HORIZONTAL),
            depression=float(data.get("depression", 0.0)),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.length, "Curb opening length", prefix)
        check_positive(errors, self.height, "Curb opening height", prefix)
        check_non_negative(errors, self.depression, "Curb depression", prefix)
        return errors


@dataclass(frozen=True, slots=True)
class Combination(Validatable):
    """Grate with an adjacent curb opening that receives the grate's bypass."""

    kind: ClassVar[InletKind] = InletKind.COMBINATION
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    grate: Grate
    curb: Curb

    def describe(self) -> str:
        return f"Combination({self.grate.describe()}, {self.curb.describe()})"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "grate": self.grate.to_dict(), "curb": self.curb.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Combination":
        return cls(
            grate=Grate.from_dict(normalize_mapping(data.get("grate"))),
            curb=Curb.from_dict(normalize_mapping(data.get("curb"))),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        errors.extend(self.grate.validate(f"{prefix}Grate: "))
        errors.extend(self.curb.validate(f"{prefix}Curb: "))
        return errors


@dataclass(frozen=True, slots=True)
class Sag(Validatable):
    """Inlet at a low point; `perimeter` defaults to the grate outline 2·(L + W)."""

    kind: ClassVar[InletKind] = InletKind.SAG
    error_type: ClassVar[type[InvalidInput]] = InvalidGeometry
    length: float
    width: float
    perimeter: float | None = None

    @property
    def weir_perimeter(self) -> float:
        if self.perimeter is not None:
            return self.perimeter
        return 2.0 * (self.length + self.width)

    @property
    def opening_area(self) -> float:
        return self.length * self.width

    def describe(self) -> str:
        return f"Sag(length={self.length:.3f}, width={self.width:.3f}, perimeter={self.weir_perimeter:.3f})"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "length": self.length, "width": self.width, "perimeter": self.perimeter}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sag":
        return cls(
            length=float(data.get("length", 0.0)),
            width=float(data.get("width", 0.0)),
            perimeter=optional_float(data, "perimeter"),
        )

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        check_positive(errors, self.length, "Sag inlet length", prefix)
        check_positive(errors, self.width, "Sag inlet width", prefix)
        if self.perimeter is not None:
            check_positive(errors, self.perimeter, "Sag inlet perimeter", prefix)
        return errors


InletGeometry = Union[Grate, Curb, Combination, Sag]

INLET_TYPES: dict[InletKind, type[Grate] | type[Curb] | type[Combination] | type[Sag]] = {
    InletKind.GRATE: Grate,
    InletKind.CURB: Curb,
    InletKind.COMBINATION: Combination,
    InletKind.SAG: Sag,
}


@dataclass(frozen=True, slots=True)
class InletResult:
    """Interception performance of an inlet.

    Flows are in m³/s, `efficiency` in percent and spacings in metres. Spacing is
    None for sag inlets, which sit at a low point rather than along a grade.
    `required_length` is set for curb openings and `controlling_regime` for sag inlets.
    """

    kind: InletKind
    length: float
    width: float
    approach_flow: float
    approach_depth: float
    approach_velocity: float
    intercepted_flow: float
    bypass_flow: float
    efficiency: float
    recommended_spacing: float | None
    max_spacing: float | None
    is_clogging_risk: bool
    note: str
    required_length: float | None = None
    controlling_regime: SagRegime | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = asdict(self)
        data["kind"] = self.kind.value
        data["controlling_regime"] = self.controlling_regime.value if self.controlling_regime else None
        return data


@dataclass(frozen=True, slots=True)
class SpacingPlan:
    """Number and spacing of inlets along a street segment."""

    segment_length: float
    inlet_count: int
    actual_spacing: float
    max_allowed_spacing: float
    area_type: AreaType

    @property
    def within_limit(self) -> bool:
        return self.actual_spacing <= self.max_allowed_spacing
