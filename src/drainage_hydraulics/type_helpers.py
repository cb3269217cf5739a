"""Enums and enum helpers shared between the drainage-hydraulics models."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

TEnum = TypeVar("TEnum", bound=Enum)


def coerce_enum(enum_cls: type[TEnum], value: Any, *, default: TEnum) -> TEnum:
    """Return enum member from the provided value, accepting names/values."""

    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized: str = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return enum_cls[normalized]
        except KeyError:
            pass
    return enum_cls(value)


class ConduitShape(str, Enum):
    """Cross-section shapes handled by the uniform-flow calculators."""

    CIRCULAR = "circular"
    BOX = "box"
    TRAPEZOIDAL = "trapezoidal"

    @property
    def is_closed(self) -> bool:
        return self is not ConduitShape.TRAPEZOIDAL


class FlowRegime(str, Enum):
    """Froude-number classification of a flow state."""

    SUBCRITICAL = "subcritical"
    CRITICAL = "critical"
    SUPERCRITICAL = "supercritical"
    UNDEFINED = "undefined"


class _CoefficientEnum(Enum):
    """Base class for enums that carry an empirical coefficient and a label."""

    def __init__(self, label: str, coefficient: float) -> None:
        self.label: str = label
        self.coefficient: float = coefficient


class GrateOrientation(_CoefficientEnum):
    """Grate bar orientation; the coefficient scales the splash-over velocity."""

    PARALLEL = ("Bars parallel to flow", 0.295)
    PERPENDICULAR = ("Bars perpendicular to flow", 0.540)
    P_45_45 = ("45-45 bars (P-50 x 50)", 0.425)


class CurbOpeningKind(str, Enum):
    """Curb-opening throat configurations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DEPRESSED = "depressed"


class InletKind(str, Enum):
    """Storm-drain inlet categories."""

    GRATE = "grate"
    CURB = "curb"
    COMBINATION = "combination"
    SAG = "sag"


class SagRegime(str, Enum):
    """Controlling hydraulic regime of a sag inlet."""

    WEIR = "weir"
    ORIFICE = "orifice"


class CompositeSearch(str, Enum):
    """Spread search strategy for the composite gutter section."""

    FIXED_STEP = "fixed-step"
    BISECTION = "bisection"


class AreaType(_CoefficientEnum):
    """Land-use categories with their maximum allowable inlet spacing (m)."""

    RESIDENTIAL = ("Residential", 45.0)
    COMMERCIAL = ("Commercial", 25.0)
    INDUSTRIAL = ("Industrial", 35.0)
    DEFAULT = ("Default", 50.0)
