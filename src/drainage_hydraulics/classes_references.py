"""Physical constants and the error hierarchy shared across drainage-hydraulics."""
from _collections_abc import Sequence

GRAVITY = 9.81
# Unit weight of water (N/m³) folded into the bed shear constant.
UNIT_WEIGHT_WATER = 9810.0


class InvalidInput(ValueError):
    """Exception raised when caller supplied values fail validation."""

    def __init__(self, errors: Sequence[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors: list[str] = list(errors)
        message: str = "; ".join(self.errors) if self.errors else "Unknown validation error."
        super().__init__(message)


class InvalidGeometry(InvalidInput):
    """A defining dimension is non-positive or the flow depth is outside the shape's domain."""


class InvalidSlope(InvalidInput):
    """Longitudinal slope is zero or adverse."""


class InvalidRoughness(InvalidInput):
    """Manning roughness is zero or negative."""
