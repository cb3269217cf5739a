"""A conduit calculation request assembled from configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .base import Validatable, check_non_negative, check_positive
from .geometry import ConduitGeometry


@dataclass(frozen=True, slots=True)
class Scenario(Validatable):
    """Conduit geometry plus hydraulic inputs.

    Exactly one of `depth` (forward solve) or `target_discharge` (inverse solve)
    must be supplied.
    """

    name: str
    geometry: ConduitGeometry
    roughness: float
    slope: float
    depth: float | None = None
    target_discharge: float | None = None
    length: float = 0.0
    entrance_loss: float = 0.5

    @property
    def is_inverse(self) -> bool:
        return self.target_discharge is not None

    def describe(self) -> str:
        mode: str = "inverse" if self.is_inverse else "forward"
        return f"Scenario(name={self.name or '<unnamed>'}, {self.geometry.describe()}, mode={mode})"

    def __str__(self) -> str:
        return self.describe()

    def validate(self, prefix: str = "") -> list[str]:
        errors: list[str] = []
        errors.extend(self.geometry.validate(prefix))
        check_positive(errors, self.roughness, "Manning roughness", prefix)
        check_positive(errors, self.slope, "Longitudinal slope", prefix)
        check_non_negative(errors, self.length, "Conduit length", prefix)
        check_non_negative(errors, self.entrance_loss, "Entrance loss coefficient", prefix)
        if (self.depth is None) == (self.target_discharge is None):
            errors.append(f"{prefix}Provide exactly one of 'depth' or 'target_discharge'.")
        if self.depth is not None:
            check_positive(errors, self.depth, "Flow depth", prefix)
        if self.target_discharge is not None and math.isnan(self.target_discharge):
            errors.append(f"{prefix}Target discharge cannot be NaN.")
        return errors
