"""Shared base helpers for the drainage-hydraulics value objects."""

from __future__ import annotations

import math
from abc import abstractmethod
from typing import Any, ClassVar, Mapping, cast
from _collections_abc import Mapping as ABCMapping

from loguru import logger

from ..classes_references import InvalidInput


class Validatable:
    """
    A mixin class that provides a validation interface for value objects.

    Classes that inherit from `Validatable` must implement the `validate` method.
    This mixin supplies the `assert_valid` helper, which invokes `validate` and
    raises `error_type` (an `InvalidInput` subclass) if any errors are found.
    """

    error_type: ClassVar[type[InvalidInput]] = InvalidInput

    def assert_valid(self, prefix: str = "") -> None:
        """
        Raise `error_type` if the value object is invalid.

        Args:
            prefix: An optional string to prepend to each validation error message.
        """
        errors: list[str] = self.validate(prefix=prefix)
        if errors:
            logger.debug("Validation failed for {model}: {errors}", model=self.__class__.__name__, errors=errors)
            raise self.error_type(errors)
        logger.debug("Validation succeeded for {model}.", model=self.__class__.__name__)

    @abstractmethod
    def validate(self, prefix: str = "") -> list[str]:
        """
        Return a list of validation errors, or an empty list if the object is valid.

        Args:
            prefix: A string to prepend to each validation error message for context.
        """
        pass


def check_positive(errors: list[str], value: float, label: str, prefix: str = "") -> None:
    """Append an error when `value` is not a finite number greater than zero."""

    if not math.isfinite(value) or value <= 0:
        errors.append(f"{prefix}{label} must be greater than zero (got {value}).")


def check_non_negative(errors: list[str], value: float, label: str, prefix: str = "") -> None:
    """Append an error when `value` is not a finite number greater than or equal to zero."""

    if not math.isfinite(value) or value < 0:
        errors.append(f"{prefix}{label} must be >= 0 (got {value}).")


def normalize_mapping(value: Any) -> Mapping[str, Any]:
    """Return a mapping or an empty dict if the value is not mapping-like."""

    if isinstance(value, ABCMapping):
        return cast(Mapping[str, Any], value)
    return {}


def optional_float(data: Mapping[str, Any], key: str) -> float | None:
    """Return `data[key]` as a float, or None when it is missing or null."""

    value: Any = data.get(key)
    if value is None:
        return None
    return float(value)
