"""Helpers for loading scenarios, inlets and coefficient tables from configuration files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import json

from loguru import logger

from .classes_references import InvalidInput
from .models.base import normalize_mapping, optional_float
from .models.geometry import GEOMETRY_TYPES, ConduitGeometry
from .models.inlet import INLET_TYPES, InletGeometry
from .models.scenario import Scenario
from .type_helpers import ConduitShape, InletKind

JSONMapping = Mapping[str, Any]

DEFAULT_MANNING: dict[str, float] = {
    "PVC/Plastic pipe": 0.009,
    "Concrete pipe, good condition": 0.012,
    "Concrete pipe, normal": 0.013,
    "Concrete pipe, rough": 0.015,
    "Corrugated metal pipe": 0.024,
    "Cast iron pipe": 0.013,
    "Steel pipe": 0.012,
    "Concrete, trowel finish": 0.011,
    "Concrete, good condition": 0.012,
    "Concrete, normal": 0.013,
    "Concrete, rough": 0.015,
    "Brick with cement mortar": 0.014,
    "Stone masonry": 0.017,
    "Concrete lined channel": 0.013,
    "Earth channel, clean": 0.022,
    "Earth channel, gravel": 0.025,
    "Earth channel, weeds": 0.030,
    "Natural stream, clean": 0.030,
    "Natural stream, stones": 0.040,
    "Grass-lined channel": 0.035,
    "Rock riprap": 0.033,
}

DEFAULT_ENTRANCE_LOSS: dict[str, float] = {
    "Square edge": 0.5,
    "Rounded edge": 0.2,
    "Grooved end": 0.2,
    "Projecting": 0.9,
    "Wingwalls": 0.4,
}


def _default_manning() -> dict[str, float]:
    return dict(DEFAULT_MANNING)


def _default_entrance_loss() -> dict[str, float]:
    return dict(DEFAULT_ENTRANCE_LOSS)


def _frozen(table: Mapping[str, float]) -> Mapping[str, float]:
    """Return a read-only copy so later edits to `table` cannot reach the lookup."""

    return MappingProxyType(dict(table))


def _key(name: str) -> str:
    return name.strip().casefold()


@dataclass(frozen=True, slots=True)
class CoefficientTable:
    """
    Caller-supplied mapping of material names to Manning's n and of entrance
    descriptions to Ke.

    Lookups match whole keys (case and surrounding whitespace are ignored); the
    calculators themselves only ever receive the resolved numbers.
    """

    manning: Mapping[str, float] = field(default_factory=_default_manning)
    entrance_loss: Mapping[str, float] = field(default_factory=_default_entrance_loss)

    def __post_init__(self) -> None:
        object.__setattr__(self, "manning", _frozen(self.manning))
        object.__setattr__(self, "entrance_loss", _frozen(self.entrance_loss))

    def manning_n(self, material: str) -> float:
        return self._lookup(self.manning, material, "material")

    def entrance_loss_coefficient(self, description: str) -> float:
        return self._lookup(self.entrance_loss, description, "entrance description")

    @staticmethod
    def _lookup(table: Mapping[str, float], name: str, context: str) -> float:
        wanted: str = _key(name)
        for key, value in table.items():
            if _key(key) == wanted:
                return value
        raise InvalidInput(f"Unknown {context} '{name}'.")


DEFAULT_COEFFICIENTS = CoefficientTable()


def load_coefficient_table(path: Path) -> CoefficientTable:
    """Read a JSON file with optional 'manning' and 'entrance_loss' objects."""

    raw_data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, Mapping):
        raise InvalidInput("Top-level JSON document must be an object.")
    return coefficient_table_from_mapping(cast(JSONMapping, raw_data))


def coefficient_table_from_mapping(config: JSONMapping) -> CoefficientTable:
    """Build a CoefficientTable, falling back to the defaults for missing sections."""

    manning: dict[str, float] = _parse_number_table(config.get("manning"), "manning") or _default_manning()
    entrance: dict[str, float] = _parse_number_table(config.get("entrance_loss"), "entrance_loss") or (
        _default_entrance_loss()
    )
    logger.debug(
        "Loaded coefficient table with {materials} materials and {entrances} entrance types",
        materials=len(manning),
        entrances=len(entrance),
    )
    return CoefficientTable(manning=manning, entrance_loss=entrance)


def load_scenario_from_json(path: Path, coefficients: CoefficientTable = DEFAULT_COEFFICIENTS) -> Scenario:
    """Read a JSON file from disk and create a `Scenario`."""

    raw_data: Any = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw_data, Mapping):
        raise InvalidInput("Top-level JSON document must be an object.")
    return scenario_from_mapping(cast(JSONMapping, raw_data), coefficients)


def scenario_from_mapping(config: JSONMapping, coefficients: CoefficientTable = DEFAULT_COEFFICIENTS) -> Scenario:
    """
    Build a Scenario from a parsed configuration mapping.

    Roughness comes from 'roughness' when present, otherwise from 'material'
    resolved through `coefficients`; the entrance loss likewise comes from
    'entrance_loss' or 'entrance'.
    """
    geometry: ConduitGeometry = geometry_from_mapping(normalize_mapping(config.get("geometry")))

    roughness: float | None = optional_float(config, "roughness")
    if roughness is None:
        if "material" not in config:
            raise InvalidInput("Scenario needs either 'roughness' or 'material'.")
        roughness = coefficients.manning_n(str(config["material"]))

    entrance_loss: float | None = optional_float(config, "entrance_loss")
    if entrance_loss is None:
        entrance_loss = coefficients.entrance_loss_coefficient(str(config["entrance"])) if "entrance" in config else 0.5

    if "slope" not in config:
        raise InvalidInput("Missing required field 'slope' in scenario")
    scenario = Scenario(
        name=str(config.get("name", "")),
        geometry=geometry,
        roughness=roughness,
        slope=float(config["slope"]),
        depth=optional_float(config, "depth"),
        target_discharge=optional_float(config, "target_discharge"),
        length=float(config.get("length", 0.0)),
        entrance_loss=entrance_loss,
    )
    scenario.assert_valid()
    return scenario


def geometry_from_mapping(entry: JSONMapping) -> ConduitGeometry:
    """Convert a geometry dictionary (with a 'shape' key) into a geometry variant."""

    shape: ConduitShape = _parse_enum_value(ConduitShape, entry.get("shape"), "conduit shape")
    return GEOMETRY_TYPES[shape].from_dict(entry)


def inlet_from_mapping(entry: JSONMapping) -> InletGeometry:
    """Convert an inlet dictionary (with a 'kind' key) into an inlet variant."""

    kind: InletKind = _parse_enum_value(InletKind, entry.get("kind"), "inlet kind")
    return INLET_TYPES[kind].from_dict(entry)


def _parse_enum_value(enum_cls: Any, value: Any, context: str) -> Any:
    """Coerce a case-insensitive configuration string into a str-valued enum member."""

    if isinstance(value, enum_cls):
        return value
    normalized: str = str(value).strip().lower()
    try:
        return enum_cls(normalized)
    except ValueError as exc:
        raise InvalidInput(f"Unsupported {context} '{value}'") from exc


def _parse_number_table(value: Any, context: str) -> dict[str, float]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidInput(f"'{context}' section must be an object of name -> number.")
    table: dict[str, float] = {}
    for key, number in cast(JSONMapping, value).items():
        try:
            table[str(key)] = float(number)
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"'{context}' entry '{key}' must be a number.") from exc
    return table
