# src/dcsim_core/parser/document.py
"""
Loads and saves structured circuit documents (YAML, or JSON for `.json` files).

Document layout:

    components:
      - id: V1
        kind: voltage_source
        terminals: [[0, 0], [0, 100]]
        parameters: {voltage: "9 V"}
      - id: R1
        kind: resistor
        terminals: [[100, 0], [200, 0]]
        parameters: {resistance: "2 kohm", power_rating: 0.25}
      - id: GND1
        kind: ground
        terminals: [[0, 100]]
    wires:
      - {start: [0, 0], end: [100, 0]}
    settings:
      cluster_tolerance: 15
      penalty_conductance: "1000 S"

Parameter values are SI numbers or pint quantity strings; strings are checked
for dimensional compatibility with the parameter they set.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import cerberus
import yaml

from ..data_structures import PARAMETER_UNITS, ComponentDescriptor, ComponentKind, Point, WireSegment
from ..errors import ComponentError
from ..simulation.config import SimulationConfig, parse_simulation_config
from ..simulation.exceptions import ConfigParsingError
from ..units import to_si_magnitude
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)


class EnhancedValidator(cerberus.Validator):
    """Cerberus validator with the circuit document's custom rules."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['component_kind'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_component_kind(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        try:
            ComponentKind.from_string(value)
        except ValueError as e:
            self._error(field, str(e))

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue
            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(set(duplicates), key=str)
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


@dataclass
class LoadedCircuit:
    """Everything a circuit document describes, ready for `simulate()`."""
    components: List[ComponentDescriptor] = field(default_factory=list)
    wires: List[WireSegment] = field(default_factory=list)
    config: SimulationConfig = field(default_factory=SimulationConfig)


class CircuitDocumentLoader:
    """
    Validates a circuit document against a strict schema and builds descriptors.
    """
    _point_schema = {"type": "list", "minlength": 2, "maxlength": 2, "schema": {"type": "number"}}
    _quantity_rule = {"type": ["string", "number"]}

    _component_schema = {
        "id": {"type": ["string", "integer"], "required": True, "empty": False},
        "kind": {"type": "string", "required": True, "component_kind": True},
        "terminals": {"type": "list", "required": True, "minlength": 1, "maxlength": 2, "schema": _point_schema},
        "parameters": {
            "type": "dict", "required": False,
            "keysrules": {"type": "string", "allowed": sorted(PARAMETER_UNITS)},
            "valuesrules": _quantity_rule,
        },
    }

    _schema = {
        "components": {
            "type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "id",
            "schema": {"type": "dict", "schema": _component_schema},
        },
        "wires": {
            "type": "list", "required": False,
            "schema": {"type": "dict", "schema": {
                "start": dict(_point_schema, required=True),
                "end": dict(_point_schema, required=True),
            }},
        },
        "settings": {"type": "dict", "required": False, "valuesrules": _quantity_rule},
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False

    def load(self, path: Union[str, Path]) -> LoadedCircuit:
        source = Path(path).resolve()
        logger.info(f"Loading circuit document: {source}")
        content = self._load_yaml(source)
        return self._build(content, source)

    def load_string(self, text: str) -> LoadedCircuit:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}") from e
        self._check_root(content, None)
        return self._build(content, None)

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML or JSON file."""
        if not source.is_file():
            raise ParsingError(details=f"Circuit file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                # PyYAML resolves YAML 1.1 scalars, which reads JSON's "1e-10" as a string.
                content = json.load(f) if source.suffix.lower() == ".json" else yaml.safe_load(f)
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except json.JSONDecodeError as e:
            raise ParsingError(details=f"Invalid JSON syntax: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        self._check_root(content, source)
        return content

    @staticmethod
    def _check_root(content: Any, source: Optional[Path]) -> None:
        if content is None:
            raise ParsingError(details="The document is empty or contains no valid content.", file_path=source)
        if not isinstance(content, dict):
            raise ParsingError(details="The root of the document must be a mapping.", file_path=source)

    def _build(self, content: Dict[str, Any], source: Optional[Path]) -> LoadedCircuit:
        if not self._validator.validate(content):
            raise SchemaValidationError(self._validator.errors, source)
        document = self._validator.document

        components = [self._build_component(raw, source) for raw in document["components"]]
        wires = [WireSegment(Point(*w["start"]), Point(*w["end"])) for w in document.get("wires", [])]
        try:
            config = parse_simulation_config(document.get("settings"))
        except ConfigParsingError as e:
            raise ParsingError(details=str(e), file_path=source) from e

        logger.info(f"Loaded {len(components)} component(s) and {len(wires)} wire(s).")
        return LoadedCircuit(components=components, wires=wires, config=config)

    @staticmethod
    def _build_component(raw: Dict[str, Any], source: Optional[Path]) -> ComponentDescriptor:
        comp_id = raw["id"]
        parameters: Dict[str, float] = {}
        for name, value in raw.get("parameters", {}).items():
            try:
                parameters[name] = to_si_magnitude(value, PARAMETER_UNITS[name])
            except ValueError as e:
                raise ParsingError(
                    details=f"Component '{comp_id}' parameter '{name}': {e}", file_path=source
                ) from e
        try:
            return ComponentDescriptor(
                id=comp_id,
                kind=raw["kind"],
                terminals=tuple(Point(*t) for t in raw["terminals"]),
                parameters=parameters,
            )
        except ComponentError as e:
            raise ParsingError(details=str(e), file_path=source) from e


def dump_circuit_document(
    components: Sequence[ComponentDescriptor],
    wires: Sequence[WireSegment],
    config: Optional[SimulationConfig] = None,
) -> Dict[str, Any]:
    """Builds the plain-data document for a circuit; the inverse of `CircuitDocumentLoader`."""
    document: Dict[str, Any] = {
        "components": [c.to_dict() for c in components],
        "wires": [w.to_dict() for w in wires],
    }
    if config is not None:
        document["settings"] = config.to_dict()
    return document


def save_circuit_document(
    path: Union[str, Path],
    components: Sequence[ComponentDescriptor],
    wires: Sequence[WireSegment],
    config: Optional[SimulationConfig] = None,
) -> Path:
    """Writes YAML, or JSON when the file suffix is `.json`."""
    target = Path(path)
    document = dump_circuit_document(components, wires, config)
    with target.open("w", encoding="utf-8") as f:
        if target.suffix.lower() == ".json":
            json.dump(document, f, indent=2)
        else:
            yaml.safe_dump(document, f, sort_keys=False)
    logger.info(f"Saved circuit document with {len(components)} component(s) to {target}")
    return target


def load_circuit_document(path: Union[str, Path]) -> LoadedCircuit:
    return CircuitDocumentLoader().load(path)
