# src/dcsim_core/data_structures.py
"""
The caller-facing data model of the engine: points, component descriptors and
wire segments.

These records are what a schematic editor (or one of the loaders in
`dcsim_core.parser`) hands to `simulate()`. They are frozen; the engine keeps
references to them for the duration of a run and never mutates them.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Hashable, Mapping, Tuple

from .constants import (
    DEFAULT_CAPACITANCE_FARADS,
    DEFAULT_INDUCTANCE_HENRIES,
    DEFAULT_RESISTANCE_OHMS,
    DEFAULT_SOURCE_VOLTAGE_VOLTS,
)
from .errors import ComponentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    """A location in design-space coordinates. Only used for proximity tests."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


class ComponentKind(Enum):
    """The closed set of component kinds the DC engine understands."""
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    VOLTAGE_SOURCE = "voltage_source"
    GROUND = "ground"

    def __str__(self):
        return self.value

    @property
    def terminal_count(self) -> int:
        return 1 if self is ComponentKind.GROUND else 2

    @property
    def primary_parameter(self) -> str | None:
        """Name of the parameter that carries the component's value, if any."""
        return _PRIMARY_PARAMETERS.get(self)

    @classmethod
    def from_string(cls, name: str) -> ComponentKind:
        """Resolves a kind from its canonical name or a schematic-editor tag ('r', 'voltage', ...)."""
        key = str(name).strip().lower()
        try:
            return cls(key)
        except ValueError:
            pass
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        raise ValueError(f"Unknown component kind '{name}'. Known kinds: {[k.value for k in cls]}.")


_KIND_ALIASES: Dict[str, ComponentKind] = {
    "r": ComponentKind.RESISTOR,
    "c": ComponentKind.CAPACITOR,
    "l": ComponentKind.INDUCTOR,
    "v": ComponentKind.VOLTAGE_SOURCE,
    "voltage": ComponentKind.VOLTAGE_SOURCE,
    "battery": ComponentKind.VOLTAGE_SOURCE,
    "g": ComponentKind.GROUND,
    "gnd": ComponentKind.GROUND,
}

_PRIMARY_PARAMETERS: Dict[ComponentKind, str] = {
    ComponentKind.RESISTOR: "resistance",
    ComponentKind.CAPACITOR: "capacitance",
    ComponentKind.INDUCTOR: "inductance",
    ComponentKind.VOLTAGE_SOURCE: "voltage",
}

#: SI unit of every known parameter name, used by loaders and reports.
PARAMETER_UNITS: Dict[str, str] = {
    "resistance": "ohm",
    "capacitance": "farad",
    "inductance": "henry",
    "voltage": "volt",
    "power_rating": "watt",
}

_PARAMETER_DEFAULTS: Dict[ComponentKind, Dict[str, float]] = {
    ComponentKind.RESISTOR: {"resistance": DEFAULT_RESISTANCE_OHMS},
    ComponentKind.CAPACITOR: {"capacitance": DEFAULT_CAPACITANCE_FARADS},
    ComponentKind.INDUCTOR: {"inductance": DEFAULT_INDUCTANCE_HENRIES},
    ComponentKind.VOLTAGE_SOURCE: {"voltage": DEFAULT_SOURCE_VOLTAGE_VOLTS},
    ComponentKind.GROUND: {},
}


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    One placed component as seen by the analysis engine.

    Ground has a single terminal (its location); every other kind has exactly two.
    For a voltage source, `terminals[0]` is the positive terminal and `terminals[1]`
    the negative one. `parameters` holds SI floats; a missing primary value falls
    back to the editor default for the kind.
    """
    id: Hashable
    kind: ComponentKind
    terminals: Tuple[Point, ...]
    parameters: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        kind = self.kind
        if not isinstance(kind, ComponentKind):
            try:
                kind = ComponentKind.from_string(kind)
            except ValueError as e:
                raise ComponentError(component_id=self.id, details=str(e)) from e
            object.__setattr__(self, "kind", kind)

        terminals = tuple(p if isinstance(p, Point) else Point(*p) for p in self.terminals)
        if len(terminals) != kind.terminal_count:
            raise ComponentError(
                component_id=self.id,
                details=f"A {kind} must have exactly {kind.terminal_count} terminal(s), got {len(terminals)}."
            )
        object.__setattr__(self, "terminals", terminals)

        params: Dict[str, float] = dict(_PARAMETER_DEFAULTS[kind])
        for name, value in dict(self.parameters).items():
            try:
                params[name] = float(value)
            except (TypeError, ValueError) as e:
                raise ComponentError(
                    component_id=self.id, details=f"Parameter '{name}' must be numeric, got {value!r}."
                ) from e
        self._check_parameters(kind, params)
        object.__setattr__(self, "parameters", MappingProxyType(params))

    def _check_parameters(self, kind: ComponentKind, params: Dict[str, float]) -> None:
        for name, value in params.items():
            if math.isnan(value):
                raise ComponentError(component_id=self.id, details=f"Parameter '{name}' is NaN.")
        if kind is ComponentKind.RESISTOR:
            resistance = params["resistance"]
            if resistance <= 0 or math.isinf(resistance):
                raise ComponentError(
                    component_id=self.id,
                    details=f"Resistance must be positive and finite, got {resistance!r} ohm."
                )
        if "power_rating" in params and params["power_rating"] <= 0:
            raise ComponentError(
                component_id=self.id,
                details=f"Power rating must be positive, got {params['power_rating']!r} W."
            )
        if kind is ComponentKind.VOLTAGE_SOURCE and math.isinf(params["voltage"]):
            raise ComponentError(component_id=self.id, details="Source voltage must be finite.")

    @property
    def is_ground(self) -> bool:
        return self.kind is ComponentKind.GROUND

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "terminals": [[p.x, p.y] for p in self.terminals],
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class WireSegment:
    """A zero-impedance connection between two locations. Only merges nodes."""
    start: Point
    end: Point

    def __post_init__(self):
        if not isinstance(self.start, Point):
            object.__setattr__(self, "start", Point(*self.start))
        if not isinstance(self.end, Point):
            object.__setattr__(self, "end", Point(*self.end))

    def to_dict(self) -> Dict[str, Any]:
        return {"start": [self.start.x, self.start.y], "end": [self.end.x, self.end.y]}
