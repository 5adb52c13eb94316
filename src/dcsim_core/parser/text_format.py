# src/dcsim_core/parser/text_format.py
"""
Reader and writer for the schematic editor's line-oriented circuit format.

One element per line, whitespace separated:

    r x1 y1 x2 y2 flags resistance_ohm
    c x1 y1 x2 y2 flags capacitance_pF
    l x1 y1 x2 y2 flags inductance_uH
    v x1 y1 x2 y2 flags voltage_V        (x1, y1) is the positive terminal
    g x y flags
    w x1 y1 x2 y2

Blank lines and lines starting with '#' are ignored. `flags` is an integer kept
for compatibility with the editor; the engine does not interpret it. Component
terminals are placed at the line's endpoints.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..data_structures import ComponentDescriptor, ComponentKind, Point, WireSegment
from ..errors import ComponentError
from .exceptions import ParsingError

logger = logging.getLogger(__name__)

EXAMPLE_CIRCUIT_TEXT = """r 100 100 200 100 0 1000
c 250 100 350 100 0 100
l 400 100 500 100 0 10
v 100 200 100 300 0 5
g 100 350 0
w 200 100 250 100
w 350 100 400 100
w 100 300 100 350"""

# tag -> (kind, scale from file units to SI)
_TWO_TERMINAL_TAGS: Dict[str, Tuple[ComponentKind, float]] = {
    "r": (ComponentKind.RESISTOR, 1.0),
    "c": (ComponentKind.CAPACITOR, 1e-12),
    "l": (ComponentKind.INDUCTOR, 1e-6),
    "v": (ComponentKind.VOLTAGE_SOURCE, 1.0),
}

_ID_PREFIXES: Dict[ComponentKind, str] = {
    ComponentKind.RESISTOR: "R",
    ComponentKind.CAPACITOR: "C",
    ComponentKind.INDUCTOR: "L",
    ComponentKind.VOLTAGE_SOURCE: "V",
    ComponentKind.GROUND: "GND",
}

_FIELD_COUNTS = {"r": 7, "c": 7, "l": 7, "v": 7, "g": 4, "w": 5}


@dataclass
class ParsedCircuit:
    """Components and wires read from one circuit text, in file order."""
    components: List[ComponentDescriptor] = field(default_factory=list)
    wires: List[WireSegment] = field(default_factory=list)


class CircuitTextParser:
    """
    Parses the editor's text format into component descriptors and wires.

    Component ids are generated per kind in order of appearance: R1, R2, C1,
    V1, GND1, ...
    """
    def parse(self, text: str) -> ParsedCircuit:
        """
        Raises:
            ParsingError: On the first malformed or unknown line, with its 1-based
                line number.
        """
        circuit = ParsedCircuit()
        counters: Dict[ComponentKind, int] = defaultdict(int)
        for line_no, line in self._content_lines(text):
            item = self._parse_line(line, line_no, counters)
            if isinstance(item, WireSegment):
                circuit.wires.append(item)
            else:
                circuit.components.append(item)
        logger.info(f"Parsed circuit text: {len(circuit.components)} component(s), {len(circuit.wires)} wire(s).")
        return circuit

    def validate(self, text: str) -> List[str]:
        """Returns one message per bad line ("Line 3: ..."); an empty list means the text parses."""
        errors: List[str] = []
        counters: Dict[ComponentKind, int] = defaultdict(int)
        for line_no, line in self._content_lines(text):
            try:
                self._parse_line(line, line_no, counters)
            except ParsingError as e:
                errors.append(f"Line {line_no}: {e.details}")
        return errors

    @staticmethod
    def _content_lines(text: str):
        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if line and not line.startswith("#"):
                yield line_no, line

    def _parse_line(self, line: str, line_no: int, counters: Dict[ComponentKind, int]):
        parts = line.split()
        tag = parts[0].lower()
        if tag not in _FIELD_COUNTS:
            raise ParsingError(details=f"Unknown element type '{parts[0]}'.", line=line_no)
        if len(parts) < _FIELD_COUNTS[tag]:
            raise ParsingError(
                details=f"Element '{tag}' expects {_FIELD_COUNTS[tag] - 1} fields, got {len(parts) - 1}.",
                line=line_no,
            )

        if tag == "w":
            x1, y1, x2, y2 = self._numbers(parts[1:5], line_no)
            return WireSegment(Point(x1, y1), Point(x2, y2))

        if tag == "g":
            x, y = self._numbers(parts[1:3], line_no)
            self._flags(parts[3], line_no)
            return self._make_component(ComponentKind.GROUND, [Point(x, y)], {}, line_no, counters)

        kind, scale = _TWO_TERMINAL_TAGS[tag]
        x1, y1, x2, y2 = self._numbers(parts[1:5], line_no)
        self._flags(parts[5], line_no)
        (value,) = self._numbers(parts[6:7], line_no)
        parameters = {kind.primary_parameter: value * scale}
        return self._make_component(kind, [Point(x1, y1), Point(x2, y2)], parameters, line_no, counters)

    @staticmethod
    def _make_component(kind, terminals, parameters, line_no, counters) -> ComponentDescriptor:
        counters[kind] += 1
        component_id = f"{_ID_PREFIXES[kind]}{counters[kind]}"
        try:
            return ComponentDescriptor(id=component_id, kind=kind, terminals=tuple(terminals), parameters=parameters)
        except ComponentError as e:
            raise ParsingError(details=str(e), line=line_no) from e

    @staticmethod
    def _numbers(tokens: Sequence[str], line_no: int) -> List[float]:
        try:
            return [float(t) for t in tokens]
        except ValueError as e:
            raise ParsingError(details=f"Expected numeric fields, got {list(tokens)}.", line=line_no) from e

    @staticmethod
    def _flags(token: str, line_no: int) -> int:
        try:
            return int(token)
        except ValueError as e:
            raise ParsingError(details=f"Flags field must be an integer, got '{token}'.", line=line_no) from e


def parse_circuit_text(text: str) -> ParsedCircuit:
    return CircuitTextParser().parse(text)


def generate_circuit_text(
    components: Sequence[ComponentDescriptor],
    wires: Sequence[WireSegment],
) -> str:
    """
    Writes components then wires in the editor's text format. Coordinates are
    rounded to integers; capacitance is written in pF and inductance in uH.
    """
    lines = [_component_line(c) for c in components]
    for wire in wires:
        lines.append(f"w {_coord(wire.start.x)} {_coord(wire.start.y)} {_coord(wire.end.x)} {_coord(wire.end.y)}")
    return "\n".join(lines)


def _component_line(component: ComponentDescriptor) -> str:
    if component.is_ground:
        p = component.terminals[0]
        return f"g {_coord(p.x)} {_coord(p.y)} 0"

    tag = next(t for t, (kind, _) in _TWO_TERMINAL_TAGS.items() if kind is component.kind)
    scale = _TWO_TERMINAL_TAGS[tag][1]
    a, b = component.terminals
    value = component.parameters[component.kind.primary_parameter] / scale
    return f"{tag} {_coord(a.x)} {_coord(a.y)} {_coord(b.x)} {_coord(b.y)} 0 {value:.12g}"


def _coord(value: float) -> int:
    return int(round(value))
