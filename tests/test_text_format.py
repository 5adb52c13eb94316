# tests/test_text_format.py
import pytest

from dcsim_core.data_structures import ComponentKind, Point
from dcsim_core.errors import FailureKind
from dcsim_core.parser import (
    EXAMPLE_CIRCUIT_TEXT,
    CircuitTextParser,
    ParsingError,
    generate_circuit_text,
    parse_circuit_text,
)
from dcsim_core.simulation import simulate
from tests.conftest import divider

DIVIDER_TEXT = """\
# 9 V divider
v 0 0 0 100 0 9
r 100 0 200 0 0 2000
r 200 0 200 100 0 1000
g 0 100 0

w 0 0 100 0
w 200 100 0 100
"""


class TestCircuitTextParser:

    def test_example_circuit(self):
        circuit = CircuitTextParser().parse(EXAMPLE_CIRCUIT_TEXT)
        assert [c.id for c in circuit.components] == ["R1", "C1", "L1", "V1", "GND1"]
        assert len(circuit.wires) == 3

    def test_value_units(self):
        by_id = {c.id: c for c in parse_circuit_text(EXAMPLE_CIRCUIT_TEXT).components}
        assert by_id["R1"].parameters["resistance"] == 1000.0
        assert by_id["C1"].parameters["capacitance"] == pytest.approx(100e-12)
        assert by_id["L1"].parameters["inductance"] == pytest.approx(10e-6)
        assert by_id["V1"].parameters["voltage"] == 5.0

    def test_terminals_are_line_endpoints(self):
        by_id = {c.id: c for c in parse_circuit_text(EXAMPLE_CIRCUIT_TEXT).components}
        assert by_id["V1"].terminals == (Point(100, 200), Point(100, 300))
        assert by_id["GND1"].kind is ComponentKind.GROUND
        assert by_id["GND1"].terminals == (Point(100, 350),)

    def test_ids_count_per_kind(self):
        circuit = parse_circuit_text("r 0 0 1 0 0 10\nR 0 5 1 5 0 20\ng 0 0 0\ng 9 9 0")
        assert [c.id for c in circuit.components] == ["R1", "R2", "GND1", "GND2"]

    def test_parsed_divider_simulates(self):
        outcome = simulate(*_as_args(parse_circuit_text(DIVIDER_TEXT)))
        assert outcome.success
        assert outcome.node_voltages[2] == pytest.approx(3.0, rel=1e-4)

    def test_example_circuit_has_no_dc_path(self):
        outcome = simulate(*_as_args(parse_circuit_text(EXAMPLE_CIRCUIT_TEXT)))
        assert outcome.kind is FailureKind.SINGULAR_SYSTEM
        assert "R1, C1, L1" in outcome.message

    @pytest.mark.parametrize("text, line, fragment", [
        ("r 0 0 10 0", 1, "expects 6 fields"),
        ("g 0 0 0\nq 1 2 3", 2, "Unknown element type 'q'"),
        ("r 0 0 10 0 0 abc", 1, "numeric"),
        ("\n\nv 0 0 0 10 x 5", 3, "Flags"),
        ("r 0 0 10 0 0 -5", 1, "Resistance must be positive"),
    ])
    def test_errors_carry_line_numbers(self, text, line, fragment):
        with pytest.raises(ParsingError) as excinfo:
            parse_circuit_text(text)
        assert excinfo.value.line == line
        assert fragment in excinfo.value.details

    def test_validate_collects_every_error(self):
        text = "r 0 0 10\nq 1 2\n\n# comment\nv 0 0 0 10 x 5\ng 0 0 0"
        errors = CircuitTextParser().validate(text)
        assert len(errors) == 3
        assert [e.split(":")[0] for e in errors] == ["Line 1", "Line 2", "Line 5"]

    def test_validate_clean_text(self):
        assert CircuitTextParser().validate(EXAMPLE_CIRCUIT_TEXT) == []


class TestGenerateCircuitText:

    def test_example_round_trip(self):
        circuit = parse_circuit_text(EXAMPLE_CIRCUIT_TEXT)
        assert generate_circuit_text(circuit.components, circuit.wires) == EXAMPLE_CIRCUIT_TEXT

    def test_coordinates_are_rounded(self):
        components, wires = divider()
        text = generate_circuit_text(components, wires)
        assert text.splitlines()[0] == "v 0 0 0 100 0 9"
        assert "g 0 100 0" in text
        assert text.splitlines()[-1] == "w 200 100 0 100"

    def test_generated_text_simulates_like_the_source(self):
        components, wires = divider()
        reparsed = parse_circuit_text(generate_circuit_text(components, wires))
        original = simulate(components, wires)
        again = simulate(reparsed.components, reparsed.wires)
        assert again.node_voltages == original.node_voltages


def _as_args(parsed):
    return parsed.components, parsed.wires
