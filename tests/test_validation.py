# tests/test_validation.py
import pytest

from dcsim_core.simulation import SimulationConfig, simulate, validate
from dcsim_core.validation import ResultValidator, ValidationIssueCode, ValidationIssueLevel
from tests.conftest import ground, resistor, voltage_source, wire


def single_resistor(ohms, **extra):
    components = [
        voltage_source("V1", (0, 0), (0, 100), 5.0),
        resistor("R1", (100, 0), (100, 100), ohms, **extra),
        ground("GND1", (0, 100)),
    ]
    wires = [wire((0, 0), (100, 0)), wire((0, 100), (100, 100))]
    return simulate(components, wires)


class TestResultValidator:

    def test_nominal_circuit_is_valid(self, divider_circuit):
        report = validate(simulate(*divider_circuit))
        assert report.is_valid
        assert report.issues == []
        assert report.messages == []

    def test_not_simulated(self):
        report = validate(None)
        assert not report.is_valid
        assert report.messages == ["Circuit not simulated yet"]
        assert report.issues[0].code == ValidationIssueCode.NOT_SIMULATED.code

    def test_failure_counts_as_not_simulated(self, floating_resistor_circuit):
        report = validate(simulate(*floating_resistor_circuit))
        assert report.messages == ["Circuit not simulated yet"]

    def test_high_current(self):
        outcome = single_resistor(0.1)
        report = validate(outcome)
        (issue,) = report.issues
        assert issue.level is ValidationIssueLevel.WARNING
        assert issue.code == "HIGH_CURRENT"
        assert issue.component_id == "R1"
        assert issue.message.startswith("High current (")
        assert issue.message.endswith("A) in resistor R1")

    def test_power_rating_exceeded(self):
        report = validate(single_resistor(100.0, power_rating=0.125))
        (issue,) = report.issues
        assert issue.code == "POWER_RATING_EXCEEDED"
        assert issue.message.startswith("Power rating exceeded in resistor R1: 0.250W > 0.125W")

    def test_power_rating_read_from_own_element_when_ids_repeat(self):
        components = [
            voltage_source("V1", (0, 0), (0, 100), 5.0),
            resistor("R", (100, 0), (100, 100), 1000.0, power_rating=10.0),
            resistor("R", (200, 0), (200, 100), 100.0, power_rating=0.01),
            ground("GND1", (0, 100)),
        ]
        wires = [
            wire((0, 0), (100, 0)), wire((100, 0), (200, 0)),
            wire((0, 100), (100, 100)), wire((100, 100), (200, 100)),
        ]
        report = validate(simulate(components, wires))
        (issue,) = report.issues
        assert issue.code == "POWER_RATING_EXCEEDED"
        assert issue.details["rating"] == 0.01
        assert issue.details["power"] == pytest.approx(0.25, rel=1e-3)

    def test_power_within_rating(self):
        assert validate(single_resistor(100.0, power_rating=0.5)).is_valid

    def test_threshold_from_config(self):
        outcome = single_resistor(1000.0)
        assert ResultValidator().validate(outcome).is_valid
        strict = ResultValidator(SimulationConfig(high_current_threshold=1e-3))
        assert [i.code for i in strict.validate(outcome).issues] == ["HIGH_CURRENT"]

    def test_validation_leaves_result_untouched(self):
        outcome = single_resistor(0.1)
        before = outcome.per_component_results
        validate(outcome)
        assert outcome.per_component_results is before

    def test_issue_str(self):
        (issue,) = validate(single_resistor(0.1)).issues
        assert str(issue).startswith("[WARNING - HIGH_CURRENT] Component: R1 Message: High current")


class TestIssueCodes:

    def test_missing_template_key_does_not_raise(self):
        message = ValidationIssueCode.HIGH_CURRENT.format_message(component_id="R1")
        assert "Missing key" in message
