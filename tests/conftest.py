# tests/conftest.py
import pytest

from dcsim_core.data_structures import ComponentDescriptor, ComponentKind, Point, WireSegment
from dcsim_core.simulation import CircuitAnalyzer, SimulationConfig


# --- Component helpers ---

def resistor(comp_id, a, b, ohms=1000.0, **extra) -> ComponentDescriptor:
    return ComponentDescriptor(comp_id, ComponentKind.RESISTOR, (a, b), {"resistance": ohms, **extra})


def capacitor(comp_id, a, b, farads=1e-6) -> ComponentDescriptor:
    return ComponentDescriptor(comp_id, ComponentKind.CAPACITOR, (a, b), {"capacitance": farads})


def inductor(comp_id, a, b, henries=1e-3) -> ComponentDescriptor:
    return ComponentDescriptor(comp_id, ComponentKind.INDUCTOR, (a, b), {"inductance": henries})


def voltage_source(comp_id, positive, negative, volts=5.0) -> ComponentDescriptor:
    return ComponentDescriptor(comp_id, ComponentKind.VOLTAGE_SOURCE, (positive, negative), {"voltage": volts})


def ground(comp_id, at) -> ComponentDescriptor:
    return ComponentDescriptor(comp_id, ComponentKind.GROUND, (at,))


def wire(start, end) -> WireSegment:
    return WireSegment(Point(*start), Point(*end))


def divider(volts=9.0, r_top=2000.0, r_bottom=1000.0):
    """
    V1 (+ at (0,0), - at (0,100)) drives R1 (top) in series with R2 (bottom).

    Nodes: 1 = V1+ / R1 input, 2 = R1/R2 junction, 0 = ground.
    """
    components = [
        voltage_source("V1", (0, 0), (0, 100), volts),
        resistor("R1", (100, 0), (200, 0), r_top),
        resistor("R2", (200, 0), (200, 100), r_bottom),
        ground("GND1", (0, 100)),
    ]
    wires = [wire((0, 0), (100, 0)), wire((200, 100), (0, 100))]
    return components, wires


def parallel(volts=5.0, r_a=1000.0, r_b=2000.0):
    """V1 across R1 and R2 in parallel."""
    components = [
        voltage_source("V1", (0, 0), (0, 100), volts),
        resistor("R1", (100, 0), (100, 100), r_a),
        resistor("R2", (200, 0), (200, 100), r_b),
        ground("GND1", (0, 100)),
    ]
    wires = [
        wire((0, 0), (100, 0)),
        wire((100, 0), (200, 0)),
        wire((0, 100), (100, 100)),
        wire((100, 100), (200, 100)),
    ]
    return components, wires


def series_inductor(volts=5.0, ohms=1000.0):
    """V1 -> L1 -> R1 -> ground."""
    components = [
        voltage_source("V1", (0, 0), (0, 100), volts),
        inductor("L1", (100, 0), (200, 0)),
        resistor("R1", (200, 0), (200, 100), ohms),
        ground("GND1", (0, 100)),
    ]
    wires = [wire((0, 0), (100, 0)), wire((200, 100), (0, 100))]
    return components, wires


# --- Fixtures ---

@pytest.fixture
def divider_circuit():
    return divider()


@pytest.fixture
def parallel_circuit():
    return parallel()


@pytest.fixture
def floating_resistor_circuit():
    components, wires = divider()
    components.append(resistor("R3", (500, 500), (600, 500), 470.0))
    return components, wires


@pytest.fixture
def analyzer():
    return CircuitAnalyzer(SimulationConfig())
