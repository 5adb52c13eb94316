# src/dcsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("DCSim Core package initialized.")

from .units import ureg, Quantity
from .data_structures import ComponentDescriptor, ComponentKind, Point, WireSegment
from .geometry import ClusteringMode
from .netlist import Netlist, build_netlist
from .simulation import (
    CircuitAnalyzer,
    SimulationConfig,
    SimulationFailure,
    SimulationSuccess,
    parse_simulation_config,
    report,
    simulate,
    validate,
)
from .parser import CircuitDocumentLoader, CircuitTextParser, generate_circuit_text
from .circuit_loader import load_circuit
from .errors import DCSimError, CircuitLoadError, SimulationRunError, FailureKind

__all__ = [
    # Units
    "ureg", "Quantity",
    # Data Structures
    "ComponentDescriptor", "ComponentKind", "Point", "WireSegment",
    # Netlist
    "ClusteringMode", "Netlist", "build_netlist",
    # Simulation
    "CircuitAnalyzer", "SimulationConfig", "SimulationFailure", "SimulationSuccess",
    "parse_simulation_config", "report", "simulate", "validate",
    # Parsers
    "CircuitDocumentLoader", "CircuitTextParser", "generate_circuit_text", "load_circuit",
    # Top-Level Errors (Actionable Diagnostics)
    "DCSimError", "CircuitLoadError", "SimulationRunError", "FailureKind",
]
