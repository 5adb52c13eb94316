# src/dcsim_core/simulation/__init__.py
from .config import SimulationConfig, parse_simulation_config
from .exceptions import ConfigParsingError, SingularSystemError
from .mna import MnaAssembler, assemble
from .solver import gaussian_elimination, solve, solve_node_voltages
from .postprocess import compute_component_results
from .results import ComponentResult, SimulationFailure, SimulationOutcome, SimulationSuccess
from .execution import CircuitAnalyzer, report, simulate, validate

__all__ = [
    "SimulationConfig",
    "parse_simulation_config",
    "ConfigParsingError",
    "SingularSystemError",
    "MnaAssembler",
    "assemble",
    "gaussian_elimination",
    "solve",
    "solve_node_voltages",
    "compute_component_results",
    "ComponentResult",
    "SimulationFailure",
    "SimulationOutcome",
    "SimulationSuccess",
    "CircuitAnalyzer",
    "report",
    "simulate",
    "validate",
]
