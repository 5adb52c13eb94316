# src/dcsim_core/simulation/execution.py
"""
Provides the primary public API for running DC analyses.

This module is a thin Facade over the pipeline stages:

    build_netlist -> assemble -> solve_node_voltages -> compute_component_results

`simulate()` is a pure function: it returns a `SimulationSuccess` or a
`SimulationFailure` and never raises for a topological or numerical problem in
the circuit. `CircuitAnalyzer` is the stateful wrapper an editor holds on to; it
remembers the last successful result so the validation and report views can be
refreshed without re-running the analysis.
"""
import logging
from typing import Optional, Sequence

from ..analysis import TopologyAnalyzer, format_report
from ..data_structures import ComponentDescriptor, WireSegment
from ..errors import FailureKind
from ..netlist import Netlist, TopologyError, build_netlist
from ..validation import ResultValidator, ValidationReport
from .config import SimulationConfig
from .exceptions import SingularSystemError
from .mna import assemble
from .postprocess import compute_component_results
from .results import SimulationFailure, SimulationOutcome, SimulationSuccess
from .solver import solve_node_voltages

logger = logging.getLogger(__name__)


def simulate(
    components: Sequence[ComponentDescriptor],
    wires: Sequence[WireSegment],
    config: Optional[SimulationConfig] = None,
) -> SimulationOutcome:
    """
    Runs one DC operating-point analysis.

    Args:
        components: Placed components, ground included.
        wires: Zero-impedance wire segments.
        config: Numerical settings; defaults reproduce the editor's behaviour.

    Returns:
        `SimulationSuccess` with node voltages and per-component results, or
        `SimulationFailure` naming the failure kind and the stage that failed.
    """
    config = config or SimulationConfig()
    logger.info(f"--- Starting DC analysis of {len(components)} component(s) and {len(wires)} wire(s) ---")

    netlist: Optional[Netlist] = None
    try:
        netlist = build_netlist(
            components, wires, tolerance=config.cluster_tolerance, mode=config.clustering_mode
        )
        G, I = assemble(netlist, config.penalty_conductance)
        node_voltages = solve_node_voltages(G, I, config.pivot_threshold)
        results = compute_component_results(netlist, node_voltages, config.penalty_conductance)

    except TopologyError as e:
        logger.warning(f"DC analysis failed: {e}")
        return SimulationFailure(
            kind=e.kind,
            message=e.details,
            stage=e.stage,
            diagnostic_report=e.get_diagnostic_report(),
        )

    except SingularSystemError as e:
        enriched = _describe_floating_nodes(e, netlist)
        logger.warning(f"DC analysis failed: {enriched}")
        return SimulationFailure(
            kind=FailureKind.SINGULAR_SYSTEM,
            message=enriched.details,
            stage="solve",
            diagnostic_report=enriched.get_diagnostic_report(),
        )

    logger.info(f"DC analysis successful: {netlist.node_count} node(s), {len(results)} component result(s).")
    return SimulationSuccess(
        node_voltages=node_voltages,
        per_component_results=tuple(results),
        netlist=netlist,
    )


def _describe_floating_nodes(error: SingularSystemError, netlist: Optional[Netlist]) -> SingularSystemError:
    """Returns a copy of `error` naming the nodes and components without a path to ground."""
    if netlist is None:
        return error
    topology = TopologyAnalyzer(netlist).analyze()
    if topology.is_fully_grounded:
        return error
    components = ", ".join(str(c) for c in topology.floating_components)
    details = f"{error.details} Components without a DC path to ground: {components}."
    return SingularSystemError(
        details=details,
        pivot_index=error.pivot_index,
        floating_nodes=list(topology.floating_nodes),
    )


def validate(last_result: Optional[SimulationOutcome], config: Optional[SimulationConfig] = None) -> ValidationReport:
    """Checks a result for excessive currents and exceeded power ratings. Never mutates it."""
    return ResultValidator(config).validate(last_result)


def report(last_result: Optional[SimulationOutcome], config: Optional[SimulationConfig] = None) -> str:
    """Human-readable summary of node voltages, component results and validation status."""
    return format_report(last_result, validate(last_result, config))


class CircuitAnalyzer:
    """
    Stateful facade for an interactive editor.

    `last_result` holds the most recent successful outcome. A failed run is
    returned to the caller but does not replace it.
    """
    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self._last_result: Optional[SimulationSuccess] = None

    @property
    def last_result(self) -> Optional[SimulationSuccess]:
        return self._last_result

    def simulate(self, components: Sequence[ComponentDescriptor], wires: Sequence[WireSegment]) -> SimulationOutcome:
        outcome = simulate(components, wires, self.config)
        if outcome.success:
            self._last_result = outcome
        return outcome

    def validate(self) -> ValidationReport:
        return validate(self._last_result, self.config)

    def report(self) -> str:
        return report(self._last_result, self.config)

    def reset(self) -> None:
        logger.debug("Clearing last simulation result.")
        self._last_result = None
