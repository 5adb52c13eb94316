# src/dcsim_core/simulation/results.py
"""
Defines the formal, immutable data contracts for simulation outcomes.

`simulate()` returns exactly one of `SimulationSuccess` or `SimulationFailure`.
Both carry a `success` flag so callers can branch without isinstance checks, and
both are frozen so a cached "last result" cannot be modified by downstream code.
"""
from dataclasses import dataclass
from typing import Hashable, Optional, Tuple, Union

from ..data_structures import ComponentKind
from ..errors import FailureKind, SimulationRunError
from ..netlist import Netlist


@dataclass(frozen=True)
class ComponentResult:
    """Voltage across, current through and power dissipated by one component."""
    component_id: Hashable
    kind: ComponentKind
    node_ids: Tuple[int, ...]
    voltage: float
    current: float
    power: float


@dataclass(frozen=True)
class SimulationSuccess:
    """
    The result of a completed run.

    Attributes:
        node_voltages: Voltages indexed by node id; index 0 is ground and is exactly 0.0.
        per_component_results: One entry per non-ground component, in input order.
        netlist: The netlist the system was assembled from.
    """
    node_voltages: Tuple[float, ...]
    per_component_results: Tuple[ComponentResult, ...]
    netlist: Netlist

    success = True

    def result_for(self, component_id: Hashable) -> Optional[ComponentResult]:
        for result in self.per_component_results:
            if result.component_id == component_id:
                return result
        return None

    def raise_for_failure(self) -> "SimulationSuccess":
        return self


@dataclass(frozen=True)
class SimulationFailure:
    """
    The result of an aborted run. No partial data is kept.

    Attributes:
        kind: Machine-readable failure category.
        message: One-line description.
        stage: Pipeline stage that failed ("netlist", "assembly" or "solve").
        diagnostic_report: Pre-formatted multi-line report suitable for a dialog.
    """
    kind: FailureKind
    message: str
    stage: str
    diagnostic_report: str = ""

    success = False

    def raise_for_failure(self):
        raise SimulationRunError(self.diagnostic_report or self.message)


SimulationOutcome = Union[SimulationSuccess, SimulationFailure]
