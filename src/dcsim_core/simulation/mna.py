# src/dcsim_core/simulation/mna.py
"""
Assembles the DC nodal system G·v = I from a netlist.

Ground (node 0) is eliminated from the unknowns, so node id k maps to row k-1.
Ideal voltage sources and DC-shorted inductors are represented with a large,
finite penalty conductance instead of auxiliary current unknowns. Node voltages
near a source therefore carry an error of order 1/g_big, and the source current
cannot be recovered from the solution.
"""
import logging
from typing import Optional, Tuple, assert_never

import numpy as np

from ..constants import PENALTY_CONDUCTANCE_SIEMENS
from ..data_structures import ComponentKind
from ..errors import FailureKind, FrameworkLogicError
from ..netlist import GROUND_NODE_ID, Netlist, NetlistElement, TopologyError

logger = logging.getLogger(__name__)


class MnaAssembler:
    """
    Stamps every element of a netlist into a dense conductance matrix and
    current-injection vector.

    Stamp rules:
    - Resistor: conductance 1/R between its nodes.
    - Voltage source: penalty conductance from each non-ground terminal to the
      reference, with +V·g_big (positive terminal) and -V·g_big (negative terminal)
      injected.
    - Capacitor: open circuit at DC, no stamp.
    - Inductor: penalty conductance between its nodes, no offset.
    """

    def __init__(self, netlist: Netlist, penalty_conductance: float = PENALTY_CONDUCTANCE_SIEMENS):
        if penalty_conductance <= 0 or not np.isfinite(penalty_conductance):
            raise ValueError(f"Penalty conductance must be positive and finite, got {penalty_conductance!r}.")
        self.netlist = netlist
        self.penalty_conductance = float(penalty_conductance)
        self.size = netlist.unknown_count

    def assemble(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns:
            (G, I): an n×n float64 matrix and an n-vector, n = node_count - 1.

        Raises:
            TopologyError: If there are no non-ground nodes to solve for.
        """
        n = self.size
        if n <= 0:
            raise TopologyError(
                kind=FailureKind.EMPTY_CIRCUIT,
                details="Circuit must have at least one non-ground node; every terminal resolved to ground.",
                stage="assembly",
            )

        G = np.zeros((n, n), dtype=np.float64)
        I = np.zeros(n, dtype=np.float64)

        for element in self.netlist.elements:
            self._stamp(G, I, element)

        logger.debug(f"Assembled {n}x{n} nodal system from {len(self.netlist.elements)} element(s).")
        return G, I

    def _stamp(self, G: np.ndarray, I: np.ndarray, element: NetlistElement) -> None:
        match element.kind:
            case ComponentKind.RESISTOR:
                g = 1.0 / element.parameter("resistance")
                self._stamp_conductance(G, element.node_ids, g)
            case ComponentKind.VOLTAGE_SOURCE:
                self._stamp_penalty_source(G, I, element)
            case ComponentKind.CAPACITOR:
                pass
            case ComponentKind.INDUCTOR:
                self._stamp_conductance(G, element.node_ids, self.penalty_conductance)
            case ComponentKind.GROUND:
                raise FrameworkLogicError(
                    f"Ground component '{element.source_component_id}' reached the assembler; "
                    f"grounds must be folded into node 0 by the netlist builder."
                )
            case _:
                assert_never(element.kind)

    @staticmethod
    def _row(node_id: int) -> Optional[int]:
        return None if node_id == GROUND_NODE_ID else node_id - 1

    def _stamp_conductance(self, G: np.ndarray, node_ids: Tuple[int, ...], g: float) -> None:
        a, b = (self._row(n) for n in node_ids)
        if a is not None:
            G[a, a] += g
        if b is not None:
            G[b, b] += g
        if a is not None and b is not None:
            G[a, b] -= g
            G[b, a] -= g

    def _stamp_penalty_source(self, G: np.ndarray, I: np.ndarray, element: NetlistElement) -> None:
        voltage = element.parameter("voltage")
        g_big = self.penalty_conductance
        pos, neg = (self._row(n) for n in element.node_ids)
        if pos is not None:
            G[pos, pos] += g_big
            I[pos] += voltage * g_big
        if neg is not None:
            G[neg, neg] += g_big
            I[neg] -= voltage * g_big


def assemble(netlist: Netlist, penalty_conductance: float = PENALTY_CONDUCTANCE_SIEMENS) -> Tuple[np.ndarray, np.ndarray]:
    """Functional entry point; see `MnaAssembler.assemble`."""
    return MnaAssembler(netlist, penalty_conductance).assemble()
