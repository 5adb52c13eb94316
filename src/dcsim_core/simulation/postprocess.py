# src/dcsim_core/simulation/postprocess.py
import logging
from typing import List, Sequence, assert_never

from ..constants import PENALTY_CONDUCTANCE_SIEMENS
from ..data_structures import ComponentKind
from ..errors import FrameworkLogicError
from ..netlist import Netlist, NetlistElement
from .results import ComponentResult

logger = logging.getLogger(__name__)


def compute_component_results(
    netlist: Netlist,
    node_voltages: Sequence[float],
    penalty_conductance: float = PENALTY_CONDUCTANCE_SIEMENS,
) -> List[ComponentResult]:
    """
    Back-computes voltage, current and power for every netlist element.

    Voltage sources report zero current and power: the penalty formulation has no
    branch-current unknown to read it from. Capacitors are open at DC. Inductors
    are treated as the 1/g_big resistance they were stamped with.
    """
    results = [_element_result(el, node_voltages, penalty_conductance) for el in netlist.elements]
    logger.debug(f"Computed results for {len(results)} component(s).")
    return results


def _element_result(element: NetlistElement, node_voltages: Sequence[float], penalty_conductance: float) -> ComponentResult:
    if element.kind is ComponentKind.GROUND:
        raise FrameworkLogicError(f"Ground component '{element.source_component_id}' has no branch quantities.")
    n1, n2 = element.node_ids
    voltage = node_voltages[n1] - node_voltages[n2]

    match element.kind:
        case ComponentKind.RESISTOR:
            current = voltage / element.parameter("resistance")
            power = voltage * current
        case ComponentKind.INDUCTOR:
            current = voltage / (1.0 / penalty_conductance)
            power = voltage * current
        case ComponentKind.VOLTAGE_SOURCE | ComponentKind.CAPACITOR:
            current = 0.0
            power = 0.0
        case _:
            assert_never(element.kind)

    return ComponentResult(
        component_id=element.source_component_id,
        kind=element.kind,
        node_ids=element.node_ids,
        voltage=voltage,
        current=current,
        power=power,
    )
