# src/dcsim_core/analysis/report.py
"""
Renders a simulation outcome and its validation report as plain text.

The layout follows the schematic editor's analysis panel:

    === Circuit Analysis Report ===

    Node Voltages:
      Node 0: 0.000V (GND1.0, V1.1)
      ...

    Component Analysis:
      RESISTOR R1:
        Voltage: ...V
        Current: ...A
        Power: ...W

    Circuit Validation:
      Status: VALID | ISSUES FOUND
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..simulation.results import SimulationOutcome
    from ..validation import ValidationReport

logger = logging.getLogger(__name__)

NO_RESULTS_TEXT = "No simulation results available"


def format_report(outcome: Optional[SimulationOutcome], validation: ValidationReport) -> str:
    if outcome is None:
        return NO_RESULTS_TEXT
    if not outcome.success:
        return _format_failure(outcome)

    lines: List[str] = ["=== Circuit Analysis Report ===", ""]

    lines.append("Node Voltages:")
    node_terminals = outcome.netlist.node_terminals
    for node_id, voltage in enumerate(outcome.node_voltages):
        labels = node_terminals.get(node_id, ())
        suffix = f" ({', '.join(labels)})" if labels else ""
        lines.append(f"  Node {node_id}: {voltage:.3f}V{suffix}")
    lines.append("")

    lines.append("Component Analysis:")
    for result in outcome.per_component_results:
        kind_name = str(result.kind).replace("_", " ").upper()
        lines.append(f"  {kind_name} {result.component_id}:")
        lines.append(f"    Voltage: {result.voltage:.3f}V")
        lines.append(f"    Current: {result.current:.6f}A")
        lines.append(f"    Power: {result.power:.6f}W")
        lines.append("")

    lines.extend(_format_validation(validation))
    return "\n".join(lines) + "\n"


def _format_failure(outcome) -> str:
    lines = [
        "=== Circuit Analysis Report ===",
        "",
        f"Simulation failed ({outcome.kind}) during {outcome.stage}:",
        f"  {outcome.message}",
    ]
    return "\n".join(lines) + "\n"


def _format_validation(validation: ValidationReport) -> List[str]:
    lines = ["Circuit Validation:", f"  Status: {'VALID' if validation.is_valid else 'ISSUES FOUND'}"]
    if not validation.is_valid:
        lines.append("  Issues:")
        lines.extend(f"    - {message}" for message in validation.messages)
    return lines
