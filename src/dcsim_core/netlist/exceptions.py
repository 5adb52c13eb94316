# src/dcsim_core/netlist/exceptions.py
"""
Defines the diagnosable exception raised when a circuit's topology cannot be
turned into a solvable nodal system.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, FailureKind, format_diagnostic_report


_SUGGESTIONS = {
    FailureKind.NO_GROUND_FOUND: "Add a ground component and connect it to the circuit's reference rail.",
    FailureKind.EMPTY_CIRCUIT: "Add at least one resistor, capacitor, inductor or voltage source that is not shorted entirely to ground.",
    FailureKind.UNRESOLVED_TERMINAL: "This indicates an internal error in node assignment. Please report the circuit that triggered it.",
}


@dataclass(eq=False)
class TopologyError(DiagnosableError):
    """
    Raised when the netlist cannot be built or assembled: no ground component,
    nothing to analyze, or a component terminal that did not resolve to a node.
    No partial result is produced.
    """
    kind: FailureKind
    details: str
    stage: str = "netlist"

    def __str__(self):
        return f"Topology error ({self.kind}) during {self.stage}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type=f"Topology Error ({self.kind})",
            details=self.details,
            suggestion=_SUGGESTIONS.get(self.kind, "Review the circuit's connectivity."),
            context={'stage': self.stage}
        )
