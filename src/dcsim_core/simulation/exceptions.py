# src/dcsim_core/simulation/exceptions.py
"""
Defines the diagnosable exceptions of the numerical solve stage.

`SingularSystemError` inherits from both `DiagnosableError` and numpy's
`LinAlgError`, so it can be caught either as a DCSim diagnostic or as a plain
linear-algebra failure.
"""
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class SingularSystemError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when Gaussian elimination finds no usable pivot, or the solution
    contains NaN/Inf. Signals floating nodes, a disconnected sub-circuit or a
    missing path to ground.
    """
    details: str
    pivot_index: Optional[int] = None
    floating_nodes: List[int] = field(default_factory=list)

    def __str__(self):
        where = f" at pivot column {self.pivot_index}" if self.pivot_index is not None else ""
        return f"Singular system detected{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        details = self.details
        if self.floating_nodes:
            details += f"\nFloating node(s): {', '.join(str(n) for n in self.floating_nodes)}"
        return format_diagnostic_report(
            error_type="Singular System Encountered",
            details=details,
            suggestion="This is usually caused by a component that is not connected to the rest of the circuit, "
                       "a sub-circuit with no path to ground, or a node reached only through capacitors. "
                       "Check the wiring around the listed nodes.",
            context={'stage': "solve"}
        )


class ConfigParsingError(ValueError):
    """Custom exception for errors during simulation configuration parsing."""
    pass
