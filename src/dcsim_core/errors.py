# src/dcsim_core/errors.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class DCSimError(Exception):
    """Base class for all custom, user-facing errors in DCSim Core."""
    pass

class CircuitLoadError(DCSimError):
    """
    Raised when a circuit description (text, YAML or JSON) cannot be turned into
    component and wire descriptors. The message is a pre-formatted diagnostic report.
    """
    pass

class SimulationRunError(DCSimError):
    """
    Raised when a caller asks a failed simulation outcome to raise. The message is
    the pre-formatted diagnostic report of the stage that failed.
    """
    pass

class FrameworkLogicError(RuntimeError):
    """
    Raised when one pipeline stage hands another data that breaks their contract
    (e.g., a ground element reaching the assembler). Indicates a bug in the engine,
    not in the circuit, so `simulate()` does not convert it into a failure outcome.
    """
    pass


class FailureKind(Enum):
    """Why a simulation run produced no result. Values are the editor-facing names."""
    NO_GROUND_FOUND = "NoGroundFound"
    EMPTY_CIRCUIT = "EmptyCircuit"
    SINGULAR_SYSTEM = "SingularSystem"
    UNRESOLVED_TERMINAL = "UnresolvedTerminal"

    def __str__(self):
        return self.value


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It is catchable in `except` clauses like any exception, and it declares
    `get_diagnostic_report` abstract so that every subclass must be able to
    describe itself to the user.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Topology Error").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component, stage, file, line).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ DCSim Core: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if stage := context.get('stage'):
        lines.append(f"Stage:          {stage}")
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if (line_no := context.get('line')) is not None:
        lines.append(f"Line:           {line_no}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)


@dataclass(eq=False)
class ComponentError(DiagnosableError, ValueError):
    """
    Raised when a component descriptor is malformed: wrong terminal count for its
    kind, or a parameter value outside its physical range.
    """
    component_id: Any
    details: str

    def __str__(self):
        return f"Invalid component '{self.component_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Component",
            details=self.details,
            suggestion="Check the component's terminal list and parameters (e.g., positive, finite resistance).",
            context={'component': self.component_id}
        )
