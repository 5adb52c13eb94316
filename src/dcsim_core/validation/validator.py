# src/dcsim_core/validation/validator.py
"""
Post-simulation sanity checks.

The validator inspects the per-component results of a successful run and flags
conditions an engineer would want to look at: currents above a threshold, and
resistors dissipating more than their rated power. It never changes a result
and never raises.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from ..constants import HIGH_CURRENT_THRESHOLD_AMPS
from ..data_structures import ComponentKind
from .issue_codes import ValidationIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

if TYPE_CHECKING:
    from ..netlist import NetlistElement
    from ..simulation.config import SimulationConfig
    from ..simulation.results import ComponentResult, SimulationOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """The issues found for one result. Valid iff there are none."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]


class ResultValidator:
    """Checks a simulation outcome against current and power limits."""

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.high_current_threshold = (
            config.high_current_threshold if config is not None else HIGH_CURRENT_THRESHOLD_AMPS
        )
        self.issues: List[ValidationIssue] = []

    def validate(self, outcome: Optional[SimulationOutcome]) -> ValidationReport:
        self.issues = []
        if outcome is None or not outcome.success:
            self._add_issue(ValidationIssueLevel.WARNING, ValidationIssueCode.NOT_SIMULATED)
            return ValidationReport(list(self.issues))

        # results are built one per netlist element, in element order
        for result, element in zip(outcome.per_component_results, outcome.netlist.elements):
            self._check_current(result)
            self._check_power_rating(result, element)

        if self.issues:
            logger.info(f"Validation complete. Found {len(self.issues)} warning(s).")
        else:
            logger.info("Validation complete with no issues found.")
        return ValidationReport(list(self.issues))

    def _add_issue(self, level: ValidationIssueLevel, code_enum: ValidationIssueCode, component_id=None, **kwargs):
        message = code_enum.format_message(component_id=component_id, **kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            component_id=component_id, details=kwargs
        ))

    def _check_current(self, result: ComponentResult) -> None:
        if abs(result.current) > self.high_current_threshold:
            self._add_issue(
                ValidationIssueLevel.WARNING, ValidationIssueCode.HIGH_CURRENT,
                component_id=result.component_id, current=result.current, kind=result.kind,
            )

    def _check_power_rating(self, result: ComponentResult, element: NetlistElement) -> None:
        if result.kind is not ComponentKind.RESISTOR:
            return
        rating = element.parameters.get("power_rating")
        if rating is not None and abs(result.power) > rating:
            self._add_issue(
                ValidationIssueLevel.WARNING, ValidationIssueCode.POWER_RATING_EXCEEDED,
                component_id=result.component_id, power=result.power, rating=rating,
            )
