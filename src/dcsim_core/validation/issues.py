# src/dcsim_core/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Optional

logger = logging.getLogger(__name__)


class ValidationIssueLevel(Enum):
    """Severity level of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    A single finding of a post-simulation check. Issues are advisory: they never
    invalidate the result they were raised against.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    component_id: Optional[Hashable] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.component_id is not None:
            parts.append(f"Component: {self.component_id}")
        parts.append(f"Message: {self.message}")
        return " ".join(parts)
