import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ValidationIssueCode
from .validator import ResultValidator, ValidationReport

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "ValidationIssueCode",
    "ResultValidator",
    "ValidationReport",
]
