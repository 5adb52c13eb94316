# src/dcsim_core/parser/exceptions.py
"""
Defines the diagnosable exceptions of the circuit loading stage.

`ParsingError` covers file-system problems, YAML syntax errors and malformed
lines of the editor's text format. `SchemaValidationError` covers documents that
are syntactically valid but do not match the circuit document schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """Common base for every error raised while loading a circuit description."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the circuit description.",
            context={}
        )


@dataclass(eq=False)
class ParsingError(BaseParsingError):
    """
    Raised when a circuit description cannot be read: a missing or unreadable
    file, invalid YAML, or a line of the text format that cannot be parsed.
    """
    details: str
    file_path: Optional[Path] = None
    line: Optional[int] = None

    def __str__(self):
        where = []
        if self.file_path is not None:
            where.append(f"file '{self.file_path}'")
        if self.line is not None:
            where.append(f"line {self.line}")
        location = f" in {', '.join(where)}" if where else ""
        return f"Parsing error{location}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Circuit Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists and is readable. Text-format lines must look like "
                       "'r x1 y1 x2 y2 flags value', 'g x y flags' or 'w x1 y1 x2 y2'.",
            context={'source_file': self.file_path, 'line': self.line}
        )


@dataclass(eq=False)
class SchemaValidationError(BaseParsingError):
    """
    Raised when a YAML/JSON circuit document does not conform to the schema
    (e.g., missing `components`, a terminal with three coordinates, duplicate ids).
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{field}': {messages}" for field, messages in sorted(self.errors.items())]

    def __str__(self):
        source = f" for file '{self.file_path}'" if self.file_path is not None else ""
        return f"Circuit document schema validation failed{source}:\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the circuit document does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Circuit Document Schema Validation Error",
            details=details,
            suggestion="Correct the listed fields. Every component needs an 'id', a 'kind' and a 'terminals' "
                       "list of [x, y] pairs; component ids must be unique.",
            context={'source_file': self.file_path}
        )
