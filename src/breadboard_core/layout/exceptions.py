# src/breadboard_core/layout/exceptions.py
"""
Diagnosable exceptions raised while reading a board layout file.

`LayoutParsingError` covers the file itself (missing, unreadable, not YAML, not
a mapping); `LayoutSchemaError` covers well-formed YAML that does not follow
the layout schema. Both derive from `DiagnosableError`, so the builder can wrap
either one in a `LayoutBuildError` carrying its report.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseLayoutError(DiagnosableError):
    """Common base for layout file errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Layout Error",
            details=str(self),
            suggestion="Please check the format and content of the layout YAML file.",
            context={}
        )


@dataclass(frozen=True)
class LayoutParsingError(BaseLayoutError):
    """The layout file is missing, unreadable, or not a YAML mapping."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Layout parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class LayoutSchemaError(BaseLayoutError):
    """The YAML is well-formed but does not match the layout schema."""
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self):
        return [f"  - Field '{k}': {v}" for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))]

    def __str__(self):
        return f"Layout schema validation failed for file '{self.file_path}':\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the layout file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Layout Schema Validation Error",
            details=details,
            suggestion="Check for invalid or duplicate component ids, unknown keys, and 'start'/'end' given as [x, y] pairs.",
            context={'source_file': self.file_path}
        )
