# src/breadboard_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class BreadboardError(Exception):
    """Base class for all custom, user-facing errors in Breadboard Core."""
    pass

class LayoutBuildError(BreadboardError):
    """
    Raised when populating a lab from a layout file fails for any reason, from
    YAML parsing to a rejected placement. The message is a pre-formatted,
    user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    Code that only needs the report can work against this without knowing the
    concrete exception type.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Common concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and
    declares `get_diagnostic_report` abstract so every subclass must say how it
    is reported.
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
    Formats the final multi-line report string so every diagnostic has the same
    look and feel.

    Args:
        error_type: The high-level category of the error (e.g., "Placement Rejected").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (component, peg, battery, source file, ...).

    Returns:
        A formatted diagnostic report string ready for display or logging.
    """
    lines = [
        "\n",
        "============== Breadboard Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if circuit := context.get('circuit'):
        lines.append(f"Circuit:        {circuit}")
    if location := context.get('location'):
        lines.append(f"Location:       {location}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
