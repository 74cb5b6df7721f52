# src/breadboard_core/solver/exceptions.py
"""
Defines the diagnosable exceptions raised by the DC operating-point solver.

Every failure the solver can report for a constructed netlist derives from
`SolverError`, so callers can treat "could not solve" as one recoverable
condition, distinct from a successful result:

* `NetlistValidationError` - the netlist breaks one or more structural rules
  (floating nodes, loops of ideal voltage branches, bad element values) and is
  rejected before any matrix is built.
* `SingularMatrixError` - the netlist passed validation but the MNA matrix could
  not be factorised or the solve produced non-finite values.
"""
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


class SolverError(DiagnosableError):
    """Common base for every solver failure mode."""
    pass


@dataclass(frozen=True)
class RuleViolation:
    """A single broken netlist rule and the element or node it applies to."""
    rule: str
    subject: str
    message: str

    def __str__(self) -> str:
        return f"[{self.rule}] {self.subject}: {self.message}"


@dataclass()
class NetlistValidationError(SolverError):
    """
    Raised when a netlist violates one or more validation rules.
    """
    netlist_name: str
    violations: List[RuleViolation] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"Netlist '{self.netlist_name}' failed validation with {len(self.violations)} violation(s): "
            + "; ".join(str(v) for v in self.violations)
        )

    @property
    def rules(self) -> List[str]:
        """The distinct names of the rules that were violated, in first-seen order."""
        seen: List[str] = []
        for violation in self.violations:
            if violation.rule not in seen:
                seen.append(violation.rule)
        return seen

    def get_diagnostic_report(self) -> str:
        details = "\n".join(f"- {v}" for v in self.violations) or "No violations recorded."
        return format_diagnostic_report(
            error_type="Netlist Validation Failed",
            details=details,
            suggestion="A floating node usually means an open branch; a voltage loop usually means ideal sources or conductors in parallel. Check the circuit layout.",
            context={'circuit': self.netlist_name}
        )


@dataclass()
class SingularMatrixError(SolverError, np.linalg.LinAlgError):
    """
    Raised when the DC MNA matrix is singular or the solve yields NaN/Inf.

    Also a `LinAlgError`, so numerical callers can catch it the usual way.
    """
    details: str
    netlist_name: Optional[str] = None

    def __str__(self):
        where = f" in netlist '{self.netlist_name}'" if self.netlist_name else ""
        return f"Singular matrix detected{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Singular Matrix Encountered",
            details=self.details,
            suggestion="This is often caused by a loop of ideal voltage sources or conductors, or by a sub-network with no path to ground.",
            context={'circuit': self.netlist_name or "N/A"}
        )
