# src/breadboard_core/simulation/exceptions.py
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class TopologyInconsistencyError(DiagnosableError):
    """
    Raised when a component of unknown electrical kind reaches the netlist
    builder. The builder logs it and leaves the component out of the circuit.
    """
    component_name: str
    kind_repr: str
    circuit_name: str = "N/A"

    def __str__(self) -> str:
        return f"Unrecognized component '{self.component_name}' of kind {self.kind_repr} in circuit '{self.circuit_name}'."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Topology Inconsistency",
            details=f"Component kind {self.kind_repr} is not an EMF source, resistive or conductive element. It was left out of the circuit.",
            suggestion="Give the component an EmfSource, Resistive or Conductive kind.",
            context={'component': self.component_name, 'circuit': self.circuit_name}
        )
