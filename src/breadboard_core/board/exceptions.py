# src/breadboard_core/board/exceptions.py
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report
from .point import Point


@dataclass()
class PlacementRejectedError(DiagnosableError):
    """
    Raised when a footprint may not be occupied. The board is left untouched.
    """
    component_name: str
    start: Point
    end: Point
    length: int
    details: str = "The footprint overlaps, crosses or blocks an existing component."

    def __str__(self) -> str:
        return f"Cannot place '{self.component_name}' from {self.start} to {self.end} (length {self.length}): {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Placement Rejected",
            details=self.details,
            suggestion="Choose a free straight run of pegs whose length matches the component.",
            context={'component': self.component_name, 'location': f"{self.start} -> {self.end}"}
        )
