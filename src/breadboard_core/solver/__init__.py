# src/breadboard_core/solver/__init__.py
from .elements import LosslessTransmissionLine, Resistor, VoltageSource, VOLTAGE_DEFINED_ELEMENTS
from .exceptions import NetlistValidationError, RuleViolation, SingularMatrixError, SolverError
from .mna import DcMnaAssembler
from .netlist import Netlist
from .operating_point import DCSolver, OperatingPoint, OperatingPointResult, SparseDCSolver
from .validation import NetlistValidator

__all__ = [
    "VoltageSource",
    "Resistor",
    "LosslessTransmissionLine",
    "VOLTAGE_DEFINED_ELEMENTS",
    "Netlist",
    "NetlistValidator",
    "DcMnaAssembler",
    "DCSolver",
    "SparseDCSolver",
    "OperatingPoint",
    "OperatingPointResult",
    "SolverError",
    "NetlistValidationError",
    "SingularMatrixError",
    "RuleViolation",
]
