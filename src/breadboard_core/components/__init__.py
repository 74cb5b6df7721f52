# src/breadboard_core/components/__init__.py
from .base import COMPONENT_REGISTRY, CircuitComponent, register_component
from .capabilities import ICircuitComponent, IDynamic, ILabAware
from .elements import Battery, Bulb, FixedResistor, LongWire, Switch, Wire
from .kinds import Conductive, ElectricalKind, EmfSource, Resistive, is_emf_source, is_resistive

__all__ = [
    "CircuitComponent",
    "COMPONENT_REGISTRY",
    "register_component",
    "ICircuitComponent",
    "IDynamic",
    "ILabAware",
    "EmfSource",
    "Resistive",
    "Conductive",
    "ElectricalKind",
    "is_emf_source",
    "is_resistive",
    "Battery",
    "FixedResistor",
    "Bulb",
    "Wire",
    "LongWire",
    "Switch",
]
