# src/breadboard_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Breadboard Core package initialized.")

from .units import ureg, Quantity, VOLTAGE_DIMENSIONALITY, RESISTANCE_DIMENSIONALITY, CURRENT_DIMENSIONALITY
from .board import Board, PlacedComponent, Point, Direction, PlacementValidator, PlacementRejectedError
from .components import (
    Battery, Bulb, FixedResistor, Wire, LongWire, Switch,
    CircuitComponent, ICircuitComponent, IDynamic, EmfSource, Resistive, Conductive,
    COMPONENT_REGISTRY, register_component,
)
from .config import LabConfig, ConfigParsingError, load_lab_config
from .lab import CircuitLab
from .simulation import CircuitPass, ComponentStatus, CircuitOutcome, FeedbackListener, LoggingFeedback
from .layout import LayoutBuilder, LayoutParser
from .errors import BreadboardError, LayoutBuildError

__all__ = [
    # Units
    "ureg", "Quantity",
    # Canonical dimensionalities
    "VOLTAGE_DIMENSIONALITY", "RESISTANCE_DIMENSIONALITY", "CURRENT_DIMENSIONALITY",
    # Board
    "Board", "PlacedComponent", "Point", "Direction", "PlacementValidator", "PlacementRejectedError",
    # Components
    "Battery", "Bulb", "FixedResistor", "Wire", "LongWire", "Switch",
    "CircuitComponent", "ICircuitComponent", "IDynamic", "EmfSource", "Resistive", "Conductive",
    "COMPONENT_REGISTRY", "register_component",
    # Configuration
    "LabConfig", "ConfigParsingError", "load_lab_config",
    # Lab and simulation
    "CircuitLab", "CircuitPass", "ComponentStatus", "CircuitOutcome", "FeedbackListener", "LoggingFeedback",
    # Layout files
    "LayoutBuilder", "LayoutParser",
    # Top-Level Errors (Actionable Diagnostics)
    "BreadboardError", "LayoutBuildError",
]
