# src/breadboard_core/config.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import cerberus
import pint
import yaml

from .constants import (
    DEFAULT_BATTERY_EMF_VOLTS,
    DEFAULT_BULB_RESISTANCE_OHMS,
    DEFAULT_LINE_IMPEDANCE_OHMS,
    DEFAULT_NUM_COLS,
    DEFAULT_NUM_ROWS,
    SIGNIFICANT_CURRENT_AMPS,
)
from .units import to_magnitude

logger = logging.getLogger(__name__)

class ConfigParsingError(ValueError):
    """Custom exception for errors during lab configuration parsing."""
    pass


@dataclass(frozen=True)
class LabConfig:
    """
    Settings of one lab table. Physical values are plain floats in SI units.
    """
    num_rows: int = DEFAULT_NUM_ROWS
    num_cols: int = DEFAULT_NUM_COLS
    battery_emf: float = DEFAULT_BATTERY_EMF_VOLTS
    bulb_resistance: float = DEFAULT_BULB_RESISTANCE_OHMS
    line_impedance: float = DEFAULT_LINE_IMPEDANCE_OHMS
    significant_current: float = SIGNIFICANT_CURRENT_AMPS
    preload_solver: bool = False


_quantity_rule = {"type": ["string", "number"], "required": False}

_schema = {
    "num_rows": {"type": "integer", "required": False, "min": 1},
    "num_cols": {"type": "integer", "required": False, "min": 1},
    "battery_emf": _quantity_rule,
    "bulb_resistance": _quantity_rule,
    "line_impedance": _quantity_rule,
    "significant_current": _quantity_rule,
    "preload_solver": {"type": "boolean", "required": False},
}

_units = {
    "battery_emf": "volt",
    "bulb_resistance": "ohm",
    "line_impedance": "ohm",
    "significant_current": "ampere",
}


def parse_lab_config(raw_config: Dict[str, Any]) -> LabConfig:
    """
    Validates a raw configuration mapping and converts it to a `LabConfig`.
    Missing keys keep their defaults.
    """
    if raw_config is None:
        return LabConfig()
    if not isinstance(raw_config, dict):
        raise ConfigParsingError("Lab configuration must be a mapping.")

    validator = cerberus.Validator(_schema)
    validator.allow_unknown = False
    if not validator.validate(raw_config):
        raise ConfigParsingError(f"Invalid lab configuration: {validator.errors}")

    values: Dict[str, Any] = {}
    try:
        for key, value in validator.document.items():
            if key in _units:
                values[key] = to_magnitude(value, _units[key])
            else:
                values[key] = value
    except (ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse lab configuration: {e}") from e

    for key in ("bulb_resistance", "line_impedance"):
        if key in values and values[key] <= 0:
            raise ConfigParsingError(f"'{key}' must be positive, got {values[key]}.")
    if values.get("significant_current", 0.0) < 0:
        raise ConfigParsingError(f"'significant_current' must not be negative, got {values['significant_current']}.")

    config = LabConfig(**values)
    logger.debug(f"Parsed lab configuration: {config}")
    return config


def load_lab_config(path: Union[str, Path]) -> LabConfig:
    """Reads and parses a YAML lab configuration file."""
    source = Path(path)
    if not source.is_file():
        raise ConfigParsingError(f"Lab configuration file not found at path: {source}")
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Invalid YAML syntax in '{source}': {e}") from e
    logger.info(f"Loading lab configuration from {source}")
    return parse_lab_config(content)
