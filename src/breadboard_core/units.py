# --- src/breadboard_core/units.py ---
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")

# --- Canonical dimensionality objects for explicit checks ---
VOLTAGE_DIMENSIONALITY = ureg.parse_expression('volt').dimensionality
RESISTANCE_DIMENSIONALITY = ureg.parse_expression('ohm').dimensionality
CURRENT_DIMENSIONALITY = ureg.parse_expression('ampere').dimensionality

logger.debug("Defined canonical dimensionalities: VOLTAGE, RESISTANCE, CURRENT")

QuantityLike = Union[float, int, str, Quantity]


def to_magnitude(value: QuantityLike, unit: str) -> float:
    """
    Converts a plain number, a quantity string (e.g. '10 V', '5 kohm') or a
    pint Quantity to a float magnitude in `unit`.

    Plain numbers are taken to already be in `unit`.

    Raises:
        pint.DimensionalityError: If the value has incompatible units.
        pint.UndefinedUnitError: If a string names an unknown unit.
        ValueError: If the value cannot be interpreted as a real scalar.
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean '{value}' is not a valid quantity.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        value = Quantity(value)
    if isinstance(value, Quantity):
        if value.dimensionless and not ureg.Unit(unit).dimensionless:
            return float(value.magnitude)
        return float(value.to(unit).magnitude)
    raise ValueError(f"Cannot interpret {value!r} as a quantity in '{unit}'.")
