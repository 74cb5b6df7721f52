# src/breadboard_core/components/base.py

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Type

from ..constants import SIGNIFICANT_CURRENT_AMPS
from ..units import to_magnitude
from .kinds import ElectricalKind

logger = logging.getLogger(__name__)


def format_label(value: float, unit: str) -> str:
    """Formats a value with at most one decimal, dropping a trailing '.0' (e.g. '10V', '1.5mA')."""
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return f"{text}{unit}"


class CircuitComponent(ABC):
    """
    The abstract base class for the lab's components.

    It satisfies `ICircuitComponent` and holds the feedback state the lab pushes
    after every pass (active, forward, short, voltage, current). Subclasses only
    declare their electrical `kind`, their footprint `length` and, optionally,
    their parameters.
    """
    component_type_str: ClassVar[str] = "CircuitComponent"

    #: Number of lattice steps between the component's two endpoints.
    length: ClassVar[int] = 1

    def __init__(self, name: str, significant_current: float = SIGNIFICANT_CURRENT_AMPS):
        self.name: str = name
        self.significant_current: float = significant_current
        self.lab: Optional[Any] = None
        self._is_closed: bool = True
        self.is_active: bool = False
        self.is_forward: bool = True
        self.is_short_circuit: bool = False
        self.voltage: float = 0.0
        self.current: float = 0.0
        logger.debug(f"Initialized {type(self).__name__} '{self.name}'")

    @property
    @abstractmethod
    def kind(self) -> ElectricalKind:
        """The component's electrical classification."""
        pass

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        """Parameter names accepted by the constructor and the unit each is expressed in."""
        return {}

    @classmethod
    def from_parameters(cls, name: str, parameters: Optional[Dict[str, Any]] = None, **kwargs):
        """
        Builds an instance from a name and a raw parameter mapping, converting each
        value (number, quantity string or `pint` quantity) to its declared unit.

        Raises:
            ValueError: On an undeclared parameter or an unconvertible value.
            pint.DimensionalityError: On a value with incompatible units.
        """
        declared = cls.declare_parameters()
        converted: Dict[str, float] = {}
        for key, value in (parameters or {}).items():
            if key not in declared:
                raise ValueError(
                    f"Component type '{cls.component_type_str}' has no parameter '{key}'. "
                    f"Declared parameters: {sorted(declared) or 'none'}."
                )
            converted[key] = to_magnitude(value, declared[key])
        return cls(name, **converted, **kwargs)

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    def attach_lab(self, lab: Any):
        self.lab = lab

    def set_active(self, is_active: bool, is_forward: bool):
        self.is_active = is_active
        self.is_forward = is_forward

    def set_short_circuit(self, is_short: bool, is_forward: bool):
        # Clearing a short keeps the direction set by the loop the component is active in.
        self.is_short_circuit = is_short
        if is_short:
            self.is_forward = is_forward

    def set_voltage(self, voltage: float):
        self.voltage = voltage

    def set_current(self, current: float):
        self.current = current

    def is_current_significant(self) -> bool:
        return self.current > self.significant_current

    def toggle(self):
        """User interaction hook. Most components have nothing to toggle."""
        pass

    def reset_feedback(self):
        """Returns the feedback state to that of a freshly dispensed component."""
        self.is_active = False
        self.is_forward = True
        self.is_short_circuit = False
        self.voltage = 0.0
        self.current = 0.0

    @property
    def labels_visible(self) -> bool:
        show = bool(self.lab is not None and getattr(self.lab, 'show_labels', False))
        return show and self.is_active and self.is_current_significant() and not self.is_short_circuit

    def labels(self) -> Dict[str, str]:
        """The value labels this component displays, keyed by quantity."""
        return {
            'voltage': format_label(self.voltage, "V"),
            'current': format_label(self.current * 1000.0, "mA"),
        }

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.name}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', closed={self.is_closed})"


# --- Global Component Registry and Decorator ---

COMPONENT_REGISTRY: Dict[str, Type[CircuitComponent]] = {}


def register_component(type_str: str):
    """
    A class decorator to register a component class in the global component registry,
    making it available to the layout builder.
    """
    def decorator(cls: Type[CircuitComponent]):
        if not issubclass(cls, CircuitComponent):
            raise TypeError(f"Class {cls.__name__} must inherit from CircuitComponent.")

        params = cls.declare_parameters()
        if not isinstance(params, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in params.items()):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"declare_parameters() must return a dict of str -> unit str, but returned: {params}."
            )
        if not isinstance(cls.length, int) or cls.length < 1:
            raise TypeError(f"Component class '{cls.__name__}' must declare a positive integer length, got {cls.length!r}.")

        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{type_str}' is being redefined/overwritten.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls
        logger.debug(f"Registered component type '{type_str}' -> {cls.__name__}")
        return cls
    return decorator
