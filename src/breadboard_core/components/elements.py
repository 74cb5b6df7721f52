# src/breadboard_core/components/elements.py
"""
The concrete components available on the lab table.
"""
import logging
from typing import Dict

from ..constants import (
    DEFAULT_BATTERY_EMF_VOLTS,
    DEFAULT_BULB_RESISTANCE_OHMS,
    DEFAULT_RESISTOR_OHMS,
)
from .base import CircuitComponent, format_label, register_component
from .kinds import Conductive, ElectricalKind, EmfSource, Resistive

logger = logging.getLogger(__name__)


@register_component("Battery")
class Battery(CircuitComponent):
    """An ideal EMF source. Its `end` terminal is the one discovery starts from."""

    def __init__(self, name: str, emf: float = DEFAULT_BATTERY_EMF_VOLTS, **kwargs):
        super().__init__(name, **kwargs)
        self._kind = EmfSource(emf)

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"emf": "volt"}

    @property
    def kind(self) -> ElectricalKind:
        return self._kind

    @property
    def emf(self) -> float:
        return self._kind.emf

    @property
    def labels_visible(self) -> bool:
        show = bool(self.lab is not None and getattr(self.lab, 'show_labels', False))
        return show and self.is_active

    def labels(self) -> Dict[str, str]:
        return {'voltage': format_label(self.emf, "V")}


@register_component("Resistor")
class FixedResistor(CircuitComponent):
    """A plain resistor."""

    def __init__(self, name: str, resistance: float = DEFAULT_RESISTOR_OHMS, **kwargs):
        super().__init__(name, **kwargs)
        self._kind = Resistive(resistance)

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"resistance": "ohm"}

    @property
    def kind(self) -> ElectricalKind:
        return self._kind

    @property
    def resistance(self) -> float:
        return self._kind.resistance

    def labels(self) -> Dict[str, str]:
        labels = super().labels()
        labels['resistance'] = format_label(self.resistance, "Ω")
        return labels


@register_component("Bulb")
class Bulb(FixedResistor):
    """A high-resistance bulb; it lights while a significant current flows through it."""

    def __init__(self, name: str, resistance: float = DEFAULT_BULB_RESISTANCE_OHMS, **kwargs):
        super().__init__(name, resistance=resistance, **kwargs)

    @property
    def is_lit(self) -> bool:
        return self.is_active and self.is_current_significant() and not self.is_short_circuit


@register_component("Wire")
class Wire(CircuitComponent):
    """An ideal conductor spanning one lattice step."""
    length = 1

    @property
    def kind(self) -> ElectricalKind:
        return Conductive()


@register_component("LongWire")
class LongWire(Wire):
    """An ideal conductor spanning two lattice steps; its middle peg is blocked."""
    length = 2


@register_component("Switch")
class Switch(CircuitComponent):
    """
    A conductor that can be opened. It is dispensed open; `toggle()` flips it
    and asks the lab to re-simulate.
    """

    def __init__(self, name: str, closed: bool = False, **kwargs):
        super().__init__(name, **kwargs)
        self._is_closed = closed

    @property
    def kind(self) -> ElectricalKind:
        return Conductive()

    def toggle(self):
        self._is_closed = not self._is_closed
        logger.debug(f"Switch '{self.name}' is now {'closed' if self._is_closed else 'open'}.")
        if self.lab is not None:
            self.lab.simulate_circuit()
