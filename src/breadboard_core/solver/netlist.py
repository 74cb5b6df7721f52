# src/breadboard_core/solver/netlist.py
"""
Defines `Netlist`, the ordered collection of primitive elements handed to the
DC solver for one connected circuit.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..constants import GROUND_NODE
from .elements import LosslessTransmissionLine, Resistor, VoltageSource

logger = logging.getLogger(__name__)

Element = Union[VoltageSource, Resistor, LosslessTransmissionLine]


class Netlist:
    """
    An ordered, append-only list of solver elements.

    Element names are expected to be unique; duplicates are kept as given and
    reported by the `NetlistValidator` so that the caller receives one complete
    diagnostic instead of failing on the first `add`.
    """

    def __init__(self, name: str = "netlist", elements: Optional[Iterable[Element]] = None,
                 ground: str = GROUND_NODE):
        self.name: str = name
        self.ground: str = ground
        self._elements: List[Element] = []
        for element in elements or []:
            self.add(element)

    def add(self, element: Element) -> Element:
        """Appends an element and returns it."""
        if not isinstance(element, (VoltageSource, Resistor, LosslessTransmissionLine)):
            raise TypeError(f"Unsupported netlist element type '{type(element).__name__}'.")
        self._elements.append(element)
        logger.debug(f"Netlist '{self.name}': added {type(element).__name__} '{element.name}' {element.nodes}")
        return element

    def extend(self, elements: Iterable[Element]):
        for element in elements:
            self.add(element)

    @property
    def elements(self) -> List[Element]:
        return list(self._elements)

    @property
    def voltage_sources(self) -> List[VoltageSource]:
        return [e for e in self._elements if isinstance(e, VoltageSource)]

    @property
    def transmission_lines(self) -> List[LosslessTransmissionLine]:
        return [e for e in self._elements if isinstance(e, LosslessTransmissionLine)]

    @property
    def resistors(self) -> List[Resistor]:
        return [e for e in self._elements if isinstance(e, Resistor)]

    def nodes(self) -> List[str]:
        """All node labels in first-use order, ground included when referenced."""
        seen: Dict[str, None] = {}
        for element in self._elements:
            for node in element.nodes:
                seen.setdefault(node, None)
        return list(seen)

    def get(self, name: str) -> Optional[Element]:
        for element in self._elements:
            if element.name == name:
                return element
        return None

    def __contains__(self, name: object) -> bool:
        return any(element.name == name for element in self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Netlist(name='{self.name}', elements={len(self._elements)})"
