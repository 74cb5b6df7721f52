# src/breadboard_core/components/kinds.py
"""
The electrical classification of a lab component.

Every component is exactly one of three kinds, and discovery and netlist
translation dispatch on the kind exhaustively:

- `EmfSource(emf)`: a battery; the roots of circuit discovery.
- `Resistive(resistance)`: counts as "a resistor on the path", so a loop
  containing one is solvable rather than a dead short.
- `Conductive()`: an ideal conductor (wire, closed switch).
"""
import logging
from dataclasses import dataclass
from typing import Union

from ..units import to_magnitude

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmfSource:
    emf: float

    def __post_init__(self):
        object.__setattr__(self, 'emf', to_magnitude(self.emf, 'volt'))


@dataclass(frozen=True)
class Resistive:
    resistance: float

    def __post_init__(self):
        object.__setattr__(self, 'resistance', to_magnitude(self.resistance, 'ohm'))


@dataclass(frozen=True)
class Conductive:
    pass


ElectricalKind = Union[EmfSource, Resistive, Conductive]


def is_emf_source(kind: ElectricalKind) -> bool:
    return isinstance(kind, EmfSource)


def is_resistive(kind: ElectricalKind) -> bool:
    return isinstance(kind, Resistive)
