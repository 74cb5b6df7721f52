# src/breadboard_core/solver/elements.py
"""
The primitive, linear circuit elements understood by the DC operating-point solver.

Each element is an immutable record addressed by a unique name and the labels of
the nodes it connects. Values are stored as plain floats in SI units (volts, ohms);
`pint` quantities and quantity strings are accepted at construction time and
converted.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..constants import DEFAULT_LINE_IMPEDANCE_OHMS
from ..units import to_magnitude

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoltageSource:
    """
    Ideal DC voltage source enforcing V(pos) - V(neg) = voltage.

    Its branch current is positive when it flows from `pos` through the source
    to `neg`.
    """
    name: str
    pos: str
    neg: str
    voltage: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'voltage', to_magnitude(self.voltage, 'volt'))

    @property
    def nodes(self) -> Tuple[str, ...]:
        return (self.pos, self.neg)


@dataclass(frozen=True)
class Resistor:
    """Ideal linear resistor between `n1` and `n2`."""
    name: str
    n1: str
    n2: str
    resistance: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, 'resistance', to_magnitude(self.resistance, 'ohm'))

    @property
    def nodes(self) -> Tuple[str, ...]:
        return (self.n1, self.n2)


@dataclass(frozen=True)
class LosslessTransmissionLine:
    """
    Ideal lossless transmission line with two ports (pos1, neg1) and (pos2, neg2).

    At DC the line is transparent: the two port voltages are equal and the port
    currents are equal and opposite. `impedance` is kept for completeness and does
    not affect the operating point.
    """
    name: str
    pos1: str
    neg1: str
    pos2: str
    neg2: str
    impedance: float = DEFAULT_LINE_IMPEDANCE_OHMS

    def __post_init__(self):
        object.__setattr__(self, 'impedance', to_magnitude(self.impedance, 'ohm'))

    @property
    def nodes(self) -> Tuple[str, ...]:
        return (self.pos1, self.neg1, self.pos2, self.neg2)

    @property
    def port_pairs(self) -> List[Tuple[str, str]]:
        return [(self.pos1, self.neg1), (self.pos2, self.neg2)]


# Elements whose DC behaviour is an ideal voltage constraint rather than a conductance.
VOLTAGE_DEFINED_ELEMENTS = (VoltageSource, LosslessTransmissionLine)
