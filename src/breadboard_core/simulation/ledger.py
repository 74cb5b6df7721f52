# src/breadboard_core/simulation/ledger.py
"""
Per-pass bookkeeping of a simulation pass.

A `CircuitPass` is created for every `simulate_circuit()` call and records,
for each placed component, whether this pass found it in a solvable loop, in a
dead short (with its direction), or neither. Nothing is written onto the
placed components themselves, so no stamp survives into the next pass.

Note: a component found in a dead short is also recorded as part of a loop,
so the end-of-pass sweep does not deactivate it; its short feedback wins.
When a battery is shorted, the members of its resistive loops are dropped
and report as inactive.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from ..board.board import PlacedComponent
from ..components.kinds import is_emf_source
from ..solver.netlist import Netlist
from ..solver.operating_point import OperatingPointResult
from .discovery import Exploration
from .netlist_builder import NetlistBuilder, node_name, sense_source_name

logger = logging.getLogger(__name__)


class ComponentStatus(Enum):
    """Where a component ended up after a pass. Exactly one applies."""
    SOLVABLE = "solvable"
    SHORT = "short"
    INACTIVE = "inactive"

    def __str__(self):
        return self.value


class CircuitOutcome(Enum):
    """What happened to one battery's circuit during a pass."""
    SOLVED = "solved"
    SHORT = "short"
    SOLVER_FAILED = "solver_failed"
    OPEN = "open"

    def __str__(self):
        return self.value


@dataclass
class Reading:
    """The normalized voltage and branch current delivered to one component."""
    voltage: float
    current: float


@dataclass
class CircuitRecord:
    """One battery's exploration together with the netlist it produced and its outcome."""
    root: PlacedComponent
    exploration: Exploration
    netlist: Netlist
    activations: List[Tuple[PlacedComponent, bool]] = field(default_factory=list)
    emitted: List[PlacedComponent] = field(default_factory=list)
    outcome: Optional[CircuitOutcome] = None
    result: Optional[OperatingPointResult] = None
    readings: Dict[PlacedComponent, Reading] = field(default_factory=dict)

    @property
    def touched(self) -> Tuple[PlacedComponent, ...]:
        return self.exploration.touched


class CircuitPass:
    """The stamps and results of a single simulation pass, keyed by component identity."""

    def __init__(self, generation: int):
        self.generation: int = generation
        self.num_active_circuits: int = 0
        self.records: List[CircuitRecord] = []
        self._looped: Set[PlacedComponent] = set()
        self._short: Dict[PlacedComponent, bool] = {}
        self._dropped: Set[PlacedComponent] = set()

    def is_looped(self, placed: PlacedComponent) -> bool:
        """True if `placed` was found in any closed loop this pass (short loops included)."""
        return placed in self._looped

    def is_short(self, placed: PlacedComponent) -> bool:
        return placed in self._short

    def short_forward(self, placed: PlacedComponent) -> bool:
        return self._short.get(placed, False)

    def status_of(self, placed: PlacedComponent) -> ComponentStatus:
        if placed in self._short:
            return ComponentStatus.SHORT
        if placed in self._looped and placed not in self._dropped:
            return ComponentStatus.SOLVABLE
        return ComponentStatus.INACTIVE

    def record_for(self, placed: PlacedComponent) -> Optional[CircuitRecord]:
        """The record of the battery whose walk emitted `placed`, if any."""
        for record in self.records:
            if any(member is placed for member in record.emitted):
                return record
        return None

    def record(self, exploration: Exploration, builder: NetlistBuilder) -> CircuitRecord:
        """
        Stamps the loops of one exploration in discovery order and builds the
        netlist of its solvable loops.

        Short loop: every member is stamped short with its direction (and as
        looped). Solvable loop: every member not yet looped this pass has its
        elements emitted; all members are stamped and queued for activation.
        """
        record = CircuitRecord(
            root=exploration.root,
            exploration=exploration,
            netlist=builder.new_netlist(exploration.root),
        )
        for loop in exploration.loops:
            if loop.is_short:
                for placed, forward in loop.members():
                    self._looped.add(placed)
                    self._short[placed] = forward
                continue

            for placed, forward in loop.members():
                if placed not in self._looped:
                    if builder.add(record.netlist, placed, forward):
                        record.emitted.append(placed)
                self._looped.add(placed)
                record.activations.append((placed, forward))

        self.records.append(record)
        return record

    def mark_failed(self, record: CircuitRecord):
        """Records that the solver rejected `record`'s circuit; its members count as inactive."""
        record.outcome = CircuitOutcome.SOLVER_FAILED
        self._dropped.update(record.touched)

    def mark_short(self, record: CircuitRecord):
        """Records that `record`'s battery is shorted; members outside the short count as inactive."""
        record.outcome = CircuitOutcome.SHORT
        self._dropped.update(placed for placed in record.touched if placed not in self._short)


def read_back(record: CircuitRecord, result: OperatingPointResult) -> Dict[PlacedComponent, Reading]:
    """
    Reads each emitted component's voltage and current out of a solved operating point.

    A battery reports the voltage of its `end` node, everything else that of its
    `start` node. Voltages are shifted by the lowest value read (never above 0) so
    the most negative node reads zero. The current is the branch current of the
    component's sense source.
    """
    raw: Dict[PlacedComponent, Tuple[float, float]] = {}
    for placed in record.emitted:
        point = placed.end if is_emf_source(placed.kind) else placed.start
        raw[placed] = (result.voltage(node_name(point)), result.current(sense_source_name(placed)))

    min_voltage = 0.0
    for voltage, _ in raw.values():
        if voltage < min_voltage:
            min_voltage = voltage

    return {
        placed: Reading(voltage=voltage - min_voltage, current=current)
        for placed, (voltage, current) in raw.items()
    }
