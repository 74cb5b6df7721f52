# src/breadboard_core/simulation/netlist_builder.py
"""
Translates the members of a solvable loop into solver elements.

Every component gets a zero-valued series source named `V<element name>`
whose branch current is the component's current, and a private mid node named
after its element name. Peg nodes are named after their grid point. `start`
and `end` below are taken in traversal direction.

- First battery of a netlist: `V<name>` from start to ground and the EMF
  source `<name>` from ground to end.
- Later batteries: `V<name>` from start to mid and `<name>` from mid to end.
- Resistive: `V<name>` from mid to start and a resistor `<name>` from mid to end.
- Conductive: `V<name>` from mid to start and a lossless transmission line
  `<name>` with ports (mid, end) and (end, mid).
"""
import logging
from typing import List, Union

from ..board.board import PlacedComponent
from ..constants import DEFAULT_LINE_IMPEDANCE_OHMS, GROUND_NODE, SENSE_SOURCE_PREFIX
from ..solver.elements import LosslessTransmissionLine, Resistor, VoltageSource
from ..solver.netlist import Netlist
from ..components.kinds import Conductive, EmfSource, Resistive
from .exceptions import TopologyInconsistencyError

logger = logging.getLogger(__name__)

Element = Union[VoltageSource, Resistor, LosslessTransmissionLine]


def sense_source_name(placed: PlacedComponent) -> str:
    return f"{SENSE_SOURCE_PREFIX}{placed.element_name}"


def node_name(point) -> str:
    return str(point)


class NetlistBuilder:
    """Emits the solver elements of placed components into a `Netlist`."""

    def __init__(self, line_impedance: float = DEFAULT_LINE_IMPEDANCE_OHMS):
        self.line_impedance = line_impedance

    def new_netlist(self, root: PlacedComponent) -> Netlist:
        return Netlist(name=f"circuit:{root.element_name}", ground=GROUND_NODE)

    def elements_for(self, placed: PlacedComponent, forward: bool, first: bool) -> List[Element]:
        """
        The elements of one component.

        Raises:
            TopologyInconsistencyError: If the component's kind is not recognised.
        """
        name = placed.element_name
        sense = sense_source_name(placed)
        start = node_name(placed.start if forward else placed.end)
        end = node_name(placed.end if forward else placed.start)
        mid = name
        kind = placed.kind

        if isinstance(kind, EmfSource):
            if first:
                return [
                    VoltageSource(sense, start, GROUND_NODE, 0.0),
                    VoltageSource(name, GROUND_NODE, end, kind.emf),
                ]
            return [
                VoltageSource(sense, start, mid, 0.0),
                VoltageSource(name, mid, end, kind.emf),
            ]
        if isinstance(kind, Resistive):
            return [
                VoltageSource(sense, mid, start, 0.0),
                Resistor(name, mid, end, kind.resistance),
            ]
        if isinstance(kind, Conductive):
            return [
                VoltageSource(sense, mid, start, 0.0),
                LosslessTransmissionLine(name, mid, end, end, mid, self.line_impedance),
            ]
        raise TopologyInconsistencyError(component_name=name, kind_repr=repr(kind))

    def add(self, netlist: Netlist, placed: PlacedComponent, forward: bool) -> bool:
        """
        Appends the elements of `placed` to `netlist`. A component of unknown kind
        is logged and skipped; returns False in that case.
        """
        try:
            elements = self.elements_for(placed, forward, first=len(netlist) == 0)
        except TopologyInconsistencyError as e:
            e.circuit_name = netlist.name
            logger.error(e.get_diagnostic_report())
            return False
        netlist.extend(elements)
        return True
