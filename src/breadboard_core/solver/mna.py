# src/breadboard_core/solver/mna.py

import logging
from typing import Dict, List, Tuple

import numpy as np
import scipy.sparse as sp

from .elements import LosslessTransmissionLine, Resistor, VoltageSource
from .netlist import Netlist

logger = logging.getLogger(__name__)


class DcMnaAssembler:
    """
    Constructs the Modified Nodal Analysis (MNA) system of a netlist at DC.

    The unknown vector is laid out as all non-ground node voltages (sorted by
    label) followed by one branch current per voltage-source and two per
    transmission line (one per port), in netlist order.

    Stamping conventions:
    1.  Resistor: conductance 1/R between its two nodes.
    2.  Voltage source: branch current `i` leaves `pos` and enters `neg`
        through the source; the branch row enforces V(pos) - V(neg) = v.
    3.  Lossless transmission line at DC: port currents i1, i2 enter at the
        positive terminals; the branch rows enforce equal port voltages and
        i1 + i2 = 0.

    The ground node is removed from the system after assembly.
    """
    def __init__(self, netlist: Netlist):
        self.netlist: Netlist = netlist
        self.ground: str = netlist.ground

        self.node_map: Dict[str, int] = {}
        self.branch_map: Dict[Tuple[str, int], int] = {}
        self.node_count: int = 0
        self.branch_count: int = 0

        self._assign_indices()

        logger.debug(
            f"DC MNA assembler initialized for netlist '{netlist.name}'. "
            f"Nodes (excl. ground): {self.node_count}, branch currents: {self.branch_count}."
        )

    @property
    def size(self) -> int:
        return self.node_count + self.branch_count

    def _assign_indices(self):
        """Assigns reduced matrix indices to every non-ground node and branch current."""
        node_names = sorted(n for n in self.netlist.nodes() if n != self.ground)
        self.node_map = {name: idx for idx, name in enumerate(node_names)}
        self.node_count = len(node_names)

        idx = self.node_count
        for element in self.netlist:
            if isinstance(element, VoltageSource):
                self.branch_map[(element.name, 0)] = idx
                idx += 1
            elif isinstance(element, LosslessTransmissionLine):
                self.branch_map[(element.name, 0)] = idx
                self.branch_map[(element.name, 1)] = idx + 1
                idx += 2
        self.branch_count = idx - self.node_count

    def _node_index(self, node: str):
        """Returns the reduced index of `node`, or None for ground."""
        if node == self.ground:
            return None
        return self.node_map[node]

    def assemble(self) -> Tuple[sp.csc_matrix, np.ndarray]:
        """
        Assembles the reduced DC MNA system.

        Returns:
            A tuple (A, b) where A is the square CSC system matrix and b the
            right-hand-side vector.
        """
        rows: List[int] = []
        cols: List[int] = []
        data: List[float] = []
        rhs = np.zeros(self.size, dtype=np.float64)

        def add_value(r, c, value):
            if r is None or c is None:
                return
            rows.append(r)
            cols.append(c)
            data.append(value)

        for element in self.netlist:
            if isinstance(element, Resistor):
                g = 1.0 / element.resistance
                a, b = self._node_index(element.n1), self._node_index(element.n2)
                add_value(a, a, g)
                add_value(b, b, g)
                add_value(a, b, -g)
                add_value(b, a, -g)

            elif isinstance(element, VoltageSource):
                k = self.branch_map[(element.name, 0)]
                p, n = self._node_index(element.pos), self._node_index(element.neg)
                add_value(p, k, 1.0)
                add_value(n, k, -1.0)
                add_value(k, p, 1.0)
                add_value(k, n, -1.0)
                rhs[k] += element.voltage

            elif isinstance(element, LosslessTransmissionLine):
                k1 = self.branch_map[(element.name, 0)]
                k2 = self.branch_map[(element.name, 1)]
                p1, n1 = self._node_index(element.pos1), self._node_index(element.neg1)
                p2, n2 = self._node_index(element.pos2), self._node_index(element.neg2)
                # KCL contributions of the port currents.
                add_value(p1, k1, 1.0)
                add_value(n1, k1, -1.0)
                add_value(p2, k2, 1.0)
                add_value(n2, k2, -1.0)
                # (V(p1) - V(n1)) - (V(p2) - V(n2)) = 0
                add_value(k1, p1, 1.0)
                add_value(k1, n1, -1.0)
                add_value(k1, p2, -1.0)
                add_value(k1, n2, 1.0)
                # i1 + i2 = 0
                add_value(k2, k1, 1.0)
                add_value(k2, k2, 1.0)

        # Duplicate coordinates are summed by the COO -> CSC conversion.
        matrix = sp.coo_matrix((data, (rows, cols)), shape=(self.size, self.size)).tocsc()
        return matrix, rhs

    def unpack(self, solution: np.ndarray) -> Tuple[Dict[str, float], Dict[str, float]]:
        """
        Splits a solution vector into node voltages and source branch currents.

        Transmission-line port currents are reported as '<name>#1' and '<name>#2'.
        """
        voltages: Dict[str, float] = {self.ground: 0.0}
        for name, idx in self.node_map.items():
            voltages[name] = float(solution[idx])

        currents: Dict[str, float] = {}
        for (name, port), idx in self.branch_map.items():
            element = self.netlist.get(name)
            key = name if isinstance(element, VoltageSource) else f"{name}#{port + 1}"
            currents[key] = float(solution[idx])
        return voltages, currents
