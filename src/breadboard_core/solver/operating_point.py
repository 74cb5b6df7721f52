# src/breadboard_core/solver/operating_point.py
"""
The DC operating-point analysis: validate a netlist, assemble its MNA system,
solve it and expose node voltages and source branch currents by name.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, runtime_checkable

import numpy as np

from ..constants import GROUND_NODE
from .mna import DcMnaAssembler
from .netlist import Netlist
from .solver import factorize_mna_matrix, solve_mna_system
from .validation import NetlistValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperatingPointResult:
    """Node voltages (V) and voltage-source branch currents (A) of a solved netlist."""
    netlist_name: str
    node_voltages: Dict[str, float] = field(default_factory=dict)
    branch_currents: Dict[str, float] = field(default_factory=dict)
    ground: str = GROUND_NODE

    def voltage(self, node: str) -> float:
        """The voltage of `node` relative to ground."""
        if node == self.ground:
            return 0.0
        try:
            return self.node_voltages[node]
        except KeyError:
            raise KeyError(f"Node '{node}' is not part of netlist '{self.netlist_name}'.") from None

    def current(self, source_name: str) -> float:
        """
        The branch current of voltage source `source_name`, positive when it
        flows from the source's positive node through the source to its negative node.
        """
        try:
            return self.branch_currents[source_name]
        except KeyError:
            raise KeyError(
                f"No voltage-source branch named '{source_name}' in netlist '{self.netlist_name}'."
            ) from None


@runtime_checkable
class DCSolver(Protocol):
    """Anything that can compute the DC operating point of a netlist."""

    def solve(self, netlist: Netlist) -> OperatingPointResult:
        """
        Raises:
            SolverError: If the netlist is invalid or cannot be solved.
        """
        ...


class SparseDCSolver:
    """
    The default `DCSolver`: structural validation followed by a sparse LU solve
    of the DC MNA system.
    """

    def __init__(self, validator: Optional[NetlistValidator] = None):
        self.validator = validator or NetlistValidator()

    def solve(self, netlist: Netlist) -> OperatingPointResult:
        self.validator.validate(netlist)

        assembler = DcMnaAssembler(netlist)
        if assembler.size == 0:
            logger.debug(f"Netlist '{netlist.name}' has no unknowns; returning an empty operating point.")
            return OperatingPointResult(netlist_name=netlist.name, ground=netlist.ground)

        matrix, rhs = assembler.assemble()
        lu = factorize_mna_matrix(matrix, netlist_name=netlist.name)
        solution = solve_mna_system(lu, rhs, netlist_name=netlist.name)
        voltages, currents = assembler.unpack(np.asarray(solution))

        logger.debug(f"Operating point of '{netlist.name}' solved: {len(voltages)} node voltages.")
        return OperatingPointResult(
            netlist_name=netlist.name,
            node_voltages=voltages,
            branch_currents=currents,
            ground=netlist.ground,
        )


class OperatingPoint:
    """A single DC operating-point analysis of one netlist."""

    def __init__(self, netlist: Netlist, solver: Optional[DCSolver] = None):
        self.netlist = netlist
        self.solver: DCSolver = solver or SparseDCSolver()

    def run(self) -> OperatingPointResult:
        """
        Runs the analysis.

        Raises:
            SolverError: `NetlistValidationError` or `SingularMatrixError`.
        """
        logger.debug(f"Running DC operating point for netlist '{self.netlist.name}' ({len(self.netlist)} elements).")
        return self.solver.solve(self.netlist)
