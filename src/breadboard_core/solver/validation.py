# src/breadboard_core/solver/validation.py
"""
Structural checks run on a netlist before any matrix is assembled.

The validator collects every violation it finds and raises a single
`NetlistValidationError`, so one call reports all problems of a circuit:

* ``duplicate-name``: two elements share a name.
* ``non-finite-value``: a source voltage, resistance or impedance is NaN/Inf.
* ``non-positive-resistance``: a resistor has R <= 0.
* ``floating-node``: a group of connected nodes has no path to ground.
* ``voltage-loop``: ideal voltage branches (sources and transmission-line
  ports) close a loop, which leaves the loop current undetermined.
"""
import logging
import math
from typing import List, Set, Tuple

import networkx as nx
from networkx.utils import UnionFind

from .elements import VOLTAGE_DEFINED_ELEMENTS, LosslessTransmissionLine, Resistor, VoltageSource
from .exceptions import NetlistValidationError, RuleViolation
from .netlist import Netlist

logger = logging.getLogger(__name__)

RULE_DUPLICATE_NAME = "duplicate-name"
RULE_NON_FINITE_VALUE = "non-finite-value"
RULE_NON_POSITIVE_RESISTANCE = "non-positive-resistance"
RULE_FLOATING_NODE = "floating-node"
RULE_VOLTAGE_LOOP = "voltage-loop"


class NetlistValidator:
    """Runs all structural rules over a `Netlist`."""

    def validate(self, netlist: Netlist) -> None:
        """
        Raises:
            NetlistValidationError: If any rule is violated.
        """
        violations: List[RuleViolation] = []
        violations.extend(self._check_names(netlist))
        violations.extend(self._check_values(netlist))
        violations.extend(self._check_floating_nodes(netlist))
        violations.extend(self._check_voltage_loops(netlist))

        if violations:
            logger.warning(f"Netlist '{netlist.name}' has {len(violations)} validation violation(s).")
            raise NetlistValidationError(netlist_name=netlist.name, violations=violations)
        logger.debug(f"Netlist '{netlist.name}' passed validation ({len(netlist)} elements).")

    def _check_names(self, netlist: Netlist) -> List[RuleViolation]:
        seen: Set[str] = set()
        reported: Set[str] = set()
        violations = []
        for element in netlist:
            if element.name in seen and element.name not in reported:
                violations.append(RuleViolation(RULE_DUPLICATE_NAME, element.name, "Element name is used more than once."))
                reported.add(element.name)
            seen.add(element.name)
        return violations

    def _check_values(self, netlist: Netlist) -> List[RuleViolation]:
        violations = []
        for element in netlist:
            if isinstance(element, VoltageSource):
                value = element.voltage
            elif isinstance(element, Resistor):
                value = element.resistance
            else:
                value = element.impedance

            if not math.isfinite(value):
                violations.append(RuleViolation(RULE_NON_FINITE_VALUE, element.name, f"Value {value} is not finite."))
            elif isinstance(element, Resistor) and value <= 0.0:
                violations.append(RuleViolation(
                    RULE_NON_POSITIVE_RESISTANCE, element.name, f"Resistance must be positive, got {value} ohm."
                ))
        return violations

    def _check_floating_nodes(self, netlist: Netlist) -> List[RuleViolation]:
        graph = nx.Graph()
        for element in netlist:
            nodes = element.nodes
            graph.add_nodes_from(nodes)
            for other in nodes[1:]:
                graph.add_edge(nodes[0], other)

        violations = []
        for group in nx.connected_components(graph):
            if netlist.ground not in group:
                for node in sorted(group):
                    violations.append(RuleViolation(RULE_FLOATING_NODE, node, "Node has no path to ground."))
        return violations

    def _check_voltage_loops(self, netlist: Netlist) -> List[RuleViolation]:
        joined = UnionFind()
        violations = []
        for element in netlist:
            for a, b in self._voltage_edges(element):
                if a == b or joined[a] == joined[b]:
                    violations.append(RuleViolation(
                        RULE_VOLTAGE_LOOP, element.name,
                        f"Voltage branch between '{a}' and '{b}' closes a loop of ideal voltage branches."
                    ))
                    break
                joined.union(a, b)
        return violations

    @staticmethod
    def _voltage_edges(element) -> List[Tuple[str, str]]:
        """Distinct node pairs an element constrains by voltage; empty for resistors."""
        if not isinstance(element, VOLTAGE_DEFINED_ELEMENTS):
            return []
        if isinstance(element, VoltageSource):
            return [(element.pos, element.neg)]
        if isinstance(element, LosslessTransmissionLine):
            edges: List[Tuple[str, str]] = []
            seen: Set[frozenset] = set()
            for a, b in element.port_pairs:
                key = frozenset((a, b))
                if key not in seen:
                    seen.add(key)
                    edges.append((a, b))
            return edges
        return []
