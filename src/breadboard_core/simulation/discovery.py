# src/breadboard_core/simulation/discovery.py
"""
Depth-first reconstruction of the closed loops through a battery.

`explore(board, battery)` walks the board from the battery's `end` peg,
through every component attached there, following each component to its other
endpoint. A loop closes when the walk arrives back at the battery's `start`
peg. The walk only reads the board; the loops it finds are returned as values
and all stamping is left to `CircuitPass`.

Traversal rules, applied at every peg:
1.  A component whose owner is open (`is_closed == False`) is not entered.
2.  If the battery is attached to the next peg and that peg is the battery's
    `start`, the current path is a closed loop. A loop without a resistive
    component is a dead short and the remaining components at that peg are not
    scanned.
3.  If a component already on the path is attached to the next peg (including
    the battery reached at its own `end`), the whole current component is
    abandoned, its remaining siblings included.
4.  Otherwise the walk recurses into the component.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..board.board import Board, PlacedComponent
from ..board.point import Point
from ..components.kinds import is_resistive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosedLoop:
    """
    One closed path starting at the battery. `forward[i]` is True when the loop
    runs through `path[i]` from its placement `start` to its `end`.
    """
    path: Tuple[PlacedComponent, ...]
    forward: Tuple[bool, ...]
    resistor_count: int

    @property
    def is_short(self) -> bool:
        return self.resistor_count == 0

    @property
    def root(self) -> PlacedComponent:
        return self.path[0]

    def members(self) -> List[Tuple[PlacedComponent, bool]]:
        return list(zip(self.path, self.forward))


@dataclass(frozen=True)
class Exploration:
    """
    Everything one battery's walk found: the closed loops in discovery order and
    every component entered, in first-visit order with the battery first.
    """
    root: PlacedComponent
    loops: Tuple[ClosedLoop, ...]
    touched: Tuple[PlacedComponent, ...]

    @property
    def has_short(self) -> bool:
        return any(loop.is_short for loop in self.loops)


def traversal_directions(path: Tuple[PlacedComponent, ...]) -> Tuple[bool, ...]:
    """Chains positions from the root's `start` to decide each member's direction."""
    directions = []
    position = path[0].start
    for placed in path:
        forward = position == placed.start
        directions.append(forward)
        position = placed.end if forward else placed.start
    return tuple(directions)


def explore(board: Board, root: PlacedComponent) -> Exploration:
    """Finds every closed loop through `root`, starting from its `end` peg."""
    loops: List[ClosedLoop] = []
    touched: Dict[PlacedComponent, None] = {root: None}

    def visit(component: PlacedComponent, position: Point, path: Tuple[PlacedComponent, ...], resistors: int):
        if not component.owner.is_closed:
            return

        path = path + (component,)
        touched.setdefault(component, None)
        if is_resistive(component.kind):
            resistors += 1

        next_position = component.other_end(position)
        peg = board.get_peg(next_position)
        if peg is None:
            return

        for candidate in list(peg.components):
            if candidate is component:
                continue

            if candidate is root and next_position == root.start:
                loop = ClosedLoop(path=path, forward=traversal_directions(path), resistor_count=resistors)
                logger.debug(
                    f"Closed {'short' if loop.is_short else 'solvable'} loop through "
                    f"{[p.element_name for p in path]}."
                )
                loops.append(loop)
                if loop.is_short:
                    break
            elif any(candidate is member for member in path):
                return
            else:
                visit(candidate, next_position, path, resistors)

    start_peg = board.get_peg(root.end)
    if start_peg is not None:
        for component in list(start_peg.components):
            if component is not root:
                visit(component, root.end, (root,), 0)

    return Exploration(root=root, loops=tuple(loops), touched=tuple(touched))
