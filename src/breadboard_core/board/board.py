# src/breadboard_core/board/board.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, TYPE_CHECKING

from ..constants import DEFAULT_NUM_COLS, DEFAULT_NUM_ROWS
from .peg import Peg
from .point import Point

if TYPE_CHECKING:
    from ..components.capabilities import ICircuitComponent

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PlacedComponent:
    """
    One component instance occupying the board.

    `start` and `end` are the footprint endpoints in placement order; they never
    change after placement. `serial` is unique on the board and gives the
    component its solver element name. `active_circuit` and `active_short`
    remember which feedback the component last triggered, so the feedback fires
    once per state change rather than once per pass.

    Identity semantics: two placements of the same owner are different objects.
    """
    owner: ICircuitComponent
    start: Point
    end: Point
    serial: int
    active_circuit: bool = field(default=False)
    active_short: bool = field(default=False)

    @property
    def element_name(self) -> str:
        """Board-unique name used for this component's solver elements and mid node."""
        return f"{self.owner.name}#{self.serial}"

    @property
    def kind(self):
        return self.owner.kind

    def other_end(self, point: Point) -> Point:
        """The endpoint opposite `point`; `end` when `point` is neither endpoint."""
        return self.start if point == self.end else self.end

    def __repr__(self) -> str:
        return f"PlacedComponent('{self.element_name}', {self.start} -> {self.end})"


class Board:
    """
    The fixed `num_rows x num_cols` peg lattice and the components placed on it.

    Invariant: every placed component is attached to exactly the pegs at its
    `start` and `end`. `generation` increases by one per simulation pass.
    """

    def __init__(self, num_rows: int = DEFAULT_NUM_ROWS, num_cols: int = DEFAULT_NUM_COLS):
        if num_rows <= 0 or num_cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {num_rows} x {num_cols}.")
        self.num_rows: int = num_rows
        self.num_cols: int = num_cols
        self.generation: int = 0
        self.components: List[PlacedComponent] = []
        self._pegs: Dict[Point, Peg] = {
            Point(x, y): Peg(Point(x, y)) for y in range(num_rows) for x in range(num_cols)
        }
        self._next_serial: int = 1
        logger.debug(f"Board created with {num_rows} x {num_cols} pegs.")

    def contains(self, point: Point) -> bool:
        return 0 <= point.x < self.num_cols and 0 <= point.y < self.num_rows

    def get_peg(self, point: Point) -> Optional[Peg]:
        return self._pegs.get(point)

    @property
    def pegs(self) -> Iterator[Peg]:
        return iter(self._pegs.values())

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def place(self, owner: ICircuitComponent, start: Point, end: Point) -> PlacedComponent:
        """
        Registers a new placement and attaches it to both endpoint pegs.

        Raises:
            ValueError: If either endpoint lies outside the board, or they coincide.
        """
        if start == end:
            raise ValueError(f"A component cannot start and end on the same peg {start}.")
        for point in (start, end):
            if not self.contains(point):
                raise ValueError(f"Point {point} lies outside the {self.num_cols} x {self.num_rows} board.")

        placed = PlacedComponent(owner=owner, start=start, end=end, serial=self._next_serial)
        self._next_serial += 1
        self.components.append(placed)
        self._pegs[start].attach(placed)
        self._pegs[end].attach(placed)
        logger.debug(f"Placed {placed!r}.")
        return placed

    def remove(self, placed: PlacedComponent):
        """Detaches `placed` from its pegs and the component list."""
        for point in (placed.start, placed.end):
            peg = self._pegs.get(point)
            if peg is None or not peg.detach(placed):
                logger.error(f"Failed to remove {placed!r} from peg {point}.")
        try:
            self.components.remove(placed)
        except ValueError:
            logger.error(f"{placed!r} was not registered on the board.")
        logger.debug(f"Removed {placed!r}.")

    def find(self, owner: ICircuitComponent, start: Point) -> Optional[PlacedComponent]:
        """The placement of `owner` attached to the peg at `start`, if any."""
        peg = self._pegs.get(start)
        if peg is None:
            return None
        for placed in peg.components:
            if placed.owner is owner:
                return placed
        return None

    def block_peg(self, point: Point, block: bool):
        peg = self._pegs.get(point)
        if peg is not None:
            peg.blocked = block

    def reset(self):
        """Clears all placements and blocked flags. The generation counter keeps running."""
        for peg in self._pegs.values():
            peg.reset()
        self.components.clear()
        logger.debug("Board reset.")
