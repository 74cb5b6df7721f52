# src/breadboard_core/board/point.py
"""
Grid coordinates on the breadboard lattice.

A `Point` is an immutable (column, row) pair. It doubles as the lookup key of
the peg lattice and, through `str()`, as the solver node label of the peg.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class Point:
    """Integer lattice coordinate: `x` is the column, `y` the row."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Direction(Enum):
    """The four axis-aligned directions a footprint can extend in, as (dx, dy) steps."""
    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def step(self) -> Tuple[int, int]:
        return self.value

    def end_from(self, start: Point, length: int) -> Point:
        """The far endpoint of a footprint of `length` cells starting at `start`."""
        dx, dy = self.value
        return start.offset(dx * length, dy * length)


def footprint(start: Point, end: Point) -> Optional[List[Point]]:
    """
    Every lattice cell on the straight run between `start` and `end`, both
    included, ordered by increasing coordinate.

    Returns None for diagonal runs and for `start == end`.
    """
    if start == end:
        return None
    if start.x != end.x and start.y != end.y:
        return None
    if start.x != end.x:
        lo, hi = sorted((start.x, end.x))
        return [Point(x, start.y) for x in range(lo, hi + 1)]
    lo, hi = sorted((start.y, end.y))
    return [Point(start.x, y) for y in range(lo, hi + 1)]


def interior(start: Point, end: Point) -> List[Point]:
    """The cells of a straight run strictly between its two endpoints."""
    cells = footprint(start, end)
    if cells is None:
        return []
    return cells[1:-1]
