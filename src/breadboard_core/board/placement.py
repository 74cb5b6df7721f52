# src/breadboard_core/board/placement.py
"""
Footprint legality checks for placing straight components on the board.

A footprint is the straight, axis-aligned run of pegs from a component's
`start` to its `end`. Its two endpoints are electrical contacts that other
components may share; its interior pegs are covered by the component body and
become `blocked` once it is placed.
"""
import logging

from .board import Board
from .point import Direction, Point, footprint, interior

logger = logging.getLogger(__name__)


def lines_overlap(start_a: Point, end_a: Point, start_b: Point, end_b: Point) -> bool:
    """
    True if segment B, re-oriented to start at A's start when it does not
    already, extends in the same direction as segment A along either axis.

    Only meaningful when both segments share the peg at `start_a`.
    """
    start_c, end_c = start_b, end_b
    if start_a != start_b:
        start_c, end_c = end_b, start_b

    return (
        (end_c.x > start_c.x and end_a.x > start_a.x)
        or (end_c.x < start_c.x and end_a.x < start_a.x)
        or (end_c.y > start_c.y and end_a.y > start_a.y)
        or (end_c.y < start_c.y and end_a.y < start_a.y)
    )


class PlacementValidator:
    """Answers whether a footprint of a given length may be occupied on a `Board`."""

    def __init__(self, board: Board):
        self.board = board

    def is_slot_free(self, start: Point, end: Point, length: int) -> bool:
        """
        Returns False if the footprint from `start` to `end` may not be occupied.

        The footprint is rejected when:
        1. it is not a straight axis-aligned run of exactly `length` cells, or
           either endpoint is off the board;
        2. a component already attached at `start` extends in the same direction;
        3. `length > 1` and an interior peg already has a component attached;
        4. any footprint peg is blocked;
        5. a component attached to one footprint peg has an endpoint on another.
        """
        cells = footprint(start, end)
        if cells is None or length < 1 or len(cells) - 1 != length:
            return False
        if not self.board.contains(start) or not self.board.contains(end):
            return False

        for placed in self.board.get_peg(start).components:
            if lines_overlap(start, end, placed.start, placed.end):
                return False

        if length > 1:
            for point in cells[1:-1]:
                peg = self.board.get_peg(point)
                if peg is None or not peg.is_empty:
                    return False

        for point_a in cells:
            peg_a = self.board.get_peg(point_a)
            if peg_a is not None and peg_a.blocked:
                return False

            for point_b in cells:
                if point_b == point_a:
                    continue
                peg_b = self.board.get_peg(point_b)
                if peg_b is None:
                    return False
                for placed in peg_b.components:
                    if placed.start == point_a or placed.end == point_a:
                        return False

        return True

    def get_free_component_slots(self, start: Point, length: int) -> int:
        """
        Counts the axis directions from `start` in which a footprint of `length`
        would be free.
        """
        free_slots = 0
        for direction in Direction:
            end = direction.end_from(start, length)
            if self.board.contains(end) and self.is_slot_free(start, end, length):
                free_slots += 1
        return free_slots

    def block_pegs(self, start: Point, end: Point, block: bool):
        """Sets `blocked` on the interior pegs of the footprint; endpoints stay free."""
        for point in interior(start, end):
            self.board.block_peg(point, block)
