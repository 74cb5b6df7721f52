# src/breadboard_core/board/peg.py
from __future__ import annotations

import logging
from typing import List, TYPE_CHECKING

from .point import Point

if TYPE_CHECKING:
    from .board import PlacedComponent

logger = logging.getLogger(__name__)


class Peg:
    """
    One node of the board lattice.

    `components` holds, in attachment order, every placed component with an
    endpoint on this peg. `blocked` is set while the peg lies under the interior
    of some longer component's footprint.
    """

    def __init__(self, point: Point):
        self.point: Point = point
        self.blocked: bool = False
        self.components: List[PlacedComponent] = []

    @property
    def is_empty(self) -> bool:
        return not self.components

    def attach(self, placed: PlacedComponent):
        self.components.append(placed)

    def detach(self, placed: PlacedComponent) -> bool:
        """Removes `placed` by identity. Returns False if it was not attached here."""
        for idx, existing in enumerate(self.components):
            if existing is placed:
                del self.components[idx]
                return True
        return False

    def reset(self):
        self.blocked = False
        self.components.clear()

    def __repr__(self) -> str:
        return f"Peg({self.point}, blocked={self.blocked}, components={len(self.components)})"
