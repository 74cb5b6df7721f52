# src/breadboard_core/board/__init__.py
from .board import Board, PlacedComponent
from .exceptions import PlacementRejectedError
from .peg import Peg
from .placement import PlacementValidator, lines_overlap
from .point import Direction, Point, footprint, interior

__all__ = [
    "Point",
    "Direction",
    "footprint",
    "interior",
    "Peg",
    "Board",
    "PlacedComponent",
    "PlacementValidator",
    "PlacementRejectedError",
    "lines_overlap",
]
