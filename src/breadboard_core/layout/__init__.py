# src/breadboard_core/layout/__init__.py
from .builder import LayoutBuilder
from .exceptions import LayoutParsingError, LayoutSchemaError
from .parser import LayoutParser
from .raw_data import ParsedComponentPlacement, ParsedLayout

__all__ = [
    "LayoutBuilder",
    "LayoutParser",
    "ParsedLayout",
    "ParsedComponentPlacement",
    "LayoutParsingError",
    "LayoutSchemaError",
]
