# src/breadboard_core/layout/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# The classes in this module are the intermediate representation passed from
# the LayoutParser to the LayoutBuilder. They are frozen so a parsed layout can
# be built more than once.

@dataclass(frozen=True)
class ParsedComponentPlacement:
    """One component entry of a layout file."""
    instance_id: str
    component_type: str
    start: Tuple[int, int]
    end: Tuple[int, int]
    raw_parameters_dict: Dict[str, Any]
    closed: Optional[bool]
    source_yaml_path: Path

@dataclass(frozen=True)
class ParsedLayout:
    """Top-level IR of a layout file."""
    source_yaml_path: Path
    num_rows: Optional[int] = None
    num_cols: Optional[int] = None
    components: List[ParsedComponentPlacement] = field(default_factory=list)
