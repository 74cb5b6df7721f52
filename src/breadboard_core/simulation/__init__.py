# src/breadboard_core/simulation/__init__.py
from .discovery import ClosedLoop, Exploration, explore, traversal_directions
from .exceptions import TopologyInconsistencyError
from .feedback import FeedbackListener, LoggingFeedback
from .ledger import CircuitOutcome, CircuitPass, CircuitRecord, ComponentStatus, Reading, read_back
from .netlist_builder import NetlistBuilder, node_name, sense_source_name

__all__ = [
    "explore",
    "traversal_directions",
    "ClosedLoop",
    "Exploration",
    "CircuitPass",
    "CircuitRecord",
    "CircuitOutcome",
    "ComponentStatus",
    "Reading",
    "read_back",
    "NetlistBuilder",
    "node_name",
    "sense_source_name",
    "FeedbackListener",
    "LoggingFeedback",
    "TopologyInconsistencyError",
]
