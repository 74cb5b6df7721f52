# src/breadboard_core/components/capabilities.py
"""
Defines the contracts the lab relies on, using `typing.Protocol`.

The lab, discovery and the netlist builder talk to components only through
these protocols, never through a concrete base class, so any object with the
right attributes can be placed on the board.

- ICircuitComponent: what every placeable component must expose (identity,
  electrical kind, open/closed state) and the feedback it receives after each
  simulation pass.
- IDynamic: components whose state evolves over time and may need the board
  to be re-simulated.
- ILabAware: components that want a handle on the lab they were placed in.
"""

import logging
from typing import Any, Protocol, runtime_checkable

from .kinds import ElectricalKind

logger = logging.getLogger(__name__)


@runtime_checkable
class ICircuitComponent(Protocol):
    """
    The component contract consumed by the lab.

    `is_closed == False` excludes the component from traversal for the pass
    (an open switch). The `set_*` methods are pushed by the lab at the end of
    every pass; `is_forward` is True when the loop runs through the component
    from its placement `start` to its `end`.
    """
    name: str

    @property
    def kind(self) -> ElectricalKind:
        ...

    @property
    def is_closed(self) -> bool:
        ...

    def set_active(self, is_active: bool, is_forward: bool) -> None:
        ...

    def set_short_circuit(self, is_short: bool, is_forward: bool) -> None:
        ...

    def set_voltage(self, voltage: float) -> None:
        ...

    def set_current(self, current: float) -> None:
        ...


@runtime_checkable
class IDynamic(Protocol):
    """
    A component whose electrical state can change between passes.

    `update_state` is polled by `CircuitLab.update()` with the number of
    solvable circuits found by the last pass and returns True if the board
    must be simulated again.
    """
    def update_state(self, num_active_circuits: int) -> bool:
        ...


@runtime_checkable
class ILabAware(Protocol):
    """A component that is told which lab it has been placed in."""
    def attach_lab(self, lab: Any) -> None:
        ...
