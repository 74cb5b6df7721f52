# tests/conftest.py
import pytest

from breadboard_core import (
    CircuitLab, LabConfig, Point, Battery, FixedResistor, Wire,
)
from breadboard_core.solver import SparseDCSolver


class RecordingFeedback:
    """FeedbackListener that remembers every event as (event, battery name)."""
    def __init__(self):
        self.events = []

    def circuit_completed(self, battery):
        self.events.append(("completed", battery.name))

    def short_circuit(self, battery):
        self.events.append(("short", battery.name))


class SpySolver:
    """DCSolver that counts calls and delegates to the sparse solver."""
    def __init__(self):
        self.calls = []
        self._inner = SparseDCSolver()

    def solve(self, netlist):
        self.calls.append(netlist)
        return self._inner.solve(netlist)


@pytest.fixture
def feedback():
    return RecordingFeedback()


@pytest.fixture
def spy_solver():
    return SpySolver()


@pytest.fixture
def lab(feedback, spy_solver):
    return CircuitLab(config=LabConfig(), solver=spy_solver, feedback=feedback)


def build_square_loop(lab, origin=(0, 0), resistance=10000.0, prefix="", closing=None):
    """
    Places a four-component loop on the unit square at `origin`:

        battery  (x, y)     -> (x, y+1)
        resistor (x, y+1)   -> (x+1, y+1)
        wire     (x+1, y+1) -> (x+1, y)
        closing  (x+1, y)   -> (x, y)      (a wire unless given)

    Returns the components in that order.
    """
    x, y = origin
    battery = Battery(f"{prefix}B")
    resistor = FixedResistor(f"{prefix}R", resistance=resistance)
    wire = Wire(f"{prefix}W1")
    closing = closing if closing is not None else Wire(f"{prefix}W2")
    lab.place_component(battery, Point(x, y), Point(x, y + 1))
    lab.place_component(resistor, Point(x, y + 1), Point(x + 1, y + 1))
    lab.place_component(wire, Point(x + 1, y + 1), Point(x + 1, y))
    lab.place_component(closing, Point(x + 1, y), Point(x, y))
    return battery, resistor, wire, closing


def build_short_square(lab, origin=(0, 0), prefix=""):
    """Same square as `build_square_loop`, with a wire in place of the resistor."""
    x, y = origin
    battery = Battery(f"{prefix}B")
    wires = [Wire(f"{prefix}W{i}") for i in range(1, 4)]
    lab.place_component(battery, Point(x, y), Point(x, y + 1))
    lab.place_component(wires[0], Point(x, y + 1), Point(x + 1, y + 1))
    lab.place_component(wires[1], Point(x + 1, y + 1), Point(x + 1, y))
    lab.place_component(wires[2], Point(x + 1, y), Point(x, y))
    return battery, wires


@pytest.fixture
def square_loop(lab):
    return build_square_loop(lab)


@pytest.fixture
def make_square():
    return build_square_loop


@pytest.fixture
def make_short_square():
    return build_short_square
