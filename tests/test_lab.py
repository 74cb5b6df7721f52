# tests/test_lab.py
import pytest

from breadboard_core import (
    Battery, Bulb, CircuitLab, CircuitOutcome, ComponentStatus, FixedResistor, LabConfig, Point, Switch, Wire,
)


def placement(lab, component):
    for placed in lab.board.components:
        if placed.owner is component:
            return placed
    return None


class TestSingleLoop:

    def test_square_loop_is_solved(self, lab, square_loop, feedback, spy_solver):
        battery, resistor, wire, closing = square_loop

        record, = lab.last_pass.records
        assert record.outcome is CircuitOutcome.SOLVED
        assert lab.num_active_circuits == 1
        assert len(spy_solver.calls) == 1
        assert feedback.events == [("completed", "B")]

        for component in square_loop:
            assert component.is_active
            assert component.is_forward
            assert not component.is_short_circuit

    def test_square_loop_readings(self, square_loop):
        battery, resistor, wire, closing = square_loop

        assert resistor.current == pytest.approx(1e-3)
        assert wire.current == pytest.approx(1e-3)
        assert closing.current == pytest.approx(1e-3)
        assert battery.current == pytest.approx(-1e-3)

        # Shifted so the lowest node reads zero.
        assert battery.voltage == pytest.approx(0.0)
        assert resistor.voltage == pytest.approx(0.0)
        assert wire.voltage == pytest.approx(10.0)
        assert closing.voltage == pytest.approx(10.0)

    def test_battery_with_resistor_across_its_terminals(self, lab, feedback):
        battery = Battery("B")
        resistor = FixedResistor("R", resistance=10000.0)
        lab.add_component(battery, Point(0, 0), Point(0, 1))
        lab.add_component(resistor, Point(0, 0), Point(0, 1))

        assert feedback.events == [("completed", "B")]
        assert resistor.is_active and not resistor.is_forward
        assert resistor.voltage == pytest.approx(10.0)
        assert resistor.current == pytest.approx(1e-3)
        assert battery.voltage == pytest.approx(0.0)

    def test_completion_fires_once(self, lab, square_loop, feedback):
        lab.place_component(Wire("Spare"), Point(5, 5), Point(6, 5))
        lab.simulate_circuit()
        assert feedback.events == [("completed", "B")]

    def test_open_loop_stays_inactive(self, lab, feedback, spy_solver):
        battery = Battery("B")
        lab.place_component(battery, Point(0, 0), Point(0, 1))
        lab.place_component(FixedResistor("R"), Point(0, 1), Point(1, 1))

        record, = lab.last_pass.records
        assert record.outcome is CircuitOutcome.OPEN
        assert not battery.is_active
        assert feedback.events == []
        assert spy_solver.calls == []


class TestShortCircuit:

    def test_conductor_loop_is_a_short(self, lab, make_short_square, feedback, spy_solver):
        battery, wires = make_short_square(lab)

        assert feedback.events == [("short", "B")]
        assert spy_solver.calls == []
        assert battery.is_short_circuit
        assert all(w.is_short_circuit and w.is_forward for w in wires)
        record, = lab.last_pass.records
        assert record.outcome is CircuitOutcome.SHORT
        assert lab.last_pass.status_of(placement(lab, battery)) is ComponentStatus.SHORT
        assert lab.num_active_circuits == 0

    def test_wire_across_battery_is_traversed_backward(self, lab):
        battery, wire = Battery("B"), Wire("W")
        lab.add_component(battery, Point(0, 0), Point(0, 1))
        lab.add_component(wire, Point(0, 0), Point(0, 1))

        assert wire.is_short_circuit
        assert not wire.is_forward

    def test_short_persists_until_a_resistor_is_inserted(self, lab, make_short_square, feedback):
        battery, wires = make_short_square(lab)

        lab.place_component(Wire("Spare"), Point(5, 5), Point(6, 5))
        assert battery.is_short_circuit
        assert feedback.events == [("short", "B")]

        lab.remove_component(wires[0], Point(0, 1))
        assert not battery.is_short_circuit
        assert not any(w.is_short_circuit for w in wires)

        resistor = FixedResistor("R")
        lab.place_component(resistor, Point(0, 1), Point(1, 1))
        assert feedback.events == [("short", "B"), ("completed", "B")]
        assert resistor.current == pytest.approx(1e-3)

    def test_battery_in_a_resistive_and_a_short_loop_is_only_short(self, lab, feedback):
        battery, resistor = Battery("B"), FixedResistor("R")
        loop_wires = [Wire(f"W{i}") for i in (1, 2)]
        short_wires = [Wire(f"W{i}") for i in (3, 4, 5)]
        lab.place_component(battery, Point(1, 1), Point(1, 2))
        lab.place_component(short_wires[0], Point(1, 2), Point(0, 2))
        lab.place_component(short_wires[1], Point(0, 2), Point(0, 1))
        lab.place_component(short_wires[2], Point(0, 1), Point(1, 1))
        lab.place_component(resistor, Point(1, 2), Point(2, 2))
        lab.place_component(loop_wires[0], Point(2, 2), Point(2, 1))
        lab.place_component(loop_wires[1], Point(2, 1), Point(1, 1))

        assert feedback.events == [("short", "B")]
        assert battery.is_short_circuit and not battery.is_active
        assert all(w.is_short_circuit and not w.is_active for w in short_wires)
        assert not any(c.is_active or c.is_short_circuit for c in [resistor] + loop_wires)
        assert lab.last_pass.status_of(placement(lab, resistor)) is ComponentStatus.INACTIVE
        assert lab.num_active_circuits == 0

    def test_solver_failure_is_reported_as_short(self, lab, square_loop, feedback):
        battery, resistor, wire, closing = square_loop

        # A second conductor parallel to the closing wire makes a loop of ideal branches.
        lab.add_component(Wire("Parallel"), Point(1, 0), Point(0, 0))

        record = lab.last_pass.records[0]
        assert record.outcome is CircuitOutcome.SOLVER_FAILED
        assert feedback.events == [("completed", "B"), ("short", "B")]
        assert lab.last_pass.status_of(placement(lab, battery)) is ComponentStatus.INACTIVE
        assert not any(c.is_active for c in square_loop)

    def test_solver_failure_notifies_every_pass(self, lab, square_loop, feedback):
        lab.add_component(Wire("Parallel"), Point(1, 0), Point(0, 0))
        lab.simulate_circuit()
        assert feedback.events.count(("short", "B")) == 2


class TestBoardChanges:

    def test_removal_deactivates_the_loop(self, lab, square_loop, spy_solver):
        battery, resistor, wire, closing = square_loop
        lab.remove_component(wire, Point(1, 1))

        assert not any(c.is_active for c in square_loop)
        assert lab.num_active_circuits == 0
        assert len(spy_solver.calls) == 1
        assert placement(lab, wire) is None

    def test_removing_an_unknown_placement_still_deactivates(self, lab, square_loop):
        battery, resistor, wire, closing = square_loop
        stray = Wire("Stray")
        stray.set_active(True, True)

        lab.remove_component(stray, Point(7, 7))

        assert not stray.is_active
        assert len(lab.board.components) == 4
        assert resistor.is_active

    def test_independent_circuits_are_solved_separately(self, lab, make_square, feedback):
        first = make_square(lab, origin=(0, 0), prefix="A")
        second = make_square(lab, origin=(4, 4), prefix="C", resistance=5000.0)

        assert lab.num_active_circuits == 2
        assert [r.outcome for r in lab.last_pass.records] == [CircuitOutcome.SOLVED, CircuitOutcome.SOLVED]
        assert first[1].current == pytest.approx(1e-3)
        assert second[1].current == pytest.approx(2e-3)
        assert feedback.events == [("completed", "AB"), ("completed", "CB")]

    def test_changing_one_circuit_leaves_the_other_unchanged(self, lab, make_square):
        first = make_square(lab, origin=(0, 0), prefix="A")
        second = make_square(lab, origin=(4, 4), prefix="C", resistance=5000.0)
        before = [(c.voltage, c.current) for c in first]

        lab.remove_component(second[1], Point(4, 5))
        replacement = FixedResistor("CR2", resistance=1.0)
        lab.place_component(replacement, Point(4, 5), Point(5, 5))

        assert lab.num_active_circuits == 2
        assert replacement.current == pytest.approx(10.0)
        for component, (voltage, current) in zip(first, before):
            assert component.voltage == pytest.approx(voltage)
            assert component.current == pytest.approx(current)

    def test_every_component_has_exactly_one_status(self, lab, square_loop, make_short_square):
        make_short_square(lab, origin=(4, 4), prefix="S")
        lab.place_component(Wire("Loose"), Point(8, 0), Point(8, 1))

        statuses = {p.owner.name: lab.last_pass.status_of(p) for p in lab.board.components}
        assert statuses["R"] is ComponentStatus.SOLVABLE
        assert statuses["SB"] is ComponentStatus.SHORT
        assert statuses["SW2"] is ComponentStatus.SHORT
        assert statuses["Loose"] is ComponentStatus.INACTIVE
        assert set(statuses.values()) <= set(ComponentStatus)

        flags = {
            ComponentStatus.SOLVABLE: (True, False),
            ComponentStatus.SHORT: (False, True),
            ComponentStatus.INACTIVE: (False, False),
        }
        for placed in lab.board.components:
            owner = placed.owner
            assert (owner.is_active, owner.is_short_circuit) == flags[statuses[owner.name]], owner.name

    def test_batteries_in_series_share_one_circuit(self, lab, feedback):
        b1, b2 = Battery("B1"), Battery("B2")
        resistor = FixedResistor("R")
        lab.place_component(b1, Point(0, 0), Point(0, 1))
        lab.place_component(b2, Point(0, 1), Point(1, 1))
        lab.place_component(resistor, Point(1, 1), Point(1, 0))
        lab.place_component(Wire("W"), Point(1, 0), Point(0, 0))

        assert len(lab.last_pass.records) == 1
        assert lab.num_active_circuits == 1
        assert resistor.current == pytest.approx(2e-3)
        assert b1.is_active and b2.is_active
        assert feedback.events == [("completed", "B1")]

    def test_switch_toggle_resimulates(self, lab, make_square, feedback):
        switch = Switch("S")
        battery, resistor, wire, _ = make_square(lab, closing=switch)
        assert not resistor.is_active
        assert feedback.events == []

        switch.toggle()
        assert switch.is_closed
        assert resistor.is_active
        assert feedback.events == [("completed", "B")]

        switch.toggle()
        assert not resistor.is_active
        assert not battery.is_active

    def test_generation_advances_once_per_pass(self, lab, square_loop):
        generation = lab.board.generation
        lab.simulate_circuit()
        lab.simulate_circuit()
        assert lab.board.generation == generation + 2
        assert lab.last_pass.generation == lab.board.generation


class ReentrantBulb(Bulb):
    """Places an extra wire from inside the first pass that activates it."""

    def __init__(self, name, **kwargs):
        super().__init__(name, **kwargs)
        self.extra = Wire("Extra")
        self.inner_results = None

    def set_active(self, is_active, is_forward):
        super().set_active(is_active, is_forward)
        if is_active and self.inner_results is None:
            self.inner_results = (
                self.lab.add_component(self.extra, Point(6, 6), Point(7, 6)),
                self.lab.simulate_circuit(),
            )


class TestReentrancy:

    def test_requests_during_a_pass_are_queued(self, lab):
        bulb = ReentrantBulb("Bulb")
        lab.place_component(Battery("B"), Point(0, 0), Point(0, 1))
        lab.place_component(bulb, Point(0, 1), Point(1, 1))
        lab.place_component(Wire("W1"), Point(1, 1), Point(1, 0))
        generation = lab.board.generation

        lab.place_component(Wire("W2"), Point(1, 0), Point(0, 0))

        assert bulb.inner_results == (None, None)
        assert lab.board.generation == generation + 2
        assert lab.board.find(bulb.extra, Point(6, 6)) is not None
        assert bulb.is_lit

    def test_reset_during_a_pass_is_deferred(self, lab, square_loop):
        class Resetter(Wire):
            def set_active(self, is_active, is_forward):
                super().set_active(is_active, is_forward)
                if is_active:
                    self.lab.reset()

        lab.place_component(Battery("B2"), Point(4, 4), Point(4, 5))
        lab.place_component(FixedResistor("R2"), Point(4, 5), Point(5, 5))
        lab.place_component(Wire("W3"), Point(5, 5), Point(5, 4))
        lab.place_component(Resetter("Trigger"), Point(5, 4), Point(4, 4))

        assert lab.board.components == []


class Ticker:
    """A dynamic component that reports one change."""

    def __init__(self):
        self.seen = []
        self.pending = True

    def update_state(self, num_active_circuits):
        self.seen.append(num_active_circuits)
        changed, self.pending = self.pending, False
        return changed


class TestLabControls:

    def test_update_resimulates_on_change(self, lab, square_loop):
        assert lab.update() is False

        ticker = Ticker()
        lab.register_dynamic_component(ticker)
        generation = lab.board.generation

        assert lab.update() is True
        assert lab.board.generation == generation + 1
        assert lab.update() is False
        assert lab.board.generation == generation + 1
        assert ticker.seen == [1, 1]

        lab.unregister_dynamic_component(ticker)
        assert lab.update() is False

    def test_reset_clears_board_without_simulating(self, lab, square_loop):
        battery, resistor, _, _ = square_loop
        generation = lab.board.generation

        lab.reset()

        assert lab.board.components == []
        assert lab.board.generation == generation
        assert lab.num_active_circuits == 0
        assert lab.last_pass is None
        assert not resistor.is_active
        assert resistor.current == 0.0

    def test_labels_follow_the_lab_toggle(self, lab, square_loop):
        battery, resistor, _, _ = square_loop
        assert not resistor.labels_visible

        assert lab.toggle_labels() is True
        assert resistor.labels_visible
        assert battery.labels_visible
        assert resistor.labels()["current"] == "1mA"

        assert lab.toggle_labels() is False
        assert not resistor.labels_visible

    def test_preload_solver(self, spy_solver):
        lab = CircuitLab(config=LabConfig(preload_solver=True), solver=spy_solver)
        assert len(spy_solver.calls) == 1
        assert lab.preload_solver().voltage("out") == pytest.approx(2.0 / 3.0)


class TestCreateComponent:

    def test_defaults_come_from_the_config(self):
        lab = CircuitLab(config=LabConfig(battery_emf=9.0, bulb_resistance=2500.0, significant_current=1e-3))
        battery = lab.create_component("Battery", "B")
        bulb = lab.create_component("Bulb", "L")

        assert isinstance(battery, Battery)
        assert battery.emf == pytest.approx(9.0)
        assert bulb.resistance == pytest.approx(2500.0)
        assert bulb.significant_current == pytest.approx(1e-3)

    def test_parameters_override_defaults(self, lab):
        assert lab.create_component("Battery", "B", {"emf": "1.5 V"}).emf == pytest.approx(1.5)
        assert lab.create_component("Resistor", "R", {"resistance": "2 kohm"}).resistance == pytest.approx(2000.0)

    def test_unknown_type_and_parameter(self, lab):
        with pytest.raises(KeyError):
            lab.create_component("Capacitor", "C")
        with pytest.raises(ValueError):
            lab.create_component("Wire", "W", {"resistance": 1.0})
