# src/breadboard_core/lab.py
"""
The `CircuitLab`: one breadboard table and the simulation driven from it.

Every placement, removal or state change re-simulates the whole board from
scratch:

1.  A new `CircuitPass` is opened with the next board generation.
2.  Batteries are explored in placement order. A battery already found in an
    earlier battery's circuit this pass is skipped, so the first-placed
    battery owns a shared circuit.
3.  Each exploration is stamped in discovery order. A battery found in a dead
    short switches its loop to short feedback; a battery in a solvable loop
    has its netlist solved and the results distributed; any other battery has
    its feedback flags cleared.
4.  Components found in no loop are deactivated; components found in no short
    have their short feedback cleared.

Requests that arrive while a pass is running (from a component callback, for
example) are queued. Once the pass ends, queued board changes are applied in
arrival order and exactly one further pass runs.
"""
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional

from .board.board import Board, PlacedComponent
from .board.exceptions import PlacementRejectedError
from .board.placement import PlacementValidator
from .board.point import Point
from .components.base import COMPONENT_REGISTRY, CircuitComponent
from .components.capabilities import ICircuitComponent, IDynamic, ILabAware
from .components.elements import Battery, Bulb
from .components.kinds import is_emf_source
from .config import LabConfig
from .simulation.discovery import explore
from .simulation.feedback import FeedbackListener, LoggingFeedback
from .simulation.ledger import CircuitOutcome, CircuitPass, CircuitRecord, read_back
from .simulation.netlist_builder import NetlistBuilder
from .solver.elements import Resistor, VoltageSource
from .solver.exceptions import SolverError
from .solver.netlist import Netlist
from .solver.operating_point import DCSolver, OperatingPoint, OperatingPointResult, SparseDCSolver

logger = logging.getLogger(__name__)


class CircuitLab:
    """Owns the board, validates placements and runs simulation passes."""

    def __init__(
        self,
        config: Optional[LabConfig] = None,
        solver: Optional[DCSolver] = None,
        feedback: Optional[FeedbackListener] = None,
    ):
        self.config: LabConfig = config or LabConfig()
        self.board = Board(self.config.num_rows, self.config.num_cols)
        self.validator = PlacementValidator(self.board)
        self.netlist_builder = NetlistBuilder(line_impedance=self.config.line_impedance)
        self.solver: DCSolver = solver or SparseDCSolver()
        self.feedback: FeedbackListener = feedback or LoggingFeedback()

        self.show_labels: bool = False
        self.num_active_circuits: int = 0
        self.last_pass: Optional[CircuitPass] = None

        self._dynamic_components: List[IDynamic] = []
        self._simulating: bool = False
        self._resimulate: bool = False
        self._pending: Deque[Callable[[], Any]] = deque()

        logger.info(f"CircuitLab initialized with a {self.config.num_cols} x {self.config.num_rows} board.")
        if self.config.preload_solver:
            self.preload_solver()

    # --- Solver warm-up ---

    def preload_solver(self) -> OperatingPointResult:
        """Solves a small voltage divider once so the first real pass is not the first solve."""
        netlist = Netlist(name="preload", elements=[
            VoltageSource("V1", "in", "0", 1.0),
            Resistor("R1", "in", "out", 1.0e4),
            Resistor("R2", "out", "0", 2.0e4),
        ])
        result = OperatingPoint(netlist, self.solver).run()
        logger.debug(f"Solver preloaded: V(out) = {result.voltage('out'):.4f} V")
        return result

    # --- Component factory ---

    def create_component(self, type_str: str, name: str, parameters: Optional[Dict[str, Any]] = None) -> CircuitComponent:
        """
        Instantiates a registered component type, filling battery EMF and bulb
        resistance from the lab configuration when not given.

        Raises:
            KeyError: If `type_str` is not a registered component type.
        """
        try:
            cls = COMPONENT_REGISTRY[type_str]
        except KeyError:
            raise KeyError(
                f"Unknown component type '{type_str}'. Registered types: {sorted(COMPONENT_REGISTRY)}."
            ) from None

        merged: Dict[str, Any] = {}
        if issubclass(cls, Battery):
            merged["emf"] = self.config.battery_emf
        if issubclass(cls, Bulb):
            merged["resistance"] = self.config.bulb_resistance
        merged.update(parameters or {})
        return cls.from_parameters(name, merged, significant_current=self.config.significant_current)

    # --- Placement API ---

    def is_slot_free(self, start: Point, end: Point, length: int) -> bool:
        return self.validator.is_slot_free(start, end, length)

    def get_free_component_slots(self, start: Point, length: int) -> int:
        return self.validator.get_free_component_slots(start, length)

    def block_pegs(self, start: Point, end: Point, block: bool):
        self.validator.block_pegs(start, end, block)

    def add_component(self, component: ICircuitComponent, start: Point, end: Point) -> Optional[PlacedComponent]:
        """
        Puts `component` on the board between `start` and `end` without checking
        the footprint, blocks its interior pegs and re-simulates.

        Returns the new placement, or None if the component does not satisfy
        `ICircuitComponent` or the request was queued behind a running pass.
        """
        if not isinstance(component, ICircuitComponent):
            logger.error(f"Cannot add '{component!r}': it is not a circuit component.")
            return None
        if self._simulating:
            logger.debug(f"Queueing placement of '{component.name}' until the running pass ends.")
            self._pending.append(lambda: self._attach(component, start, end))
            return None

        placed = self._attach(component, start, end)
        self.simulate_circuit()
        return placed

    def place_component(self, component: ICircuitComponent, start: Point, end: Point) -> Optional[PlacedComponent]:
        """
        Like `add_component`, but first checks the footprint.

        Raises:
            PlacementRejectedError: If `is_slot_free` refuses the footprint. The
                board is left untouched.
        """
        length = getattr(component, "length", 1)
        if not self.is_slot_free(start, end, length):
            raise PlacementRejectedError(
                component_name=getattr(component, "name", repr(component)),
                start=start, end=end, length=length,
            )
        return self.add_component(component, start, end)

    def remove_component(self, component: ICircuitComponent, start: Point):
        """
        Takes the placement of `component` attached at `start` off the board,
        unblocks its interior, clears the component's feedback flags and re-simulates.
        """
        if self._simulating:
            logger.debug(f"Queueing removal of '{getattr(component, 'name', component)}' until the running pass ends.")
            self._pending.append(lambda: self._detach(component, start))
            return

        self._detach(component, start)
        self.simulate_circuit()

    def _attach(self, component: ICircuitComponent, start: Point, end: Point) -> PlacedComponent:
        placed = self.board.place(component, start, end)
        if isinstance(component, ILabAware):
            component.attach_lab(self)
        self.block_pegs(start, end, True)
        return placed

    def _detach(self, component: ICircuitComponent, start: Point):
        placed = self.board.find(component, start)
        if placed is not None:
            self.board.remove(placed)
            self.block_pegs(placed.start, placed.end, False)
        else:
            logger.warning(f"No placement of '{getattr(component, 'name', component)}' found at {start}.")
        component.set_active(False, False)
        component.set_short_circuit(False, False)

    # --- Lab-wide controls ---

    def toggle_labels(self) -> bool:
        self.show_labels = not self.show_labels
        return self.show_labels

    def reset(self):
        """
        Clears every placement and blocked peg and returns placed components to
        their dispensed feedback state. Does not simulate.
        """
        if self._simulating:
            self._pending.append(self._reset_board)
            return
        self._reset_board()

    def _reset_board(self):
        for placed in list(self.board.components):
            reset_feedback = getattr(placed.owner, "reset_feedback", None)
            if callable(reset_feedback):
                reset_feedback()
        self.board.reset()
        self.num_active_circuits = 0
        self.last_pass = None
        logger.info("Lab reset.")

    def register_dynamic_component(self, component: IDynamic):
        self._dynamic_components.append(component)

    def unregister_dynamic_component(self, component: IDynamic):
        try:
            self._dynamic_components.remove(component)
        except ValueError:
            logger.warning(f"Dynamic component {component!r} was not registered.")

    def update(self) -> bool:
        """
        Polls every registered dynamic component and re-simulates once if any of
        them reports a change. Returns True if a pass was run.
        """
        if not self._dynamic_components:
            return False
        changed = False
        for component in list(self._dynamic_components):
            if component.update_state(self.num_active_circuits):
                changed = True
        if changed:
            self.simulate_circuit()
        return changed

    # --- Simulation ---

    def simulate_circuit(self) -> Optional[CircuitPass]:
        """
        Re-simulates the whole board. Returns the pass, or None if the request was
        folded into a pass that is already running.
        """
        if self._simulating:
            self._resimulate = True
            return None

        self._simulating = True
        try:
            self._run_pass()
            while self._pending or self._resimulate:
                self._resimulate = False
                while self._pending:
                    self._pending.popleft()()
                self._run_pass()
        finally:
            self._simulating = False
        return self.last_pass

    def _run_pass(self):
        circuit_pass = CircuitPass(self.board.next_generation())
        logger.debug(f"Simulation pass {circuit_pass.generation} over {len(self.board.components)} component(s).")

        batteries = [placed for placed in self.board.components if is_emf_source(placed.kind)]
        for battery in batteries:
            if circuit_pass.is_looped(battery):
                continue

            record = circuit_pass.record(explore(self.board, battery), self.netlist_builder)
            for placed, forward in record.activations:
                if not circuit_pass.is_short(placed):
                    placed.owner.set_active(True, forward)

            if circuit_pass.is_short(battery):
                self._apply_short(record, circuit_pass)
            elif circuit_pass.is_looped(battery):
                circuit_pass.num_active_circuits += 1
                self._apply_solution(record, circuit_pass)
            else:
                battery.active_short = False
                battery.active_circuit = False
                record.outcome = CircuitOutcome.OPEN

        for placed in list(self.board.components):
            if not circuit_pass.is_looped(placed):
                placed.owner.set_active(False, False)
        for placed in list(self.board.components):
            if not circuit_pass.is_short(placed):
                placed.owner.set_short_circuit(False, False)

        self.num_active_circuits = circuit_pass.num_active_circuits
        self.last_pass = circuit_pass

    def _apply_short(self, record: CircuitRecord, circuit_pass: CircuitPass):
        battery = record.root
        circuit_pass.mark_short(record)
        for placed in record.touched:
            if circuit_pass.is_short(placed):
                # A shorted component is never also active, even when it closes a resistive loop too.
                forward = circuit_pass.short_forward(placed)
                placed.owner.set_active(False, forward)
                placed.owner.set_short_circuit(True, forward)
            else:
                placed.owner.set_active(False, False)

        if not battery.active_short:
            battery.active_short = True
            battery.active_circuit = False
            self.feedback.short_circuit(battery.owner)

    def _apply_solution(self, record: CircuitRecord, circuit_pass: CircuitPass):
        battery = record.root
        try:
            result = OperatingPoint(record.netlist, self.solver).run()
        except SolverError as e:
            logger.warning(f"Simulation error in circuit '{record.netlist.name}':{e.get_diagnostic_report()}")
            circuit_pass.mark_failed(record)
            battery.active_short = True
            battery.active_circuit = False
            self.feedback.short_circuit(battery.owner)
            for placed in record.touched:
                placed.owner.set_active(False, False)
            return

        record.result = result
        record.readings = read_back(record, result)
        for placed, reading in record.readings.items():
            placed.owner.set_voltage(reading.voltage)
            placed.owner.set_current(reading.current)
        record.outcome = CircuitOutcome.SOLVED

        if not battery.active_circuit:
            battery.active_circuit = True
            battery.active_short = False
            self.feedback.circuit_completed(battery.owner)
