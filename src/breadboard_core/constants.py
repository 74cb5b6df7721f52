# --- src/breadboard_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Board Geometry ---

#: Lattice size of the reference lab table (9 x 9 = 81 pegs).
DEFAULT_NUM_ROWS: int = 9
DEFAULT_NUM_COLS: int = 9

# --- Component Defaults ---

#: EMF of a freshly dispensed battery, in volts.
DEFAULT_BATTERY_EMF_VOLTS: float = 10.0

#: Resistance of the high-resistance bulb, in ohms.
DEFAULT_BULB_RESISTANCE_OHMS: float = 5000.0

#: Resistance of a plain resistor when none is given, in ohms.
DEFAULT_RESISTOR_OHMS: float = 10000.0

#: Characteristic impedance given to the lossless transmission line that stands in
#: for a conductor. It has no influence on the DC operating point.
DEFAULT_LINE_IMPEDANCE_OHMS: float = 50.0

#: Currents at or below this value are treated as "no current" by component feedback.
#: Value: 1e-7 A (0.1 uA).
SIGNIFICANT_CURRENT_AMPS: float = 1.0e-7

# --- Solver Conventions ---

#: Name of the global reference node in every generated netlist.
GROUND_NODE: str = "0"

#: Prefix of the zero-valued series source that reports a component's branch current.
SENSE_SOURCE_PREFIX: str = "V"

logger.debug("Defined core constants: board size, component defaults, solver conventions")
