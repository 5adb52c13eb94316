# --- src/dcsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Geometry ---

#: Distance (design units) within which a point joins a cluster seed.
DEFAULT_CLUSTER_TOLERANCE: float = 15.0

# --- Numerical Constants for Simulation ---

#: Large finite conductance used to approximate ideal voltage sources and DC-shorted
#: inductors in the nodal matrix. Value: 1000 Siemens (1 milli-ohm).
PENALTY_CONDUCTANCE_SIEMENS: float = 1000.0

#: Pivots with a magnitude below this value mark the system as singular.
PIVOT_THRESHOLD: float = 1.0e-10

# --- Validation ---

#: Branch currents above this magnitude (Amperes) raise a validation warning.
HIGH_CURRENT_THRESHOLD_AMPS: float = 10.0

# --- Component parameter defaults (SI) ---

DEFAULT_RESISTANCE_OHMS: float = 1000.0
DEFAULT_CAPACITANCE_FARADS: float = 1.0e-6
DEFAULT_INDUCTANCE_HENRIES: float = 1.0e-3
DEFAULT_SOURCE_VOLTAGE_VOLTS: float = 5.0

logger.debug("Defined core constants: DEFAULT_CLUSTER_TOLERANCE, PENALTY_CONDUCTANCE_SIEMENS, PIVOT_THRESHOLD")
