# src/dcsim_core/simulation/config.py
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pint

from ..constants import (
    DEFAULT_CLUSTER_TOLERANCE,
    HIGH_CURRENT_THRESHOLD_AMPS,
    PENALTY_CONDUCTANCE_SIEMENS,
    PIVOT_THRESHOLD,
)
from ..geometry import ClusteringMode
from ..units import to_si_magnitude
from .exceptions import ConfigParsingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Numerical knobs of one analysis run. The defaults reproduce the editor's
    behaviour: 15-unit snapping, single-seed clustering, 1000 S penalty.
    """
    cluster_tolerance: float = DEFAULT_CLUSTER_TOLERANCE
    clustering_mode: ClusteringMode = ClusteringMode.SINGLE_SEED
    penalty_conductance: float = PENALTY_CONDUCTANCE_SIEMENS
    pivot_threshold: float = PIVOT_THRESHOLD
    high_current_threshold: float = HIGH_CURRENT_THRESHOLD_AMPS

    def __post_init__(self):
        if not isinstance(self.clustering_mode, ClusteringMode):
            object.__setattr__(self, 'clustering_mode', ClusteringMode(self.clustering_mode))
        if self.cluster_tolerance < 0 or not math.isfinite(self.cluster_tolerance):
            raise ValueError(f"cluster_tolerance must be non-negative and finite, got {self.cluster_tolerance!r}.")
        for name in ('penalty_conductance', 'pivot_threshold', 'high_current_threshold'):
            value = getattr(self, name)
            if value <= 0 or not math.isfinite(value):
                raise ValueError(f"{name} must be positive and finite, got {value!r}.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cluster_tolerance': self.cluster_tolerance,
            'clustering_mode': self.clustering_mode.value,
            'penalty_conductance': self.penalty_conductance,
            'pivot_threshold': self.pivot_threshold,
            'high_current_threshold': self.high_current_threshold,
        }


# key -> unit accepted for string quantities; None means a plain number
_FIELD_UNITS = {
    'cluster_tolerance': None,
    'penalty_conductance': 'siemens',
    'pivot_threshold': None,
    'high_current_threshold': 'ampere',
}


def parse_simulation_config(raw_config: Optional[Dict[str, Any]]) -> SimulationConfig:
    """
    Parses a raw settings dictionary (e.g., a document's `settings:` block) into a
    `SimulationConfig`. Missing keys keep their defaults. Quantities may be given
    as numbers in SI units or as strings such as "1000 S" or "10 A".
    """
    if not raw_config:
        return SimulationConfig()
    try:
        unknown = set(raw_config) - set(_FIELD_UNITS) - {'clustering_mode'}
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}.")

        kwargs: Dict[str, Any] = {}
        for key, unit in _FIELD_UNITS.items():
            if key not in raw_config:
                continue
            value = raw_config[key]
            kwargs[key] = to_si_magnitude(value, unit) if unit else _plain_number(key, value)

        if 'clustering_mode' in raw_config:
            kwargs['clustering_mode'] = ClusteringMode(str(raw_config['clustering_mode']).lower())

        config = SimulationConfig(**kwargs)
        logger.debug(f"Parsed simulation config: {config}")
        return config
    except (KeyError, ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse simulation configuration: {e}") from e


def _plain_number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}.")
    return float(value)
