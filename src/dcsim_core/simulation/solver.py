# src/dcsim_core/simulation/solver.py
import logging
from typing import Tuple

import numpy as np

from ..constants import PIVOT_THRESHOLD
from .exceptions import SingularSystemError

logger = logging.getLogger(__name__)


def gaussian_elimination(G: np.ndarray, I: np.ndarray, pivot_threshold: float = PIVOT_THRESHOLD) -> np.ndarray:
    """
    Solves G·v = I by Gaussian elimination with partial pivoting on [G | I].

    For each column the row with the largest absolute entry at or below the
    diagonal is swapped into place (the first such row on ties). The penalty
    conductances in G span several orders of magnitude, so pivoting is never
    skipped.

    Args:
        G: Square conductance matrix (n×n).
        I: Current-injection vector (n).
        pivot_threshold: Pivots with a smaller magnitude mark the system singular.

    Returns:
        The solution vector (n,), float64.

    Raises:
        SingularSystemError: If a pivot falls below the threshold, or the solution
            contains NaN/Inf.
        ValueError: If the shapes are inconsistent.
    """
    G = np.asarray(G, dtype=np.float64)
    I = np.asarray(I, dtype=np.float64)
    if G.ndim != 2 or G.shape[0] != G.shape[1]:
        raise ValueError(f"Conductance matrix must be square, got shape {G.shape}.")
    if I.shape != (G.shape[0],):
        raise ValueError(f"Current vector shape {I.shape} does not match matrix shape {G.shape}.")

    n = G.shape[0]
    aug = np.hstack([G, I.reshape(-1, 1)])

    # Forward elimination
    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(aug[i:, i])))
        if pivot_row != i:
            aug[[i, pivot_row]] = aug[[pivot_row, i]]

        pivot = aug[i, i]
        if abs(pivot) < pivot_threshold:
            logger.error(f"Pivot {pivot:.3e} in column {i} is below threshold {pivot_threshold:.1e}; system is singular.")
            raise SingularSystemError(
                details="Circuit equations are singular. Check for floating nodes or invalid connections.",
                pivot_index=i,
            )

        if i + 1 < n:
            factors = aug[i + 1:, i] / pivot
            aug[i + 1:, i:] -= np.outer(factors, aug[i, i:])

    # Back substitution
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (aug[i, n] - aug[i, i + 1:n] @ x[i + 1:]) / aug[i, i]

    if np.any(np.isnan(x)) or np.any(np.isinf(x)):
        logger.error("NaN or Inf detected in nodal solution vector.")
        raise SingularSystemError(details="Nodal system solve resulted in NaN/Inf values.")

    return x


def solve_node_voltages(G: np.ndarray, I: np.ndarray, pivot_threshold: float = PIVOT_THRESHOLD) -> Tuple[float, ...]:
    """
    Solves the reduced system and prepends the ground reference.

    Returns:
        Node voltages indexed by node id; element 0 is exactly 0.0.
    """
    logger.debug(f"Solving {np.shape(G)[0]}-node reduced system...")
    reduced = gaussian_elimination(G, I, pivot_threshold)
    return (0.0,) + tuple(float(v) for v in reduced)


# Alias matching the pipeline's stage name.
solve = solve_node_voltages
