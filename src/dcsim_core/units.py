# src/dcsim_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")


def to_si_magnitude(value: Union[int, float, str], unit: str) -> float:
    """
    Converts a bare number or a quantity string (e.g. '2 kohm', '100 pF') to a
    float magnitude in `unit`.

    Bare numbers and dimensionless strings are taken to already be in `unit`.

    Raises:
        ValueError: If the value cannot be parsed or has the wrong dimensionality.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number or quantity string, got boolean {value!r}.")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        qty = ureg.Quantity(str(value).strip())
    except (pint.errors.PintError, ValueError, TypeError, AttributeError, SyntaxError) as e:
        raise ValueError(f"Cannot parse quantity '{value}': {e}") from e

    if qty.dimensionless:
        return float(qty.magnitude)
    try:
        return float(qty.to(unit).magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(
            f"Quantity '{value}' has dimensionality '{qty.dimensionality}', which is not compatible with '{unit}'."
        ) from e
