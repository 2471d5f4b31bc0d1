# pycapsim/utilities.py

"""
Numeric helpers for the capacity pipeline.
"""

import math
from decimal import Decimal, ROUND_DOWN

from .constants import CAPACITY_DIGITS
from .exceptions import InvalidValue

_QUANTUM = Decimal(1).scaleb(-CAPACITY_DIGITS)

# Floats at or above this magnitude have no fractional part
_INTEGRAL_FLOAT = 2.0 ** 52


def truncate_to_2_decimals(x: float) -> float:
    """
    Truncate a value to two decimal digits toward zero.

    The integer part is kept and the fractional part is cut to two digits in
    the direction of zero, independently of sign: 2.567 becomes 2.56 and
    -2.567 becomes -2.56. The value is truncated from its shortest decimal
    representation, so a value that already has two digits comes back
    unchanged.

    Parameters
    ----------
    x : float
        Value to truncate.

    Returns
    -------
    float
        Truncated value.

    Raises
    ------
    InvalidValue
        If x is NaN or infinite.
    """
    if not math.isfinite(x):
        raise InvalidValue(f"Cannot truncate non-finite capacity {x}")
    if abs(x) >= _INTEGRAL_FLOAT:
        return float(x) + 0.0
    truncated = float(Decimal(repr(float(x))).quantize(_QUANTUM, rounding=ROUND_DOWN))
    # Avoid handing out -0.0
    return truncated + 0.0


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves going up (20.5 -> 21, -0.5 -> 0)."""
    if not math.isfinite(x):
        raise InvalidValue(f"Cannot round non-finite value {x}")
    return int(math.floor(x + 0.5))
