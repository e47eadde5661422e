"""Numeric helpers shared by the queries: rounding, guarded ratios, percentiles."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Union

import numpy as np

from .exceptions import DivisionGuardError

Number = Union[int, float, Decimal]

_TWO_PLACES = Decimal("0.01")


def round_half_up(value: Number, places: Decimal = _TWO_PLACES) -> float:
    """Round to two decimals with halves rounded away from zero.

    Floats are converted through ``repr`` so 2.675 rounds to 2.68, not the
    2.67 that binary rounding would give.
    """
    if not isinstance(value, Decimal):
        value = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    return float(value.quantize(places, rounding=ROUND_HALF_UP))


def ratio(numerator: Number, denominator: Number, context: str = "ratio") -> Decimal:
    """Exact ``numerator / denominator`` as a Decimal.

    Raises:
        DivisionGuardError: If the denominator is zero
    """
    if denominator == 0:
        raise DivisionGuardError(float(numerator), context)
    return Decimal(numerator) / Decimal(denominator)


def rounded_mean(values: Sequence[int]) -> float:
    """Arithmetic mean of integer values, rounded half-up to two decimals."""
    return round_half_up(ratio(sum(values), len(values), "mean"))


def percentile_cont(values: Sequence[float], q: float = 50.0) -> float:
    """Continuous percentile with linear interpolation between order statistics.

    For ``q=50`` this is the median: the middle value for odd counts, the mean
    of the two middle values for even counts.
    """
    if len(values) == 0:
        raise ValueError("percentile of empty sequence")
    return float(np.percentile(np.asarray(values, dtype=float), q, method="linear"))
