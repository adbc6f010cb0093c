"""Reduction policies turning a statistic series into one scalar.

Two policies exist and are kept apart on purpose:

- mean_rounded: arithmetic mean rounded to 2 decimals with the built-in
  round(), so exact binary ties round half to even.
- integer_mean: sum divided by count with truncation toward zero, no
  decimal rounding. Used for HTTP status-class counts.

An empty series reduces to the NO_DATA sentinel rather than dividing by zero.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Final


class NoData(Enum):
    NO_DATA = "no_data"

    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA: Final = NoData.NO_DATA

MEAN_DECIMALS = 2


def mean_rounded(values: Iterable[float]) -> float | NoData:
    """Return the arithmetic mean rounded to two decimal places.

    Args:
        values: Sample values for one field of a series.

    Returns:
        round(sum / count, 2), or NO_DATA for an empty series. NaN or
        infinite inputs propagate into the result.
    """
    items = list(values)
    if not items:
        return NO_DATA
    return round(sum(items) / len(items), MEAN_DECIMALS)


def integer_mean(values: Iterable[int]) -> int | NoData:
    """Return the sum divided by the count, truncated toward zero.

    Args:
        values: Integer sample totals.

    Returns:
        Truncated mean, or NO_DATA for an empty series.
    """
    items = [int(v) for v in values]
    if not items:
        return NO_DATA
    total = sum(items)
    quotient = abs(total) // len(items)
    return quotient if total >= 0 else -quotient


def is_no_data(value: object) -> bool:
    """Return True if value is the NO_DATA sentinel."""
    return value is NO_DATA
