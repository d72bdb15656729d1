"""Range and interval expansion.

Turns the ``range`` list and optional ``interval`` of a request into the
ascending thresholds one traveller is evaluated at.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from ..domain.errors import (
    InvalidParameterValueError,
    MissingParameterError,
    ParameterExceedsMaximumError,
)
from .converters import PARAM_INTERVAL, PARAM_RANGE


def expand_ranges(
    range_values: Sequence[Any],
    interval: Optional[Any] = None,
) -> Tuple[Sequence[float], Optional[float]]:
    """Expand requested ranges into thresholds.

    Parameters
    ----------
    range_values:
        Requested ranges, at least one non-negative number.
    interval:
        Optional step, only used when exactly one range is given.

    Returns
    -------
    Sequence[float], float | None
        The ascending thresholds and the interval forwarded with them.
        Stepped thresholds are computed lazily.
        Several ranges are sorted and used verbatim, duplicates kept,
        and the interval is dropped.

    Raises
    ------
    MissingParameterError
        If no range value is given.
    InvalidParameterValueError
        If a range is negative or not a number, or the interval is not
        positive.
    ParameterExceedsMaximumError
        If the interval is larger than the single range.
    """
    values = [_range_value(value) for value in range_values]
    if not values:
        raise MissingParameterError.of(PARAM_RANGE)

    if len(values) > 1:
        return tuple(sorted(values)), None

    maximum = values[0]
    if interval is None:
        return (maximum,), None

    step = _interval_value(interval)
    if step > maximum:
        raise ParameterExceedsMaximumError.of(PARAM_INTERVAL, step, maximum)
    return step_ranges(maximum, step), step


def threshold_count(maximum: float, interval: float) -> int:
    """Number of thresholds ``interval`` steps produce up to ``maximum``."""
    # rounded so 0.3 / 0.1 gives three steps, not four
    return max(1, math.ceil(round(maximum / interval, 9)))


@dataclass(frozen=True, slots=True)
class SteppedRanges(Sequence[float]):
    """Thresholds at every multiple of ``interval`` below ``maximum``, then ``maximum``.

    Values are computed on access; nothing is allocated up front, so the
    length can be checked against the policy limits first.

    >>> tuple(SteppedRanges(1000, 300))
    (300, 600, 900, 1000)
    """

    maximum: float
    interval: float

    def __len__(self) -> int:
        return threshold_count(self.maximum, self.interval)

    def __getitem__(self, index):
        size = len(self)
        if isinstance(index, slice):
            return tuple(self[i] for i in range(*index.indices(size)))
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("threshold index out of range")
        if index == size - 1:
            return self.maximum
        return self.interval * (index + 1)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SteppedRanges):
            return (self.maximum, self.interval) == (other.maximum, other.interval)
        if isinstance(other, Sequence) and not isinstance(other, str):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.maximum, self.interval))


def step_ranges(maximum: float, interval: float) -> SteppedRanges:
    return SteppedRanges(maximum, interval)


def _range_value(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterValueError.of(PARAM_RANGE, value, cause=e) from e
    if not math.isfinite(number) or number < 0:
        raise InvalidParameterValueError.of(PARAM_RANGE, value)
    return number


def _interval_value(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterValueError.of(PARAM_INTERVAL, value, cause=e) from e
    if not math.isfinite(number) or number <= 0:
        raise InvalidParameterValueError.of(PARAM_INTERVAL, value)
    return number
