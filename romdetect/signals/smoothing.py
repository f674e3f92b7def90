"""Moving-average smoothing of the scaled pull amount.

The number of averaged inputs depends on the size of the calibrated range:
larger ranges produce larger (noisier) absolute steps and get more smoothing.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Deque

from romdetect.config import FilterConfig, RomBounds


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Position of ``value`` between ``a`` and ``b``, clamped to [0, 1]."""
    if a == b:
        return 0.0
    t = (value - a) / (b - a)
    return min(max(t, 0.0), 1.0)


def filter_amount(
    bounds: RomBounds,
    *,
    upper_bound: float = 1000.0,
    min_inputs: int = 1,
    max_inputs: int = 10,
) -> int:
    """Number of inputs averaged by the smoothing filter for ``bounds``.

    Maps ``max(bounds.high, bounds.low)`` from [0, upper_bound] onto
    [min_inputs, max_inputs]; anything above ``upper_bound`` uses
    ``max_inputs``. The interpolated value is truncated.
    """
    highest = max(bounds.high, bounds.low)
    return int(lerp(min_inputs, max_inputs, inverse_lerp(0.0, upper_bound, highest)))


class InputSmoothingFilter:
    """FIFO moving average over the last ``filter_amount`` values."""

    def __init__(self, filter_amount: int) -> None:
        if filter_amount < 1:
            raise ValueError("filter_amount must be at least 1")
        self.filter_amount = filter_amount
        self._values: Deque[float] = deque(maxlen=filter_amount)

    @classmethod
    def for_bounds(cls, bounds: RomBounds, config: FilterConfig) -> "InputSmoothingFilter":
        amount = filter_amount(
            bounds,
            upper_bound=config.upper_bound,
            min_inputs=config.min_inputs,
            max_inputs=config.max_inputs,
        )
        return cls(amount)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def smoothed(self) -> float:
        """Mean of the buffered values, NaN before the first feed."""
        if not self._values:
            return math.nan
        return sum(self._values) / len(self._values)

    def feed(self, value: float) -> float:
        """Add ``value`` (evicting the oldest at capacity) and return the new mean."""
        self._values.append(value)
        return self.smoothed

    def reset(self) -> None:
        self._values.clear()
