"""Time-bounded buffer of sensor readings with interval averages.

Readings are expected in non-decreasing timestamp order; pruning relies on it
and :meth:`SampleWindow.push` rejects anything older than the newest reading.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Deque, Iterator, Optional

import numpy as np

from romdetect.config import SensorReading
from romdetect.quality.failures import OutOfOrderSampleError


class SampleWindow:
    """Ordered buffer of :class:`SensorReading` bounded by time and optionally by size.

    Args:
        window_size: Length (seconds) of one averaging window. Pruning keeps
            two windows worth of readings by default.
        capacity: Optional hard cap on the number of buffered readings; the
            oldest reading is evicted when full.
    """

    def __init__(self, window_size: float, capacity: Optional[int] = None) -> None:
        if not window_size > 0:
            raise ValueError("window_size must be positive")
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.window_size = window_size
        self.capacity = capacity
        self._readings: Deque[SensorReading] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[SensorReading]:
        return iter(self._readings)

    @property
    def latest_timestamp(self) -> Optional[float]:
        return self._readings[-1].timestamp if self._readings else None

    def push(self, reading: SensorReading) -> None:
        """Append a reading.

        Raises:
            OutOfOrderSampleError: if the reading is older than the newest one.
        """
        latest = self.latest_timestamp
        if latest is not None and reading.timestamp < latest:
            raise OutOfOrderSampleError(
                f"reading at t={reading.timestamp} is older than buffered t={latest}"
            )
        self._readings.append(reading)

    def prune(self, reference_time: float, retain: Optional[float] = None) -> int:
        """Drop readings strictly older than ``reference_time - retain``.

        Returns:
            Number of readings removed.
        """
        if retain is None:
            retain = 2 * self.window_size
        cutoff = reference_time - retain
        removed = 0
        while self._readings and self._readings[0].timestamp < cutoff:
            self._readings.popleft()
            removed += 1
        return removed

    def average_in_interval(self, low_exclusive: float, high_inclusive: float) -> float:
        """Mean value of readings with ``low_exclusive < timestamp <= high_inclusive``.

        Returns NaN when no reading falls inside the interval.
        """
        values = np.fromiter(
            (r.value for r in self._readings if low_exclusive < r.timestamp <= high_inclusive),
            dtype=float,
        )
        if values.size == 0:
            return math.nan
        return float(values.mean())

    def clear(self) -> None:
        self._readings.clear()
