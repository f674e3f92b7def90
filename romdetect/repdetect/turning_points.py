"""Turning point detection on a stream of distance readings.

Two adjacent moving-average windows are compared on every reading: the recent
window ``(t - w, t]`` and the older window ``(t - 2w, t - w]``. Once the
recent average has moved far enough from the start position the movement
direction is fixed. A recent trend opposing that direction marks the older
average as a candidate extremum, which is confirmed only after the signal has
travelled ``minimal_distance`` away from it (hysteresis). Confirmation flips
the direction and restarts from the recent average.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from romdetect.config import DetectorConfig, SensorReading, TurningPoint
from romdetect.signals.window import SampleWindow

logger = logging.getLogger(__name__)


def _sign(value: float) -> int:
    return 1 if value > 0 else -1 if value < 0 else 0


class TurningPointDetector:
    """Streaming detector emitting confirmed :class:`TurningPoint` events.

    Args:
        minimal_distance_for_turning_point: Distance (sensor units) the signal
            must travel before a direction is decided or a candidate turning
            point is confirmed.
        moving_average_window: Length in seconds of each averaging window.
        buffer_capacity: Optional cap on buffered readings, for sensors whose
            sample rate would otherwise grow the buffer without bound.

    The detector holds mutable state and must be fed from a single consumer
    in non-decreasing timestamp order.
    """

    def __init__(
        self,
        minimal_distance_for_turning_point: float,
        moving_average_window: float,
        buffer_capacity: Optional[int] = None,
    ) -> None:
        self.minimal_distance = minimal_distance_for_turning_point
        self.window_size = moving_average_window
        self._window = SampleWindow(moving_average_window, capacity=buffer_capacity)
        self._start_position: Optional[float] = None
        self._movement_direction = 0
        self._candidate: Optional[TurningPoint] = None
        self._avg_recent = math.nan
        self._avg_older = math.nan

    @classmethod
    def from_config(cls, config: DetectorConfig) -> "TurningPointDetector":
        return cls(config.minimal_distance, config.moving_average_window, config.buffer_capacity)

    @property
    def start_position(self) -> Optional[float]:
        return self._start_position

    @property
    def movement_direction(self) -> int:
        """0 while undecided, 1 for rising values, -1 for falling values."""
        return self._movement_direction

    @property
    def potential_turning_point(self) -> Optional[TurningPoint]:
        return self._candidate

    @property
    def recent_average(self) -> float:
        return self._avg_recent

    @property
    def older_average(self) -> float:
        return self._avg_older

    def feed(self, value: float, time: float) -> Optional[TurningPoint]:
        """Consume one reading and return a turning point if one was confirmed.

        Raises:
            OutOfOrderSampleError: if ``time`` is older than the previous reading.
        """
        self._window.push(SensorReading(value=value, timestamp=time))
        if self._start_position is None:
            self._start_position = value

        self._update_averages(time)

        if self._movement_direction == 0:
            self._decide_direction()
            return None

        turning_point = self._confirmed_turning_point(time)
        if turning_point is not None:
            logger.debug(
                "Turning point confirmed: value=%.2f time=%.3f direction=%d",
                turning_point.value,
                turning_point.time,
                turning_point.direction,
            )
            self._reset_after_turning_point()
        return turning_point

    def reset(self) -> None:
        """Return to the initial state for a new session."""
        self._window.clear()
        self._start_position = None
        self._movement_direction = 0
        self._candidate = None
        self._avg_recent = math.nan
        self._avg_older = math.nan

    def _update_averages(self, now: float) -> None:
        recent_start = now - self.window_size
        older_start = recent_start - self.window_size
        self._window.prune(now, 2 * self.window_size)
        self._avg_recent = self._window.average_in_interval(recent_start, now)
        self._avg_older = self._window.average_in_interval(older_start, recent_start)

    def _decide_direction(self) -> None:
        # Both windows need data before the recent average is trusted.
        if math.isnan(self._avg_recent) or math.isnan(self._avg_older):
            return
        displacement = self._avg_recent - self._start_position
        if abs(displacement) > self.minimal_distance:
            self._movement_direction = _sign(displacement)
            logger.debug("Movement direction set to %d from start %.2f", self._movement_direction, self._start_position)

    def _confirmed_turning_point(self, now: float) -> Optional[TurningPoint]:
        if self._movement_direction * (self._avg_recent - self._avg_older) < 0:
            if self._candidate is None:
                self._candidate = TurningPoint(
                    value=self._avg_older,
                    time=now - self.window_size,
                    direction=self._movement_direction,
                )
                return None
            if abs(self._avg_recent - self._candidate.value) > self.minimal_distance:
                return self._candidate
            return None

        # Trend agrees with the current direction again; the candidate was noise.
        self._candidate = None
        return None

    def _reset_after_turning_point(self) -> None:
        self._candidate = None
        self._start_position = self._avg_recent
        self._movement_direction = -self._movement_direction
