"""Shared configuration and data models used across the input pipeline."""

import math
from dataclasses import dataclass
from typing import Optional

# Distances are in sensor units (millimeters for the supported range finders).
DEFAULT_MINIMAL_ROM = 50.0
TURNING_POINT_ERROR_MARGIN = 150.0
NO_MEASUREMENT_THRESHOLD = 2000.0

ROM_MARGIN = 0.05
ERROR_CORRECTION_FRACTION = 0.2

DIRECTIONS = (-1, 1)


@dataclass(frozen=True)
class SensorReading:
    """Single distance reading.

    Attributes:
        value: Measured distance in sensor units.
        timestamp: Monotonic time of the reading in seconds.
    """

    value: float
    timestamp: float


@dataclass(frozen=True)
class TurningPoint:
    """Confirmed extremum in the motion signal.

    Attributes:
        value: Averaged sensor value at the extremum.
        time: Timestamp (seconds) attributed to the extremum.
        direction: Movement direction prior to the extremum, ``1`` when values
            were going up and ``-1`` when they were going down.
    """

    value: float
    time: float
    direction: int

    def __post_init__(self) -> None:
        if self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {self.direction}")


@dataclass(frozen=True)
class RomBounds:
    """Low/high distance bounds of the user's movement.

    The constructor orders its inputs, so ``low <= high`` holds for every
    instance even when the values are passed inverted.
    """

    low: float
    high: float

    def __post_init__(self) -> None:
        if self.low > self.high:
            low, high = self.high, self.low
            object.__setattr__(self, "low", low)
            object.__setattr__(self, "high", high)

    @classmethod
    def from_pair(cls, a: float, b: float) -> "RomBounds":
        """Bounds from two extremes given in either order, e.g. entered by hand."""
        return cls(low=min(a, b), high=max(a, b))

    @property
    def span(self) -> float:
        return self.high - self.low

    @property
    def is_degenerate(self) -> bool:
        """True when scaling against these bounds would divide by zero."""
        return self.high == self.low


@dataclass(frozen=True)
class SensorSettings:
    """Per-sensor settings supplied by the configuration layer.

    Attributes:
        sensor_id: Identifier reported by the sensor, if known.
        inverted: Flip the pull amount (``1 - x``) for sensors mounted the
            other way around.
        minimal_range_of_motion: Sensor-specific minimal distance for a turning
            point; ``None`` falls back to :data:`DEFAULT_MINIMAL_ROM`.
    """

    sensor_id: Optional[str] = None
    inverted: bool = False
    minimal_range_of_motion: Optional[float] = None


@dataclass(frozen=True)
class DetectorConfig:
    """Parameters for :class:`romdetect.repdetect.turning_points.TurningPointDetector`.

    ``moving_average_window`` is the length in seconds of each of the two
    averaging windows (recent and older).
    ``buffer_capacity`` caps the number of buffered readings regardless of
    their age; None keeps everything inside the two windows.
    """

    minimal_distance: float = DEFAULT_MINIMAL_ROM
    moving_average_window: float = 0.5
    buffer_capacity: Optional[int] = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.minimal_distance) or self.minimal_distance < 0:
            raise ValueError("minimal_distance must be a finite number >= 0")
        if not math.isfinite(self.moving_average_window) or self.moving_average_window <= 0:
            raise ValueError("moving_average_window must be a positive number of seconds")
        if self.buffer_capacity is not None and self.buffer_capacity < 1:
            raise ValueError("buffer_capacity must be >= 1")


@dataclass(frozen=True)
class CalibrationConfig:
    """Tolerance used when turning points are converted into ROM bounds."""

    max_difference_between_rom_findings: float = TURNING_POINT_ERROR_MARGIN

    def __post_init__(self) -> None:
        if self.max_difference_between_rom_findings < 0:
            raise ValueError("max_difference_between_rom_findings must be >= 0")


@dataclass(frozen=True)
class FilterConfig:
    """Configuration for the pull-amount smoothing filter.

    The number of averaged inputs grows linearly from ``min_inputs`` to
    ``max_inputs`` as the ROM's largest bound goes from 0 to ``upper_bound``.
    """

    enabled: bool = True
    upper_bound: float = 1000.0
    min_inputs: int = 1
    max_inputs: int = 10

    def __post_init__(self) -> None:
        if self.upper_bound <= 0:
            raise ValueError("upper_bound must be positive")
        if self.min_inputs < 1 or self.max_inputs < self.min_inputs:
            raise ValueError("expected 1 <= min_inputs <= max_inputs")
