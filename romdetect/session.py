"""Per-session input handling and automatic ROM calibration.

:class:`InputSession` turns raw readings into the steady-state pull amount
consumed by games and displays. :class:`AutoCalibration` watches the same
readings for turning points and derives new ROM bounds from them, which can be
handed back to the session with :meth:`InputSession.update_bounds`.

Both classes are single-consumer; feed them from one thread, e.g. by draining
a :class:`romdetect.io.channel.SampleChannel`.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from romdetect.calibration.rom import compute_bounds
from romdetect.config import (
    DEFAULT_MINIMAL_ROM,
    CalibrationConfig,
    DetectorConfig,
    FilterConfig,
    RomBounds,
    SensorReading,
    SensorSettings,
    TurningPoint,
)
from romdetect.quality.failures import is_no_measurement
from romdetect.io.scaling import ScalingPipeline
from romdetect.repdetect.turning_points import TurningPointDetector
from romdetect.signals.smoothing import InputSmoothingFilter

logger = logging.getLogger(__name__)


class InputSession:
    """Scales and smooths raw readings for one exercise session.

    Args:
        bounds: Current ROM bounds; must not be degenerate.
        sensor: Settings of the active sensor, if one is known.
        filter_config: Smoothing configuration.
        prevent_filtering: Bypass smoothing entirely, e.g. during the automated
            ROM calibration before an exercise.
    """

    def __init__(
        self,
        bounds: RomBounds,
        sensor: Optional[SensorSettings] = None,
        filter_config: FilterConfig = FilterConfig(),
        prevent_filtering: bool = False,
    ) -> None:
        self.sensor = sensor
        self.filter_config = filter_config
        self.prevent_filtering = prevent_filtering
        self._pipeline = ScalingPipeline.from_sensor(bounds, sensor)
        self._filter = self._build_filter(bounds)
        self._pull_amount = 0.0
        self._pull_amount_unscaled = 0.0

    @property
    def bounds(self) -> RomBounds:
        return self._pipeline.bounds

    @property
    def inverted(self) -> bool:
        return self.sensor is not None and self.sensor.inverted

    @property
    def filtering(self) -> bool:
        return self._filter is not None

    @property
    def filter_amount(self) -> int:
        """Number of readings averaged per pull amount; 0 when not filtering."""
        return 0 if self._filter is None else self._filter.filter_amount

    @property
    def pull_amount(self) -> float:
        """Last (smoothed) pull amount in [0, 1]."""
        return self._pull_amount

    @property
    def pull_amount_unscaled(self) -> float:
        """Last accepted raw reading."""
        return self._pull_amount_unscaled

    def _build_filter(self, bounds: RomBounds) -> Optional[InputSmoothingFilter]:
        if self.prevent_filtering or not self.filter_config.enabled:
            return None
        smoothing = InputSmoothingFilter.for_bounds(bounds, self.filter_config)
        logger.debug(
            "Filter amount: %d, ROMHigh: %.1f, ROMLow: %.1f",
            smoothing.filter_amount,
            bounds.high,
            bounds.low,
        )
        return smoothing

    def scale(self, raw: float) -> float:
        return self._pipeline.scale(raw)

    def feed(self, raw: float) -> Optional[float]:
        """Process a raw reading and return the new pull amount.

        Readings that are not finite or at/above the sensor's no-measurement
        threshold are dropped and None is returned.
        """
        if is_no_measurement(raw):
            logger.debug("Dropping reading without measurement: %s", raw)
            return None

        self._pull_amount_unscaled = raw
        amount = self._pipeline.scale(raw)
        if self._filter is not None:
            amount = self._filter.feed(amount)
        self._pull_amount = amount
        return amount

    def minimal_distance_for_turning_point(self) -> float:
        if self.sensor is None or self.sensor.minimal_range_of_motion is None:
            return DEFAULT_MINIMAL_ROM
        return self.sensor.minimal_range_of_motion

    def update_bounds(self, bounds: RomBounds) -> None:
        """Switch to new ROM bounds.

        Only the scaling changes. The smoothing filter keeps its size and history
        for the rest of the session; start a new session to resize it.
        """
        self._pipeline = self._pipeline.with_bounds(bounds)

    def select_sensor(self, sensor: Optional[SensorSettings]) -> None:
        self.sensor = sensor
        self._pipeline = self._pipeline.with_inversion(self.inverted)


class AutoCalibration:
    """Collects turning points and derives ROM bounds from them."""

    def __init__(
        self,
        detector_config: DetectorConfig = DetectorConfig(),
        calibration_config: CalibrationConfig = CalibrationConfig(),
    ) -> None:
        self.detector_config = detector_config
        self.calibration_config = calibration_config
        self.detector = TurningPointDetector.from_config(detector_config)
        self._turning_points: List[TurningPoint] = []
        self._bounds: Optional[RomBounds] = None

    @classmethod
    def for_session(
        cls, session: InputSession, calibration_config: CalibrationConfig = CalibrationConfig(), **detector_kwargs
    ) -> "AutoCalibration":
        """Build a calibration using the session sensor's minimal distance."""
        detector_config = DetectorConfig(
            minimal_distance=session.minimal_distance_for_turning_point(), **detector_kwargs
        )
        return cls(detector_config, calibration_config)

    @property
    def turning_points(self) -> Tuple[TurningPoint, ...]:
        return tuple(self._turning_points)

    @property
    def bounds(self) -> Optional[RomBounds]:
        """Most recent successful calibration result."""
        return self._bounds

    @property
    def is_complete(self) -> bool:
        return self._bounds is not None

    def feed(self, value: float, time: float) -> Optional[TurningPoint]:
        """Feed one reading; return the turning point it confirms, if any.

        Readings without a measurement are dropped before they reach the
        detector, the same way :meth:`InputSession.feed` drops them.
        """
        if is_no_measurement(value):
            logger.debug("Dropping reading without measurement at %.3fs: %s", time, value)
            return None

        turning_point = self.detector.feed(value, time)
        if turning_point is None:
            return None

        self._turning_points.append(turning_point)
        bounds = compute_bounds(
            self._turning_points, self.calibration_config.max_difference_between_rom_findings
        )
        if bounds is not None:
            if bounds != self._bounds:
                logger.info("ROM calibrated: low=%.1f high=%.1f", bounds.low, bounds.high)
            self._bounds = bounds
        return turning_point

    def run(self, readings: Iterable[SensorReading]) -> Optional[RomBounds]:
        """Replay readings through :meth:`feed` and return the resulting bounds."""
        for reading in readings:
            self.feed(reading.value, reading.timestamp)
        return self._bounds

    def reset(self) -> None:
        self.detector.reset()
        self._turning_points.clear()
        self._bounds = None
