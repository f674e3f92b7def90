"""Scaling of raw sensor readings into a normalized pull amount.

A reading at the ROM's low bound means the user has pulled the full range, so
the normalized position is flipped: ``low -> 1`` and ``high -> 0``. Sensors
mounted the other way around carry an inversion flag that flips it back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from romdetect.config import RomBounds, SensorSettings
from romdetect.quality.failures import DegenerateBoundsError


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _assert_usable_bounds(bounds: RomBounds) -> None:
    if bounds.is_degenerate:
        raise DegenerateBoundsError(f"ROM bounds must differ, got low == high == {bounds.low}")


def scale_value(raw: float, bounds: RomBounds) -> float:
    """Map ``raw`` onto [0, 1] as distance pulled relative to ``bounds``."""
    position = _clamp((raw - bounds.low) / (bounds.high - bounds.low), 0.0, 1.0)
    return abs(position - 1.0)


@dataclass(frozen=True)
class ScalingPipeline:
    """Raw reading to pull amount mapping for one set of bounds.

    Bounds are replaced by building a new pipeline (:meth:`with_bounds`), so a
    pipeline never sees a half-updated ROM.
    """

    bounds: RomBounds
    inverted: bool = False

    def __post_init__(self) -> None:
        _assert_usable_bounds(self.bounds)

    @classmethod
    def from_sensor(cls, bounds: RomBounds, sensor: Optional[SensorSettings]) -> "ScalingPipeline":
        """Build a pipeline honouring the sensor's inversion; no sensor means upright."""
        return cls(bounds=bounds, inverted=sensor is not None and sensor.inverted)

    def scale(self, raw: float) -> float:
        """Return the pull amount in [0, 1] for a raw reading."""
        amount = scale_value(raw, self.bounds)
        if self.inverted:
            return 1.0 - amount
        return amount

    def scale_many(self, values: Iterable[float]) -> Tuple[float, ...]:
        return tuple(self.scale(v) for v in values)

    def with_bounds(self, bounds: RomBounds) -> "ScalingPipeline":
        return ScalingPipeline(bounds=bounds, inverted=self.inverted)

    def with_inversion(self, inverted: bool) -> "ScalingPipeline":
        return ScalingPipeline(bounds=self.bounds, inverted=inverted)
