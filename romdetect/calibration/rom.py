"""Range-of-motion calibration from detected turning points.

The bounds for each movement direction are the average of the last two turning
points in that direction, provided those two agree within a tolerance. A margin
is then taken off both ends to compensate for sensor noise and overshoot.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from romdetect.config import (
    DIRECTIONS,
    ERROR_CORRECTION_FRACTION,
    ROM_MARGIN,
    TURNING_POINT_ERROR_MARGIN,
    RomBounds,
    TurningPoint,
)

logger = logging.getLogger(__name__)


def _direction_average(points: List[TurningPoint], max_difference: float) -> Optional[float]:
    if len(points) < 2:
        return None
    a, b = points[-2].value, points[-1].value
    if abs(a - b) > max_difference:
        return None
    return 0.5 * (a + b)


def correct_bounds(low_raw: float, high_raw: float) -> RomBounds:
    """Apply the noise margin to raw low/high averages.

    ``low_raw`` is the average of the turning points reached while moving
    down and ``high_raw`` of those reached while moving up. For small
    movements the corrections can cross over, so the result is re-ordered.
    """
    error_correction_upper_bound = ERROR_CORRECTION_FRACTION * (high_raw - low_raw)
    high = high_raw - max(high_raw * ROM_MARGIN, error_correction_upper_bound)
    low = low_raw + max(low_raw * ROM_MARGIN, error_correction_upper_bound)
    return RomBounds(low=min(low, high), high=max(low, high))


def compute_bounds(
    turning_points: Sequence[TurningPoint],
    max_difference_between_rom_findings: float = TURNING_POINT_ERROR_MARGIN,
) -> Optional[RomBounds]:
    """Compute ROM bounds from turning points, or None if calibration is incomplete.

    Args:
        turning_points: Turning points in arrival order.
        max_difference_between_rom_findings: Largest allowed difference between
            the last two turning points of one direction.

    Returns:
        Corrected :class:`RomBounds`, or None when a direction has fewer than two
        turning points, its last two disagree by more than the tolerance, or the
        corrected bounds collapse to a single value.
    """
    by_direction: Dict[int, List[TurningPoint]] = {d: [] for d in DIRECTIONS}
    for point in turning_points:
        by_direction[point.direction].append(point)

    averages = {
        d: _direction_average(points, max_difference_between_rom_findings)
        for d, points in by_direction.items()
    }
    if any(avg is None for avg in averages.values()):
        return None

    bounds = correct_bounds(averages[-1], averages[1])
    if bounds.is_degenerate:
        logger.warning("Discarding degenerate ROM bounds at %.2f", bounds.low)
        return None
    return bounds
