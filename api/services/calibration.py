"""
Service helpers running romdetect calibration and scaling for API requests.
"""

from __future__ import annotations

import os
from typing import List

from api.schemas import (
    BoundsModel,
    CalibrationRequest,
    CalibrationResponse,
    CalibrationStatus,
    ScalingRequest,
    ScalingResponse,
    TurningPointModel,
)
from romdetect.config import (
    DEFAULT_MINIMAL_ROM,
    TURNING_POINT_ERROR_MARGIN,
    CalibrationConfig,
    DetectorConfig,
    FilterConfig,
    RomBounds,
)
from romdetect.io.scaling import ScalingPipeline
from romdetect.session import AutoCalibration
from romdetect.signals.smoothing import InputSmoothingFilter

DEFAULT_MIN_DISTANCE = float(os.getenv("ROMDETECT_MIN_DISTANCE", str(DEFAULT_MINIMAL_ROM)))
DEFAULT_WINDOW_SECONDS = float(os.getenv("ROMDETECT_WINDOW_SECONDS", "0.5"))
DEFAULT_TOLERANCE = float(os.getenv("ROMDETECT_TOLERANCE", str(TURNING_POINT_ERROR_MARGIN)))


def run_calibration(payload: CalibrationRequest) -> CalibrationResponse:
    """
    Replay the request readings through a fresh calibration. Out-of-order readings raise
    OutOfOrderSampleError for the route to translate.
    Readings at or above the no-measurement threshold are skipped by the calibration.
    """
    detector_config = DetectorConfig(
        minimal_distance=payload.minimal_distance or DEFAULT_MIN_DISTANCE,
        moving_average_window=payload.window or DEFAULT_WINDOW_SECONDS,
    )
    tolerance = payload.tolerance if payload.tolerance is not None else DEFAULT_TOLERANCE
    calibration = AutoCalibration(detector_config, CalibrationConfig(tolerance))

    for reading in payload.readings:
        calibration.feed(reading.value, reading.timestamp)

    bounds = calibration.bounds
    return CalibrationResponse(
        status=CalibrationStatus.COMPLETE if bounds is not None else CalibrationStatus.INCOMPLETE,
        turning_points=[
            TurningPointModel(value=tp.value, time=tp.time, direction=tp.direction)
            for tp in calibration.turning_points
        ],
        bounds=BoundsModel(low=bounds.low, high=bounds.high) if bounds is not None else None,
    )


def run_scaling(payload: ScalingRequest) -> ScalingResponse:
    """
    Scale raw values; with `filtered` the values also pass through the input filter sized
    for the requested bounds. Degenerate bounds raise DegenerateBoundsError.
    """
    bounds = RomBounds.from_pair(payload.bounds.low, payload.bounds.high)
    pipeline = ScalingPipeline(bounds=bounds, inverted=payload.inverted)
    amounts: List[float] = list(pipeline.scale_many(payload.values))

    if payload.filtered:
        smoothing = InputSmoothingFilter.for_bounds(bounds, FilterConfig())
        amounts = [smoothing.feed(amount) for amount in amounts]

    return ScalingResponse(pull_amounts=amounts)
