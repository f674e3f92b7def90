from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from api.schemas import CalibrationRequest, CalibrationResponse, ScalingRequest, ScalingResponse
from api.services.calibration import run_calibration, run_scaling
from romdetect.quality.failures import DegenerateBoundsError, OutOfOrderSampleError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calibration"])


@router.post("/calibration", response_model=CalibrationResponse)
async def create_calibration(payload: CalibrationRequest) -> CalibrationResponse:
    """
    Detect turning points in the posted readings and return ROM bounds once both movement
    directions have two consistent turning points.
    """
    try:
        return run_calibration(payload)
    except OutOfOrderSampleError as exc:
        logger.warning("Rejected calibration request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/scaling", response_model=ScalingResponse)
async def scale_readings(payload: ScalingRequest) -> ScalingResponse:
    """
    Map raw readings to pull amounts in [0, 1] for the given bounds.
    """
    try:
        return run_scaling(payload)
    except DegenerateBoundsError as exc:
        logger.warning("Rejected scaling request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
