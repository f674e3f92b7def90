import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class CalibrationStatus(str, Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


class ReadingModel(BaseModel):
    value: float = Field(..., description="Distance reading in sensor units.")
    timestamp: float = Field(..., description="Monotonic time of the reading (seconds).")

    @field_validator("value", "timestamp")
    @classmethod
    def finite(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("readings must be finite numbers")
        return v


class BoundsModel(BaseModel):
    low: float
    high: float


class TurningPointModel(BaseModel):
    value: float
    time: float
    direction: int


class CalibrationRequest(BaseModel):
    """
    Readings to replay through the turning point detector. Unset tuning values fall back to
    the service defaults (environment configurable).
    """
    readings: List[ReadingModel] = Field(..., min_length=1, description="Readings in timestamp order.")
    minimal_distance: Optional[float] = Field(None, gt=0, description="Minimal distance for a turning point.")
    window: Optional[float] = Field(None, gt=0, description="Moving average window in seconds.")
    tolerance: Optional[float] = Field(None, ge=0, description="Max difference between ROM findings.")


class CalibrationResponse(BaseModel):
    status: CalibrationStatus
    turning_points: List[TurningPointModel] = Field(default_factory=list)
    bounds: Optional[BoundsModel] = Field(None, description="Corrected ROM bounds when calibration completed.")


class ScalingRequest(BaseModel):
    values: List[float] = Field(..., min_length=1, description="Raw readings to scale.")
    bounds: BoundsModel
    inverted: bool = Field(False, description="Sensor is mounted inverted.")
    filtered: bool = Field(False, description="Apply the moving-average input filter.")


class ScalingResponse(BaseModel):
    pull_amounts: List[float]
