"""Failure modes of the input pipeline.

Value-level outcomes stay values: an average over an empty interval is NaN
(insufficient data) and an unfinished calibration is ``None``. The exceptions
below are reserved for violated preconditions.
"""

from __future__ import annotations

import math

from romdetect.config import NO_MEASUREMENT_THRESHOLD


class OutOfOrderSampleError(ValueError):
    """Raised when a reading is older than the newest buffered reading."""


class DegenerateBoundsError(ValueError):
    """Raised when ROM bounds with ``high == low`` are used for scaling."""


class ChannelClosedError(RuntimeError):
    """Raised when publishing to a closed sample channel."""


class RecordingFormatError(ValueError):
    """Raised when a recording file contains a malformed line."""


def is_insufficient(value: float) -> bool:
    """Return True when ``value`` signals that too few samples were available."""
    return math.isnan(value)


def is_no_measurement(value: float) -> bool:
    """Return True for readings the sensor reports when it measured nothing.

    Range finders report values at or above the no-measurement threshold (or a
    non-finite value) when no echo came back.
    """
    return not math.isfinite(value) or value >= NO_MEASUREMENT_THRESHOLD
