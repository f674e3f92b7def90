"""romdetect: Range-of-motion detection for sensor-driven exercise equipment.

This package hosts the streaming signal processing (sample windows, input
smoothing), turning point detection and ROM calibration that turn raw
distance-sensor readings into a normalized pull amount.
"""

__all__ = [
    "cli",
    "config",
    "session",
]

__version__ = "0.1.0"
