"""Sanity checks for turning point detection and ROM calibration.

Feeds a noisy sine-shaped movement through the detector, prints each confirmed
turning point and the resulting ROM bounds.
"""

import math
import random
import sys
from pathlib import Path

# Allow running this script directly without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from romdetect.config import DetectorConfig  # noqa: E402
from romdetect.session import AutoCalibration  # noqa: E402


def run_examples() -> None:
    rng = random.Random(3)
    calibration = AutoCalibration(DetectorConfig(minimal_distance=50.0, moving_average_window=0.5))

    for i in range(400):
        t = i * 0.05
        value = 400.0 + 200.0 * math.sin(2 * math.pi * t / 3.0) + rng.gauss(0.0, 10.0)
        tp = calibration.feed(value, t)
        if tp is not None:
            print(f"t={t:6.2f}s turning point value={tp.value:7.2f} at {tp.time:6.2f}s direction={tp.direction:+d}")

    bounds = calibration.bounds
    assert bounds is not None, "Calibration did not complete"
    assert bounds.low <= bounds.high, "Bounds inverted"
    print(f"ROM bounds: low={bounds.low:.2f} high={bounds.high:.2f}")


if __name__ == "__main__":
    run_examples()
