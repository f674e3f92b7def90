"""Sanity checks for pull-amount scaling and smoothing."""

import sys
from pathlib import Path

# Allow running this script directly without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from romdetect.config import RomBounds, SensorSettings  # noqa: E402
from romdetect.session import InputSession  # noqa: E402
from romdetect.signals.smoothing import filter_amount  # noqa: E402


def run_examples() -> None:
    bounds = RomBounds(low=100.0, high=900.0)
    print(f"bounds={bounds} filter_amount={filter_amount(bounds)}")

    for inverted in (False, True):
        session = InputSession(bounds, sensor=SensorSettings(inverted=inverted), prevent_filtering=True)
        amounts = [session.feed(raw) for raw in (100.0, 500.0, 900.0)]
        print(f"inverted={inverted} raw=(100, 500, 900) -> {amounts}")

    session = InputSession(bounds)
    for raw in (900.0, 900.0, 100.0, 100.0, 100.0):
        print(f"filtered raw={raw:.0f} -> pull={session.feed(raw):.3f}")

    assert InputSession(bounds, prevent_filtering=True).feed(100.0) == 1.0, "Low bound should be fully pulled"
    print("Scaling checks passed.")


if __name__ == "__main__":
    run_examples()
