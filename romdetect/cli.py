"""Command-line interface for offline calibration and scaling.

Usage:
- ``romdetect calibrate recording.jsonl --min-distance 50 --window 0.5``
  replays a recording and prints the detected turning points and ROM bounds.
- ``romdetect scale --low 100 --high 900 120 500 880`` prints pull amounts.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from romdetect.config import (
    DEFAULT_MINIMAL_ROM,
    TURNING_POINT_ERROR_MARGIN,
    CalibrationConfig,
    DetectorConfig,
    RomBounds,
)
from romdetect.io.recording import load_readings
from romdetect.io.scaling import ScalingPipeline
from romdetect.session import AutoCalibration

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INCOMPLETE = 2


def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="romdetect",
        description="Range-of-motion detection for distance-sensor recordings.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    cal = sub.add_parser("calibrate", help="Detect turning points and ROM bounds in a JSONL recording")
    cal.add_argument("recording", type=Path, help="JSONL file with {value, timestamp} objects")
    cal.add_argument("--min-distance", type=float, default=DEFAULT_MINIMAL_ROM,
                     help="Minimal distance for a turning point (sensor units)")
    cal.add_argument("--window", type=float, default=DetectorConfig().moving_average_window,
                     help="Moving average window in seconds")
    cal.add_argument("--tolerance", type=float, default=TURNING_POINT_ERROR_MARGIN,
                     help="Max difference between the last two turning points per direction")

    sc = sub.add_parser("scale", help="Scale raw readings to pull amounts")
    sc.add_argument("--low", type=float, required=True, help="ROM low bound")
    sc.add_argument("--high", type=float, required=True, help="ROM high bound")
    sc.add_argument("--inverted", action="store_true", help="Sensor is mounted inverted")
    sc.add_argument("values", type=float, nargs="+", help="Raw readings")

    return p.parse_args(argv)


def _run_calibrate(args: argparse.Namespace) -> int:
    calibration = AutoCalibration(
        DetectorConfig(minimal_distance=args.min_distance, moving_average_window=args.window),
        CalibrationConfig(max_difference_between_rom_findings=args.tolerance),
    )
    bounds = calibration.run(load_readings(args.recording))
    result = {
        "turning_points": [asdict(tp) for tp in calibration.turning_points],
        "bounds": asdict(bounds) if bounds is not None else None,
    }
    print(json.dumps(result, indent=2))
    if bounds is None:
        eprint("Calibration incomplete: not enough consistent turning points.")
        return EXIT_INCOMPLETE
    return EXIT_OK


def _run_scale(args: argparse.Namespace) -> int:
    pipeline = ScalingPipeline(bounds=RomBounds.from_pair(args.low, args.high), inverted=args.inverted)
    for amount in pipeline.scale_many(args.values):
        print(f"{amount:.6f}")
    return EXIT_OK


def run(args: argparse.Namespace) -> int:
    try:
        if args.command == "calibrate":
            return _run_calibrate(args)
        return _run_scale(args)
    except (OSError, ValueError) as ex:  # recording, ordering and bounds errors are ValueErrors
        eprint(f"Error: {ex}")
        return EXIT_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
