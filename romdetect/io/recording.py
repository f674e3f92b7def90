"""On-disk recordings of sensor readings.

Recordings are JSONL files with one ``{"value": ..., "timestamp": ...}`` object
per line, which keeps them easy to inspect and to replay through the detector
offline.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Iterator

from romdetect.config import SensorReading
from romdetect.quality.failures import RecordingFormatError


def _reading_to_json(reading: SensorReading) -> str:
    return json.dumps(asdict(reading))


def _reading_from_obj(obj: dict, line_number: int) -> SensorReading:
    try:
        return SensorReading(value=float(obj["value"]), timestamp=float(obj["timestamp"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise RecordingFormatError(f"line {line_number}: invalid reading {obj!r}") from exc


def save_readings(
    path: Path, readings: Iterable[SensorReading], *, overwrite: bool = True
) -> Path:
    """Write readings to a JSONL recording.

    Args:
        path: Destination path for the JSONL file.
        readings: Iterable of SensorReading instances.
        overwrite: Whether to overwrite an existing file.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Recording already exists: {path}")

    with path.open("w", encoding="utf-8") as fh:
        for reading in readings:
            fh.write(_reading_to_json(reading))
            fh.write("\n")
    return path


def load_readings(path: Path) -> Iterator[SensorReading]:
    """Read readings from a JSONL recording, skipping blank lines."""
    with path.open("r", encoding="utf-8") as fh:
        for line_number, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                raise RecordingFormatError(f"line {line_number}: {exc}") from exc
            if not isinstance(obj, dict):
                raise RecordingFormatError(f"line {line_number}: expected an object")
            yield _reading_from_obj(obj, line_number)
