#!/usr/bin/env python3
"""
Entry point for a simulated exercise session.

A background thread plays the part of the sensor callback and publishes a noisy
back-and-forth movement, with the odd no-echo dropout, into a SampleChannel. The main thread drains it into an
InputSession (pull amount) and an AutoCalibration (ROM bounds), and switches the
session to the calibrated bounds once they are found.
"""

from __future__ import annotations

import logging
import math
import random
import threading
import time

from romdetect.config import RomBounds
from romdetect.io.channel import SampleChannel
from romdetect.session import AutoCalibration, InputSession

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_INTERVAL = 0.05  # seconds
POLL_INTERVAL = SAMPLE_INTERVAL / 5
DROPOUT_VALUE = 8190.0  # what the range finder reports when no echo returns


def simulate_sensor(channel: SampleChannel, duration: float, seed: int = 7) -> None:
    rng = random.Random(seed)
    for i in range(int(duration / SAMPLE_INTERVAL)):
        t = i * SAMPLE_INTERVAL
        distance = 450.0 + 250.0 * math.sin(2 * math.pi * t / 4.0) + rng.gauss(0.0, 8.0)
        if rng.random() < 0.02:
            distance = DROPOUT_VALUE
        channel.publish(distance, t)
    channel.close()


def run_session(duration: float = 20.0) -> int:
    channel = SampleChannel()
    session = InputSession(RomBounds(low=0.0, high=1000.0), prevent_filtering=True)
    calibration = AutoCalibration.for_session(session)

    producer = threading.Thread(target=simulate_sensor, args=(channel, duration), daemon=True)
    producer.start()

    def consume(reading) -> None:
        session.feed(reading.value)
        calibration.feed(reading.value, reading.timestamp)

    while not channel.closed or channel.pending():
        if channel.drain(consume) == 0:
            time.sleep(POLL_INTERVAL)
    producer.join()

    if calibration.bounds is None:
        logger.error("Calibration incomplete after %.1f s", duration)
        return 1

    session = InputSession(calibration.bounds)
    logger.info(
        "Calibrated ROM %.1f-%.1f mm from %d turning points; pull at 450 mm = %.2f",
        calibration.bounds.low,
        calibration.bounds.high,
        len(calibration.turning_points),
        session.scale(450.0),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(run_session())
