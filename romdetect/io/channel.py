"""Hand-off between an asynchronous sample source and the processing core.

Sensor callbacks and polling timers run on their own threads while the
detector, scaler and filter are single-consumer objects. The channel is the
only shared object: producers publish, and the owning thread drains.
"""

from __future__ import annotations

import queue
import threading
from typing import Callable, Optional

from romdetect.config import SensorReading
from romdetect.quality.failures import ChannelClosedError


class SampleChannel:
    """Thread-safe FIFO of :class:`SensorReading` with a single consumer."""

    def __init__(self) -> None:
        self._queue: "queue.SimpleQueue[SensorReading]" = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def publish(self, value: float, timestamp: float) -> None:
        """Enqueue a reading; safe to call from any thread."""
        if self._closed.is_set():
            raise ChannelClosedError("cannot publish to a closed sample channel")
        self._queue.put(SensorReading(value=value, timestamp=timestamp))

    def pending(self) -> int:
        """Approximate number of queued readings."""
        return self._queue.qsize()

    def drain(self, handler: Callable[[SensorReading], object], max_items: Optional[int] = None) -> int:
        """Deliver queued readings to ``handler`` in publish order without blocking.

        Returns:
            Number of readings delivered.
        """
        delivered = 0
        while max_items is None or delivered < max_items:
            try:
                reading = self._queue.get_nowait()
            except queue.Empty:
                break
            handler(reading)
            delivered += 1
        return delivered

    def close(self) -> None:
        """Stop accepting readings; already queued readings can still be drained."""
        self._closed.set()
