import math
import unittest

from romdetect.config import SensorReading
from romdetect.quality.failures import OutOfOrderSampleError, is_insufficient
from romdetect.signals.window import SampleWindow


class SampleWindowTests(unittest.TestCase):
    def _window_with(self, *pairs: tuple) -> SampleWindow:
        window = SampleWindow(window_size=1.0)
        for value, ts in pairs:
            window.push(SensorReading(value=value, timestamp=ts))
        return window

    def test_average_uses_half_open_interval(self) -> None:
        window = self._window_with((10.0, 1.0), (20.0, 2.0), (30.0, 3.0))
        # (1, 3] excludes the reading at t=1 and includes the one at t=3.
        self.assertEqual(window.average_in_interval(1.0, 3.0), 25.0)
        self.assertEqual(window.average_in_interval(0.0, 1.0), 10.0)

    def test_average_of_empty_interval_is_nan(self) -> None:
        window = self._window_with((10.0, 1.0))
        result = window.average_in_interval(5.0, 6.0)
        self.assertTrue(math.isnan(result))
        self.assertTrue(is_insufficient(result))
        self.assertTrue(math.isnan(SampleWindow(0.5).average_in_interval(0.0, 1.0)))

    def test_prune_removes_only_strictly_older_readings(self) -> None:
        window = self._window_with((1.0, 0.0), (2.0, 1.0), (3.0, 2.0), (4.0, 3.0))
        removed = window.prune(3.0)  # default retain = 2 * window_size
        self.assertEqual(removed, 1)
        self.assertEqual([r.timestamp for r in window], [1.0, 2.0, 3.0])

    def test_prune_with_explicit_retain(self) -> None:
        window = self._window_with((1.0, 0.0), (2.0, 1.0), (3.0, 2.0))
        window.prune(2.0, retain=0.5)
        self.assertEqual(len(window), 1)
        self.assertEqual(window.latest_timestamp, 2.0)

    def test_push_rejects_out_of_order_readings(self) -> None:
        window = self._window_with((1.0, 2.0))
        with self.assertRaises(OutOfOrderSampleError):
            window.push(SensorReading(value=2.0, timestamp=1.5))
        self.assertEqual(len(window), 1)

    def test_push_accepts_equal_timestamps(self) -> None:
        window = self._window_with((1.0, 2.0), (3.0, 2.0))
        self.assertEqual(window.average_in_interval(1.0, 2.0), 2.0)

    def test_capacity_evicts_oldest(self) -> None:
        window = SampleWindow(window_size=10.0, capacity=2)
        for ts in range(3):
            window.push(SensorReading(value=float(ts), timestamp=float(ts)))
        self.assertEqual([r.value for r in window], [1.0, 2.0])

    def test_invalid_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            SampleWindow(window_size=0)
        with self.assertRaises(ValueError):
            SampleWindow(window_size=1.0, capacity=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
