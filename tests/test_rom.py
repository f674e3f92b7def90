import unittest

from romdetect.calibration.rom import compute_bounds, correct_bounds
from romdetect.config import TurningPoint


def points(direction: int, *values: float) -> list:
    return [TurningPoint(value=v, time=float(i), direction=direction) for i, v in enumerate(values)]


class ComputeBoundsTests(unittest.TestCase):
    def test_margin_correction_for_typical_calibration(self) -> None:
        turning_points = points(1, 500.0, 520.0) + points(-1, 100.0, 110.0)
        bounds = compute_bounds(turning_points, 150.0)

        high_raw, low_raw = 510.0, 105.0
        correction = 0.2 * (high_raw - low_raw)
        self.assertAlmostEqual(bounds.high, high_raw - max(high_raw * 0.05, correction))
        self.assertAlmostEqual(bounds.low, low_raw + max(low_raw * 0.05, correction))
        self.assertAlmostEqual(bounds.low, 186.0)
        self.assertAlmostEqual(bounds.high, 429.0)

    def test_one_point_per_direction_is_incomplete(self) -> None:
        self.assertIsNone(compute_bounds(points(1, 500.0) + points(-1, 100.0), 150.0))
        self.assertIsNone(compute_bounds([], 150.0))

    def test_missing_direction_is_incomplete(self) -> None:
        self.assertIsNone(compute_bounds(points(1, 500.0, 510.0, 505.0), 150.0))

    def test_last_two_points_must_agree_within_tolerance(self) -> None:
        turning_points = points(1, 500.0, 700.0) + points(-1, 100.0, 110.0)
        self.assertIsNone(compute_bounds(turning_points, 150.0))
        self.assertIsNotNone(compute_bounds(turning_points, 200.0))

    def test_only_last_two_points_per_direction_are_used(self) -> None:
        early = points(1, 900.0) + points(-1, 0.0)
        late = points(1, 500.0, 520.0) + points(-1, 100.0, 110.0)
        self.assertEqual(compute_bounds(early + late, 150.0), compute_bounds(late, 150.0))

    def test_interleaved_arrival_order(self) -> None:
        turning_points = [
            TurningPoint(500.0, 1.0, 1),
            TurningPoint(100.0, 2.0, -1),
            TurningPoint(520.0, 3.0, 1),
            TurningPoint(110.0, 4.0, -1),
        ]
        bounds = compute_bounds(turning_points, 150.0)
        self.assertAlmostEqual(bounds.low, 186.0)
        self.assertAlmostEqual(bounds.high, 429.0)

    def test_is_idempotent(self) -> None:
        turning_points = points(1, 480.0, 530.0) + points(-1, 90.0, 120.0)
        self.assertEqual(compute_bounds(turning_points, 150.0), compute_bounds(turning_points, 150.0))

    def test_small_movement_keeps_low_below_high(self) -> None:
        bounds = compute_bounds(points(-1, 400.0, 400.0) + points(1, 420.0, 420.0), 150.0)
        self.assertLessEqual(bounds.low, bounds.high)
        self.assertAlmostEqual(bounds.low, 399.0)
        self.assertAlmostEqual(bounds.high, 420.0)

    def test_degenerate_result_is_discarded(self) -> None:
        self.assertIsNone(compute_bounds(points(-1, 0.0, 0.0) + points(1, 0.0, 0.0), 150.0))


class CorrectBoundsTests(unittest.TestCase):
    def test_low_is_never_above_high(self) -> None:
        for low_raw, high_raw in [(100.0, 900.0), (400.0, 410.0), (900.0, 100.0), (0.0, 5.0)]:
            bounds = correct_bounds(low_raw, high_raw)
            self.assertLessEqual(bounds.low, bounds.high)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
