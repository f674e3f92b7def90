import unittest

from romdetect.config import RomBounds, SensorSettings, TurningPoint
from romdetect.io.scaling import ScalingPipeline, scale_value
from romdetect.quality.failures import DegenerateBoundsError


class RomBoundsTests(unittest.TestCase):
    def test_inverted_inputs_are_ordered(self) -> None:
        bounds = RomBounds(low=900.0, high=100.0)
        self.assertEqual((bounds.low, bounds.high), (100.0, 900.0))
        self.assertEqual(bounds, RomBounds.from_pair(900.0, 100.0))
        self.assertEqual(bounds.span, 800.0)

    def test_turning_point_direction_is_validated(self) -> None:
        with self.assertRaises(ValueError):
            TurningPoint(value=1.0, time=0.0, direction=0)


class ScalingPipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bounds = RomBounds(low=100.0, high=900.0)
        self.pipeline = ScalingPipeline(bounds=self.bounds)

    def test_low_bound_means_fully_pulled(self) -> None:
        # Before the flip the low bound sits at position 0.
        self.assertEqual((100.0 - self.bounds.low) / self.bounds.span, 0.0)
        self.assertEqual(self.pipeline.scale(100.0), 1.0)
        self.assertEqual(self.pipeline.scale(900.0), 0.0)
        self.assertEqual(self.pipeline.scale(500.0), 0.5)

    def test_values_outside_bounds_are_clamped(self) -> None:
        self.assertEqual(scale_value(20.0, self.bounds), 1.0)
        self.assertEqual(scale_value(1500.0, self.bounds), 0.0)

    def test_inverted_sensor_flips_output(self) -> None:
        pipeline = ScalingPipeline.from_sensor(self.bounds, SensorSettings(inverted=True))
        self.assertEqual(pipeline.scale(100.0), 0.0)
        self.assertEqual(pipeline.scale(900.0), 1.0)
        self.assertAlmostEqual(pipeline.scale(300.0), 0.25)

    def test_from_sensor_without_sensor_is_upright(self) -> None:
        pipeline = ScalingPipeline.from_sensor(self.bounds, None)
        self.assertFalse(pipeline.inverted)
        self.assertEqual(pipeline.scale(100.0), 1.0)

    def test_degenerate_bounds_are_rejected(self) -> None:
        with self.assertRaises(DegenerateBoundsError):
            ScalingPipeline(bounds=RomBounds(low=500.0, high=500.0))
        with self.assertRaises(DegenerateBoundsError):
            self.pipeline.with_bounds(RomBounds(low=1.0, high=1.0))

    def test_with_bounds_keeps_inversion(self) -> None:
        pipeline = self.pipeline.with_inversion(True).with_bounds(RomBounds(low=0.0, high=1000.0))
        self.assertTrue(pipeline.inverted)
        self.assertEqual(pipeline.scale_many([0.0, 1000.0]), (0.0, 1.0))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
