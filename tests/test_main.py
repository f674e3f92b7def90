import unittest
from unittest import mock

import main
from romdetect.io.channel import SampleChannel


class SimulatedSessionTests(unittest.TestCase):
    def test_session_calibrates_despite_dropouts(self) -> None:
        self.assertEqual(main.run_session(duration=20.0), 0)

    def test_simulated_sensor_emits_dropouts_and_closes(self) -> None:
        channel = SampleChannel()
        main.simulate_sensor(channel, duration=20.0)
        self.assertTrue(channel.closed)
        values = []
        channel.drain(lambda reading: values.append(reading.value))
        self.assertEqual(len(values), int(20.0 / main.SAMPLE_INTERVAL))
        self.assertIn(main.DROPOUT_VALUE, values)

    @mock.patch.object(main.time, "sleep")
    @mock.patch.object(main.threading, "Thread")
    @mock.patch.object(main.SampleChannel, "pending", return_value=0)
    @mock.patch.object(main.SampleChannel, "closed", new_callable=mock.PropertyMock, side_effect=[False, False, True])
    @mock.patch.object(main.SampleChannel, "drain", side_effect=[0, 0])
    def test_idle_consumer_sleeps_between_drains(self, drain, _closed, _pending, _thread, sleep) -> None:
        self.assertEqual(main.run_session(duration=1.0), 1)
        self.assertEqual(drain.call_count, 2)
        self.assertEqual(sleep.call_args_list, [mock.call(main.POLL_INTERVAL)] * 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
