import threading
import unittest

from romdetect.io.channel import SampleChannel
from romdetect.quality.failures import ChannelClosedError


class SampleChannelTests(unittest.TestCase):
    def test_readings_from_producer_thread_drain_in_order(self) -> None:
        channel = SampleChannel()

        def produce() -> None:
            for i in range(200):
                channel.publish(float(i), i * 0.05)

        producer = threading.Thread(target=produce)
        producer.start()
        producer.join()

        received = []
        self.assertEqual(channel.drain(received.append), 200)
        self.assertEqual([r.value for r in received], [float(i) for i in range(200)])
        self.assertEqual(channel.pending(), 0)

    def test_drain_respects_max_items(self) -> None:
        channel = SampleChannel()
        for i in range(5):
            channel.publish(float(i), float(i))
        received = []
        self.assertEqual(channel.drain(received.append, max_items=2), 2)
        self.assertEqual(channel.pending(), 3)

    def test_drain_on_empty_channel_returns_immediately(self) -> None:
        self.assertEqual(SampleChannel().drain(lambda reading: None), 0)

    def test_closed_channel_rejects_publish_but_drains_backlog(self) -> None:
        channel = SampleChannel()
        channel.publish(1.0, 0.0)
        channel.close()
        self.assertTrue(channel.closed)
        with self.assertRaises(ChannelClosedError):
            channel.publish(2.0, 1.0)
        received = []
        channel.drain(received.append)
        self.assertEqual(len(received), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
