"""
Test cases for the recognition loop with fake capture and detector objects.
"""
import unittest

import numpy as np

from fingercount_hand.loop import GestureRecognitionLoop
from fingercount_hand.types import FIST, GestureLabel

from synthetic_hands import extended_index, make_hand


class FakeCapture:
    def __init__(self, frames):
        self.frames = list(frames)
        self.reads = 0

    def read(self):
        self.reads += 1
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)


class FakeDetector:
    """Returns the queued results in order; an exception instance is raised instead."""

    def __init__(self, results):
        self.results = list(results)
        self.frames = []

    def detect(self, frame):
        self.frames.append(frame)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def frames(n):
    return [np.zeros((48, 64, 3), dtype=np.uint8) for _ in range(n)]


class TestGestureRecognitionLoop(unittest.TestCase):
    """Test frame processing, stop flag and retry behaviour."""

    def setUp(self):
        self.sleeps = []

    def make_loop(self, capture, detector, **kwargs):
        kwargs.setdefault("draw", False)
        return GestureRecognitionLoop(capture, detector, sleep=self.sleeps.append, **kwargs)

    def test_idle_loop_reads_nothing(self):
        capture = FakeCapture(frames(2))
        loop = self.make_loop(capture, FakeDetector([]))
        self.assertFalse(loop.detecting)
        self.assertEqual(loop.run(), 0)
        self.assertEqual(capture.reads, 0)

    def test_runs_until_capture_exhausted(self):
        hands = [make_hand(extended_index()), make_hand()]
        detector = FakeDetector([hands, [], hands])
        outputs = []
        loop = self.make_loop(FakeCapture(frames(3)), detector, on_frame=outputs.append)
        loop.start()

        self.assertEqual(loop.run(), 3)
        self.assertTrue(loop.exhausted)
        self.assertEqual([o.result.hand_count for o in outputs], [2, 0, 2])
        self.assertEqual(outputs[0].result.gestures, (GestureLabel.finger_count(1), FIST))
        self.assertFalse(outputs[1].result.has_hands)

    def test_failed_frame_is_retried_after_delay(self):
        detector = FakeDetector([RuntimeError("model hiccup"), [make_hand()]])
        outputs = []
        loop = self.make_loop(FakeCapture(frames(2)), detector, on_frame=outputs.append, retry_delay_s=1.0)
        loop.start()

        self.assertEqual(loop.run(), 1)
        self.assertEqual(self.sleeps, [1.0])
        self.assertEqual(outputs[0].result.gestures, (FIST,))

    def test_stop_flag_checked_between_frames(self):
        detector = FakeDetector([[], [], []])
        capture = FakeCapture(frames(3))
        loop = self.make_loop(capture, detector, on_frame=lambda output: loop.stop())
        loop.start()

        self.assertEqual(loop.run(), 1)
        self.assertEqual(capture.reads, 1)
        self.assertFalse(loop.exhausted)

    def test_max_frames(self):
        loop = self.make_loop(FakeCapture(frames(5)), FakeDetector([[]] * 5))
        loop.start()
        self.assertEqual(loop.run(max_frames=2), 2)

    def test_toggle(self):
        loop = self.make_loop(FakeCapture([]), FakeDetector([]))
        self.assertTrue(loop.toggle())
        self.assertFalse(loop.toggle())

    def test_frames_are_mirrored_before_detection(self):
        frame = np.zeros((4, 8, 3), dtype=np.uint8)
        frame[:, 0] = 255
        detector = FakeDetector([[]])
        loop = self.make_loop(FakeCapture([frame]), detector)
        loop.step()
        seen = detector.frames[0]
        self.assertTrue((seen[:, -1] == 255).all())
        self.assertFalse(seen[:, 0].any())

    def test_mirroring_can_be_disabled(self):
        frame = np.zeros((4, 8, 3), dtype=np.uint8)
        frame[:, 0] = 255
        detector = FakeDetector([[]])
        loop = self.make_loop(FakeCapture([frame]), detector, mirror=False)
        loop.step()
        self.assertTrue((detector.frames[0][:, 0] == 255).all())

    def test_step_draws_overlay(self):
        detector = FakeDetector([[make_hand(extended_index())]])
        loop = GestureRecognitionLoop(FakeCapture([np.zeros((480, 640, 3), dtype=np.uint8)]), detector)
        output = loop.step()
        self.assertTrue(output.frame.any())


if __name__ == "__main__":
    unittest.main()
