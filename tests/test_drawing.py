"""
Test cases for overlay drawing on blank frames.
"""
import unittest

import numpy as np

from fingercount_hand.drawing import FINGER_CHAINS, OVERLAY_COLOR, draw_frame, draw_hand, draw_results
from fingercount_hand.gestures import classify_frame

from synthetic_hands import extended_index, make_hand


def blank_frame():
    return np.zeros((480, 640, 3), dtype=np.uint8)


class TestDrawing(unittest.TestCase):
    """Test hand overlay and results panel."""

    def test_chains_cover_every_landmark(self):
        indices = sorted({i for chain in FINGER_CHAINS for i in chain})
        self.assertEqual(indices, list(range(21)))
        self.assertTrue(all(chain[0] == 0 for chain in FINGER_CHAINS))

    def test_landmarks_drawn_as_filled_markers(self):
        frame = blank_frame()
        hand = make_hand(extended_index())
        out = draw_hand(frame, hand)
        self.assertIs(out, frame)
        # index tip at (300, 50)
        self.assertEqual(tuple(int(c) for c in frame[50, 300]), OVERLAY_COLOR)
        self.assertEqual(tuple(int(c) for c in frame[52, 302]), OVERLAY_COLOR)

    def test_finger_chain_drawn_between_landmarks(self):
        frame = blank_frame()
        draw_hand(frame, make_hand(extended_index()))
        # midway between index base (300, 150) and mid (300, 100)
        self.assertEqual(tuple(int(c) for c in frame[125, 300]), OVERLAY_COLOR)

    def test_results_panel_without_hands(self):
        frame = blank_frame()
        draw_results(frame, [], classify_frame([]))
        self.assertTrue(frame[:40, :300].any())
        self.assertFalse(frame[200:, :].any())

    def test_draw_frame_without_landmarks(self):
        frame = blank_frame()
        hands = [make_hand(extended_index())]
        draw_frame(frame, hands, classify_frame(hands), draw_landmarks=False)
        self.assertNotEqual(tuple(int(c) for c in frame[50, 300]), OVERLAY_COLOR)


if __name__ == "__main__":
    unittest.main()
