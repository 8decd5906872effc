"""
Test cases for gesture display text.
"""
import unittest

from fingercount_hand.labels import NO_HANDS_TEXT, describe_frame, gesture_text
from fingercount_hand.types import (
    FIST,
    THUMB_DOWN,
    THUMB_LEFT,
    THUMB_RIGHT,
    THUMB_UP,
    FrameResult,
    GestureLabel,
)


class TestGestureText(unittest.TestCase):
    """Test the label -> text mapping."""

    def test_special_gestures(self):
        self.assertEqual(gesture_text(THUMB_LEFT), "\U0001F449 Thumb left")
        self.assertEqual(gesture_text(THUMB_RIGHT), "\U0001F448 Thumb right")
        self.assertEqual(gesture_text(THUMB_UP), "\U0001F44D Thumb up")
        self.assertEqual(gesture_text(THUMB_DOWN), "\U0001F44E Thumb down")
        self.assertEqual(gesture_text(FIST), "✊ Fist")

    def test_finger_count(self):
        self.assertEqual(gesture_text(GestureLabel.finger_count(3)), "3 fingers")

    def test_plain_text(self):
        self.assertEqual(gesture_text(THUMB_UP, emoji=False), "Thumb up")
        self.assertEqual(gesture_text(GestureLabel.finger_count(2), emoji=False), "2 fingers")


class TestDescribeFrame(unittest.TestCase):
    """Test frame summaries."""

    def test_no_hands(self):
        self.assertEqual(describe_frame(FrameResult(hand_count=0, gestures=())), [NO_HANDS_TEXT])

    def test_two_hands(self):
        result = FrameResult(hand_count=2, gestures=(GestureLabel.finger_count(5), FIST))
        self.assertEqual(
            describe_frame(result, emoji=False),
            ["Hands: 2", "Hand 1: 5 fingers", "Hand 2: Fist"],
        )


if __name__ == "__main__":
    unittest.main()
