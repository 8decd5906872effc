"""
Landmark-to-gesture classification.

Every function here is pure: a `HandPose` goes in, a `GestureLabel` comes out.
Nothing is remembered between frames.
"""
from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Tuple

from .config import DEFAULT_THRESHOLDS, GestureThresholds
from .types import (
    FIST,
    THUMB_DOWN,
    THUMB_LEFT,
    THUMB_RIGHT,
    THUMB_UP,
    FrameResult,
    GestureLabel,
    HandLandmark,
    HandPose,
)


THUMB = 0
FINGER_NAMES: Tuple[str, ...] = ("thumb", "index", "middle", "ring", "pinky")

FINGER_TIPS: Tuple[int, ...] = (4, 8, 12, 16, 20)
FINGER_MIDS: Tuple[int, ...] = (3, 7, 11, 15, 19)
FINGER_BASES: Tuple[int, ...] = (2, 6, 10, 14, 18)


def is_finger_extended(
    finger: int,
    tip: HandLandmark,
    mid: HandLandmark,
    base: HandLandmark,
    palm_base: HandLandmark,
    thresholds: GestureThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """
    Decide whether one finger is held out straight.

    Args:
        finger: 0 for the thumb, 1..4 for index..pinky
        tip, mid, base: the finger's tip / middle joint / base landmarks
        palm_base: landmark 0 of the hand (not used by the current rules)
        thresholds: geometric thresholds

    Returns:
        True if the finger is extended
    """
    if finger == THUMB:
        return (
            abs(tip.x_px - base.x_px) > thresholds.thumb_dx_px
            and abs(tip.y_px - mid.y_px) > thresholds.thumb_dy_px
        )

    # Image y grows downwards, so "above" means a smaller y.
    angle = math.atan2(tip.y_px - base.y_px, tip.x_px - base.x_px)
    return (
        tip.y_px < base.y_px - thresholds.finger_rise_px
        and abs(angle) > thresholds.finger_min_angle_rad
    )


def extended_fingers(hand: HandPose, thresholds: GestureThresholds = DEFAULT_THRESHOLDS) -> List[bool]:
    """Extension flags for thumb, index, middle, ring and pinky (in that order)."""
    lms = hand.landmarks
    palm = hand.palm_base
    return [
        is_finger_extended(finger, lms[tip], lms[mid], lms[base], palm, thresholds)
        for finger, (tip, mid, base) in enumerate(zip(FINGER_TIPS, FINGER_MIDS, FINGER_BASES))
    ]


def extended_finger_names(hand: HandPose, thresholds: GestureThresholds = DEFAULT_THRESHOLDS) -> List[str]:
    return [name for name, ext in zip(FINGER_NAMES, extended_fingers(hand, thresholds)) if ext]


def count_extended_fingers(hand: HandPose, thresholds: GestureThresholds = DEFAULT_THRESHOLDS) -> int:
    return sum(extended_fingers(hand, thresholds))


# --- Special gestures -------------------------------------------------------

_ThumbPredicate = Callable[[HandLandmark, HandLandmark, HandLandmark, GestureThresholds], bool]


def _thumb_up(tip: HandLandmark, base: HandLandmark, palm: HandLandmark, t: GestureThresholds) -> bool:
    return tip.y_px < palm.y_px and tip.y_px < base.y_px


def _thumb_down(tip: HandLandmark, base: HandLandmark, palm: HandLandmark, t: GestureThresholds) -> bool:
    return tip.y_px > palm.y_px and tip.y_px > base.y_px


# Left / right refer to the mirrored (selfie) view the detector is fed.
def _thumb_left(tip: HandLandmark, base: HandLandmark, palm: HandLandmark, t: GestureThresholds) -> bool:
    return tip.x_px > palm.x_px + t.thumb_side_dx_px and abs(tip.y_px - palm.y_px) < t.thumb_side_max_dy_px


def _thumb_right(tip: HandLandmark, base: HandLandmark, palm: HandLandmark, t: GestureThresholds) -> bool:
    return tip.x_px < palm.x_px - t.thumb_side_dx_px and abs(tip.y_px - palm.y_px) < t.thumb_side_max_dy_px


# First match wins. Up/down are checked before left/right because a vertical
# thumb can also satisfy the loose horizontal thresholds.
SPECIAL_GESTURES: Tuple[Tuple[_ThumbPredicate, GestureLabel], ...] = (
    (_thumb_up, THUMB_UP),
    (_thumb_down, THUMB_DOWN),
    (_thumb_left, THUMB_LEFT),
    (_thumb_right, THUMB_RIGHT),
)


def detect_special_gesture(
    hand: HandPose, thresholds: GestureThresholds = DEFAULT_THRESHOLDS
) -> Optional[GestureLabel]:
    """
    Thumb direction of a hand with no extended fingers.

    Returns:
        One of the thumb labels, or None if the thumb points nowhere in particular
    """
    lms = hand.landmarks
    tip = lms[FINGER_TIPS[THUMB]]
    base = lms[FINGER_BASES[THUMB]]
    palm = hand.palm_base
    for predicate, label in SPECIAL_GESTURES:
        if predicate(tip, base, palm, thresholds):
            return label
    return None


def classify_hand(hand: HandPose, thresholds: GestureThresholds = DEFAULT_THRESHOLDS) -> GestureLabel:
    """Map one hand to exactly one gesture label."""
    count = count_extended_fingers(hand, thresholds)
    if count > 0:
        return GestureLabel.finger_count(count)
    return detect_special_gesture(hand, thresholds) or FIST


def classify_frame(
    hands: Iterable[HandPose], thresholds: GestureThresholds = DEFAULT_THRESHOLDS
) -> FrameResult:
    gestures = tuple(classify_hand(hand, thresholds) for hand in hands)
    return FrameResult(hand_count=len(gestures), gestures=gestures)


class GestureClassifier:
    """
    Stateless gesture classifier bound to one set of thresholds.

    Safe to share between threads and to call for independent hands in any order.
    """

    def __init__(self, thresholds: GestureThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def classify(self, hand: HandPose) -> GestureLabel:
        return classify_hand(hand, self.thresholds)

    def classify_frame(self, hands: Iterable[HandPose]) -> FrameResult:
        return classify_frame(hands, self.thresholds)
