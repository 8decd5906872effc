from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import cv2
import numpy as np

from .labels import describe_frame
from .types import FrameResult, HandPose
from .utils import bbox_from_points


# One chain per finger, palm base first.
FINGER_CHAINS: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3, 4),
    (0, 5, 6, 7, 8),
    (0, 9, 10, 11, 12),
    (0, 13, 14, 15, 16),
    (0, 17, 18, 19, 20),
)

OVERLAY_COLOR = (255, 144, 30)  # BGR


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Tuple[int, int]], color=(255, 255, 0), thickness=2, closed=False):
    pts = np.array([(int(x), int(y)) for x, y in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness, cv2.LINE_AA)
    return frame


def draw_hand(frame, hand: HandPose, color=OVERLAY_COLOR, line_thickness: int = 3, point_radius: int = 6):
    """Draw the finger chains first, then every landmark as a filled marker on top."""
    pts = hand.points_px()
    for chain in FINGER_CHAINS:
        draw_polyline(frame, [pts[i] for i in chain], color=color, thickness=line_thickness)
    for pt in pts:
        cv2.circle(frame, pt, point_radius, color, -1, lineType=cv2.LINE_AA)
    return frame


def draw_results(frame, hands: Sequence[HandPose], result: FrameResult, origin: Tuple[int, int] = (12, 28)):
    """
    Results panel in the top-left corner plus a "Hand i" tag above each hand.

    OpenCV fonts cannot render emoji, so the plain-text labels are used.
    """
    x, y = origin
    for line in describe_frame(result, emoji=False):
        draw_text(frame, line, (x, y))
        y += 26

    for i, hand in enumerate(hands):
        x0, y0, _, _ = bbox_from_points(hand.points_px())
        draw_text(frame, f"Hand {i + 1}", (x0, max(12, y0 - 12)), scale=0.5, thickness=1)
    return frame


def draw_frame(frame, hands: Sequence[HandPose], result: FrameResult, draw_landmarks: bool = True):
    if draw_landmarks:
        for hand in hands:
            draw_hand(frame, hand)
    return draw_results(frame, hands, result)
