from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


NUM_LANDMARKS = 21
PALM_BASE = 0


@dataclass(frozen=True)
class HandLandmark:
    """A single hand landmark in image-pixel coordinates."""

    idx: int
    x_px: float
    y_px: float
    z: float = 0.0


@dataclass(frozen=True)
class HandPose:
    """The 21 landmarks of one detected hand in one frame."""

    landmarks: Tuple[HandLandmark, ...]  # length 21
    handedness_label: Optional[str] = None  # "Left" / "Right" (may be None)
    handedness_score: Optional[float] = None

    @classmethod
    def from_points(
        cls,
        points: Sequence[Sequence[float]],
        handedness_label: Optional[str] = None,
        handedness_score: Optional[float] = None,
    ) -> "HandPose":
        """Build a hand from raw `(x, y)` or `(x, y, z)` pixel tuples."""
        landmarks = []
        for idx, pt in enumerate(points):
            z = float(pt[2]) if len(pt) > 2 else 0.0
            landmarks.append(HandLandmark(idx=idx, x_px=float(pt[0]), y_px=float(pt[1]), z=z))
        return cls(
            landmarks=tuple(landmarks),
            handedness_label=handedness_label,
            handedness_score=handedness_score,
        )

    @property
    def palm_base(self) -> HandLandmark:
        return self.landmarks[PALM_BASE]

    def points_px(self) -> Tuple[Tuple[int, int], ...]:
        return tuple((int(round(lm.x_px)), int(round(lm.y_px))) for lm in self.landmarks)


class GestureKind(Enum):
    FINGER_COUNT = "finger_count"
    THUMB_UP = "thumb_up"
    THUMB_DOWN = "thumb_down"
    THUMB_LEFT = "thumb_left"
    THUMB_RIGHT = "thumb_right"
    FIST = "fist"


@dataclass(frozen=True)
class GestureLabel:
    """
    Gesture recognized for one hand.

    `count` is only set (1..5) for `GestureKind.FINGER_COUNT`.
    """

    kind: GestureKind
    count: Optional[int] = None

    @classmethod
    def finger_count(cls, n: int) -> "GestureLabel":
        if not 1 <= n <= 5:
            raise ValueError(f"Finger count must be between 1 and 5, got {n}")
        return cls(kind=GestureKind.FINGER_COUNT, count=n)

    @property
    def is_finger_count(self) -> bool:
        return self.kind is GestureKind.FINGER_COUNT


THUMB_UP = GestureLabel(GestureKind.THUMB_UP)
THUMB_DOWN = GestureLabel(GestureKind.THUMB_DOWN)
THUMB_LEFT = GestureLabel(GestureKind.THUMB_LEFT)
THUMB_RIGHT = GestureLabel(GestureKind.THUMB_RIGHT)
FIST = GestureLabel(GestureKind.FIST)


@dataclass(frozen=True)
class FrameResult:
    """Classification output for every hand visible in one frame."""

    hand_count: int
    gestures: Tuple[GestureLabel, ...]  # index-aligned with detection order

    @property
    def has_hands(self) -> bool:
        return self.hand_count > 0
