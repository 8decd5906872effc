from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import cv2

from .config import DetectorConfig
from .exceptions import HandGestureError, ModelLoadError
from .model_assets import ensure_hand_landmarker_task
from .types import NUM_LANDMARKS, HandLandmark, HandPose
from .utils import to_pixel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(config: DetectorConfig) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=config.static_image_mode,
        max_num_hands=config.max_num_hands,
        model_complexity=config.model_complexity,
        min_detection_confidence=config.min_detection_confidence,
        min_tracking_confidence=config.min_tracking_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(config: DetectorConfig) -> _TasksBackend:
    """
    Fallback for MediaPipe distributions that do not include `mp.solutions`.

    Uses the MediaPipe Tasks HandLandmarker API, which requires a `.task` model asset on disk.
    """
    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(config.tasks_model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=RunningMode.VIDEO,
        num_hands=config.max_num_hands,
        min_hand_detection_confidence=config.min_detection_confidence,
        min_tracking_confidence=config.min_tracking_confidence,
    )
    landmarker = HandLandmarker.create_from_options(options)
    return _TasksBackend(mp=mp, landmarker=landmarker)


def hand_pose_from_landmarks(
    landmarks, label: Optional[str], score: Optional[float], w: int, h: int
) -> HandPose:
    """
    Convert one hand of normalized MediaPipe landmarks into a pixel-space `HandPose`.

    `z` is scaled by the frame width, the same scale MediaPipe uses for x.
    """
    lm_px: List[HandLandmark] = []
    for idx, lm in enumerate(landmarks):
        x_px, y_px = to_pixel(float(lm.x), float(lm.y), w, h)
        lm_px.append(HandLandmark(idx=idx, x_px=float(x_px), y_px=float(y_px), z=float(getattr(lm, "z", 0.0)) * w))
    if len(lm_px) != NUM_LANDMARKS:
        raise HandGestureError(f"Expected {NUM_LANDMARKS} landmarks per hand, got {len(lm_px)}")
    return HandPose(landmarks=tuple(lm_px), handedness_label=label, handedness_score=score)


class HandLandmarkDetector:
    """
    Hand landmark detector using MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default), already mirrored
    when a selfie view is wanted: the gesture classifier's left/right rules assume it.
    """

    def __init__(self, config: Optional[DetectorConfig] = None) -> None:
        self.config = config or DetectorConfig()
        self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(self.config)
        self._tasks: Optional[_TasksBackend] = None
        self._tasks_timestamp_ms = 0

        if self._solutions is None:
            logger.info("mediapipe has no `solutions` module, using the Tasks HandLandmarker")
            try:
                self._tasks = _try_create_tasks_backend(self.config)
            except (ImportError, AttributeError, OSError, RuntimeError, ValueError) as e:
                raise ModelLoadError(
                    "Could not initialize MediaPipe Hands.\n"
                    "Your installed `mediapipe` package does not expose `mp.solutions`, and the Tasks fallback\n"
                    "could not be initialized."
                ) from e

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
            self._solutions = None
        if self._tasks is not None:
            self._tasks.landmarker.close()
            self._tasks = None

    def __enter__(self) -> "HandLandmarkDetector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> List[HandPose]:
        """Landmarks of every hand in the frame, in detection order (may be empty)."""
        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []

            handedness_list = results.multi_handedness or []
            hands: List[HandPose] = []
            for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
                label: Optional[str] = None
                score: Optional[float] = None
                if i < len(handedness_list) and handedness_list[i].classification:
                    c = handedness_list[i].classification[0]
                    label = getattr(c, "label", None)
                    score = float(getattr(c, "score", 0.0))
                hands.append(hand_pose_from_landmarks(hand_landmarks.landmark, label, score, w, h))
            return hands

        if self._tasks is None:
            return []

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # Tasks VIDEO mode requires monotonically increasing timestamps.
        self._tasks_timestamp_ms += 33
        result = self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        handedness_list = getattr(result, "handedness", None) or []

        hands = []
        for i, landmarks in enumerate(hand_landmarks_list):
            label = None
            score = None
            if i < len(handedness_list) and handedness_list[i]:
                cat0 = handedness_list[i][0]
                label = getattr(cat0, "category_name", None) or getattr(cat0, "display_name", None)
                score = float(getattr(cat0, "score", 0.0))
            hands.append(hand_pose_from_landmarks(landmarks, label, score, w, h))
        return hands
