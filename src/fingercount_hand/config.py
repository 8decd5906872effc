from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GestureThresholds:
    """
    Fixed geometric thresholds used by the classifier.

    Values are in pixels / radians and were tuned for a 640x480 capture; they are
    not rescaled for other resolutions.
    """

    # thumb counts as extended when splayed sideways and bent away from its mid joint
    thumb_dx_px: float = 40.0
    thumb_dy_px: float = 20.0
    # other fingers: tip must rise above the base and not point sideways
    finger_rise_px: float = 30.0
    finger_min_angle_rad: float = 0.3
    # thumb left / right
    thumb_side_dx_px: float = 30.0
    thumb_side_max_dy_px: float = 50.0


DEFAULT_THRESHOLDS = GestureThresholds()


@dataclass(frozen=True)
class DetectorConfig:
    """MediaPipe Hands options."""

    static_image_mode: bool = False
    max_num_hands: int = 2
    model_complexity: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    tasks_model_path: str = "models/hand_landmarker.task"
