from .detector import HandLandmarkDetector
from .gestures import GestureClassifier, classify_frame, classify_hand
from .labels import describe_frame, gesture_text
from .loop import GestureRecognitionLoop
from .types import FrameResult, GestureKind, GestureLabel, HandLandmark, HandPose

__all__ = [
    "HandLandmarkDetector",
    "GestureClassifier",
    "GestureRecognitionLoop",
    "classify_hand",
    "classify_frame",
    "gesture_text",
    "describe_frame",
    "HandPose",
    "HandLandmark",
    "GestureKind",
    "GestureLabel",
    "FrameResult",
]
