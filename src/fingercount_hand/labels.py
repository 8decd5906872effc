from __future__ import annotations

from typing import Dict, List

from .types import FrameResult, GestureKind, GestureLabel


NO_HANDS_TEXT = "No hands detected"

# Left / right are named for the mirrored view, so the pointing emoji follows the viewer.
_GESTURE_TEXT: Dict[GestureKind, str] = {
    GestureKind.THUMB_LEFT: "Thumb left",
    GestureKind.THUMB_RIGHT: "Thumb right",
    GestureKind.THUMB_UP: "Thumb up",
    GestureKind.THUMB_DOWN: "Thumb down",
    GestureKind.FIST: "Fist",
}

_GESTURE_EMOJI: Dict[GestureKind, str] = {
    GestureKind.THUMB_LEFT: "\U0001F449",  # pointing right
    GestureKind.THUMB_RIGHT: "\U0001F448",  # pointing left
    GestureKind.THUMB_UP: "\U0001F44D",
    GestureKind.THUMB_DOWN: "\U0001F44E",
    GestureKind.FIST: "✊",
}


def gesture_text(label: GestureLabel, emoji: bool = True) -> str:
    """
    Human-readable text for a gesture label.

    Set `emoji=False` for renderers that cannot draw emoji (e.g. OpenCV Hershey fonts).
    """
    if label.is_finger_count:
        return f"{label.count} fingers"
    text = _GESTURE_TEXT[label.kind]
    if emoji:
        return f"{_GESTURE_EMOJI[label.kind]} {text}"
    return text


def describe_frame(result: FrameResult, emoji: bool = True) -> List[str]:
    """Display lines for one frame: hand count first, then one line per hand."""
    if not result.has_hands:
        return [NO_HANDS_TEXT]
    lines = [f"Hands: {result.hand_count}"]
    for i, label in enumerate(result.gestures):
        lines.append(f"Hand {i + 1}: {gesture_text(label, emoji=emoji)}")
    return lines
