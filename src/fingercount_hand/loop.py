from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

import cv2

from .drawing import draw_frame
from .gestures import GestureClassifier
from .types import FrameResult, HandPose


logger = logging.getLogger(__name__)

RETRY_DELAY_S = 1.0


@dataclass(frozen=True)
class FrameOutput:
    """Everything produced for one processed frame."""

    frame: object  # annotated BGR image
    hands: List[HandPose]
    result: FrameResult


class GestureRecognitionLoop:
    """
    Capture -> detect -> classify -> draw, one frame at a time.

    The loop is idle until `start()` (or `toggle()`) is called. A new frame is only
    read after the previous one is fully processed. A failing frame is logged and
    the loop waits `retry_delay_s` before trying again instead of giving up.

    Args:
        capture: anything with `read() -> (ok, frame)`, e.g. `cv2.VideoCapture`
        detector: anything with `detect(frame) -> List[HandPose]`
        classifier: gesture classifier (default thresholds if omitted)
        mirror: flip frames horizontally before detection (selfie view)
        draw: draw overlays and the results panel onto the frame
        on_frame: called with every `FrameOutput`
    """

    def __init__(
        self,
        capture,
        detector,
        classifier: Optional[GestureClassifier] = None,
        *,
        mirror: bool = True,
        draw: bool = True,
        retry_delay_s: float = RETRY_DELAY_S,
        on_frame: Optional[Callable[[FrameOutput], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.capture = capture
        self.detector = detector
        self.classifier = classifier or GestureClassifier()
        self.mirror = mirror
        self.draw = draw
        self.retry_delay_s = retry_delay_s
        self.on_frame = on_frame
        self._sleep = sleep
        self._detecting = False
        self._exhausted = False

    @property
    def detecting(self) -> bool:
        return self._detecting

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def start(self) -> None:
        self._detecting = True

    def stop(self) -> None:
        self._detecting = False

    def toggle(self) -> bool:
        self._detecting = not self._detecting
        logger.info("Detection %s", "started" if self._detecting else "stopped")
        return self._detecting

    def step(self) -> Optional[FrameOutput]:
        """Process exactly one frame. Returns None once the capture source is exhausted."""
        ok, frame = self.capture.read()
        if not ok:
            self._exhausted = True
            return None

        if self.mirror:
            frame = cv2.flip(frame, 1)

        hands = list(self.detector.detect(frame))
        result = self.classifier.classify_frame(hands)
        if self.draw:
            frame = draw_frame(frame, hands, result)

        output = FrameOutput(frame=frame, hands=hands, result=result)
        if self.on_frame is not None:
            self.on_frame(output)
        return output

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Process frames while detecting.

        Returns:
            Number of frames processed successfully
        """
        processed = 0
        while self._detecting and not self._exhausted:
            if max_frames is not None and processed >= max_frames:
                break
            try:
                output = self.step()
            except Exception:
                logger.exception("Gesture recognition failed, retrying in %.1fs", self.retry_delay_s)
                self._sleep(self.retry_delay_s)
                continue
            if output is None:
                logger.info("Capture source exhausted after %d frames", processed)
                break
            processed += 1
        return processed
