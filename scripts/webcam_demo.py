from __future__ import annotations

import argparse
import logging
import os
import platform
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from fingercount_hand.config import DetectorConfig  # noqa: E402
from fingercount_hand.detector import HandLandmarkDetector  # noqa: E402
from fingercount_hand.drawing import draw_text  # noqa: E402
from fingercount_hand.exceptions import CameraError  # noqa: E402
from fingercount_hand.labels import describe_frame  # noqa: E402
from fingercount_hand.loop import FrameOutput, GestureRecognitionLoop  # noqa: E402


WINDOW_NAME = "fingercount - gesture recognition"


def main() -> int:
    ap = argparse.ArgumentParser(description="Webcam finger counting / thumb gesture demo.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=640, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=480, help="Capture height (best effort)")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(args.camera, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        raise CameraError(
            f"Could not open camera index {args.camera}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, args.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, args.height)

    last_lines = []
    quit_requested = [False]

    def show(output: FrameOutput) -> None:
        lines = describe_frame(output.result)
        if lines != last_lines:
            print(" | ".join(lines))
            last_lines[:] = lines
        cv2.imshow(WINDOW_NAME, output.frame)
        key = cv2.waitKey(1) & 0xFF
        if key == ord(" "):
            loop.toggle()
        elif key in (ord("q"), 27):
            loop.stop()
            quit_requested[0] = True

    print("Press SPACE to start/stop recognition, 'q' or ESC to quit")

    with HandLandmarkDetector(DetectorConfig(max_num_hands=args.max_hands)) as detector:
        loop = GestureRecognitionLoop(cap, detector, mirror=not args.no_mirror, on_frame=show)
        loop.start()
        while not quit_requested[0]:
            if loop.detecting:
                loop.run()
                if loop.exhausted:
                    break
                continue

            # Idle: keep the preview alive until detection is toggled back on.
            ok, frame = cap.read()
            if not ok:
                break
            if not args.no_mirror:
                frame = cv2.flip(frame, 1)
            draw_text(frame, "paused - press SPACE", (12, 28))
            cv2.imshow(WINDOW_NAME, frame)
            key = cv2.waitKey(1) & 0xFF
            if key == ord(" "):
                loop.toggle()
            elif key in (ord("q"), 27):
                break

    cap.release()
    cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
