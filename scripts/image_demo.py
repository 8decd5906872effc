from __future__ import annotations

import argparse
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from fingercount_hand.config import DetectorConfig  # noqa: E402
from fingercount_hand.detector import HandLandmarkDetector  # noqa: E402
from fingercount_hand.drawing import draw_frame  # noqa: E402
from fingercount_hand.gestures import GestureClassifier, extended_finger_names  # noqa: E402
from fingercount_hand.labels import describe_frame  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify hand gestures in a still image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument("--mirror", action="store_true", help="Flip the image horizontally first (selfie view)")
    args = ap.parse_args()

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")
    if args.mirror:
        frame = cv2.flip(frame, 1)

    classifier = GestureClassifier()
    with HandLandmarkDetector(DetectorConfig(static_image_mode=True, max_num_hands=args.max_hands)) as detector:
        hands = detector.detect(frame)
    result = classifier.classify_frame(hands)
    out = draw_frame(frame, hands, result)

    ok = cv2.imwrite(args.out, out)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    for line in describe_frame(result):
        print(line)
    for i, h in enumerate(hands):
        extended = ",".join(extended_finger_names(h)) or "-"
        print(
            f"[{i}] {h.handedness_label} score={h.handedness_score} "
            f"extended={extended} palm_base=({h.palm_base.x_px}, {h.palm_base.y_px})"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
