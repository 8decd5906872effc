from __future__ import annotations

from typing import Iterable, Tuple


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def to_pixel(x_norm: float, y_norm: float, w: int, h: int) -> Tuple[int, int]:
    """Normalized [0..1] model coordinates to pixel coordinates inside a `w` x `h` frame."""
    x_px = clamp_int(int(round(x_norm * w)), 0, w - 1)
    y_px = clamp_int(int(round(y_norm * h)), 0, h - 1)
    return x_px, y_px


def bbox_from_points(points: Iterable[Tuple[int, int]]) -> Tuple[int, int, int, int]:
    xs = []
    ys = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        return (0, 0, 0, 0)
    return (min(xs), min(ys), max(xs), max(ys))
