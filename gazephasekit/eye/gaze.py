from __future__ import annotations
import math
from typing import NamedTuple, Tuple
from .geometry import bounding_box, centroid, scale_points
from .landmarks import require_points
from ..filters.window import SlidingWindow

class GazeRatio(NamedTuple):
    h: float
    v: float

class GazePoint(NamedTuple):
    x: int
    y: int
    h: float
    v: float

NEUTRAL = GazeRatio(0.5, 0.5)

def compute_gaze_ratio(iris_pts, eye_pts, width: int, height: int) -> GazeRatio:
    """
    Iris center normalized inside the eye contour's bounding box.
    Not clamped: an occluded iris may land outside [0,1]. A collapsed box
    degrades to the centered ratio instead of failing the frame.
    """
    iris = scale_points(require_points(iris_pts, 4, "gaze iris"), width, height)
    eye = scale_points(require_points(eye_pts, 6, "gaze eye"), width, height)
    c = centroid(iris)
    box = bounding_box(eye)
    if box.width <= 0 or box.height <= 0:
        return NEUTRAL
    return GazeRatio((c.x - box.min_x) / box.width, (c.y - box.min_y) / box.height)

def average_ratio(a: GazeRatio, b: GazeRatio) -> GazeRatio:
    return GazeRatio((a.h + b.h) / 2.0, (a.v + b.v) / 2.0)

def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

class GazeSmoother:
    def __init__(self, maxlen: int=5, screen: Tuple[int,int]=(1280,720)):
        self.window = SlidingWindow(maxlen)
        self.screen = screen

    def push(self, ratio: GazeRatio) -> GazePoint:
        self.window.push((ratio.h, ratio.v))
        return self.current()

    def current(self):
        m = self.window.mean()
        if m is None: return None
        h, v = float(m[0]), float(m[1])
        w, ht = self.screen
        return GazePoint(_round_half_up(h * w), _round_half_up(v * ht), h, v)

    def clear(self):
        self.window.clear()
