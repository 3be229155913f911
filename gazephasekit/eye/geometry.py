from __future__ import annotations
import math
from typing import NamedTuple
import numpy as np

class EmptyInputError(ValueError):
    pass

class Point2D(NamedTuple):
    x: float
    y: float

class BoundingBox(NamedTuple):
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

def distance(p1, p2) -> float:
    return math.hypot(float(p2[0]) - float(p1[0]), float(p2[1]) - float(p1[1]))

def _as_points(points) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        raise EmptyInputError("point set is empty")
    return pts.reshape(-1, pts.shape[-1])

def centroid(points) -> Point2D:
    pts = _as_points(points)
    return Point2D(float(pts[:, 0].mean()), float(pts[:, 1].mean()))

def bounding_box(points) -> BoundingBox:
    pts = _as_points(points)
    xs, ys = pts[:, 0], pts[:, 1]
    return BoundingBox(float(xs.min()), float(xs.max()), float(ys.min()), float(ys.max()))

def scale_points(points, width: int, height: int) -> np.ndarray:
    """Normalized [0,1] landmarks -> pixel coordinates."""
    pts = np.asarray(points, dtype=np.float64)[:, :2]
    return pts * np.array([width, height], dtype=np.float64)
