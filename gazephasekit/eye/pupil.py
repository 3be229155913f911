from __future__ import annotations
from .geometry import distance, scale_points
from .landmarks import IrisSlot as I, require_points

def compute_pupil_diameter(iris_pts, width: int, height: int) -> float:
    """Mean of the two opposing iris spans, in pixels."""
    p = scale_points(require_points(iris_pts, 4, "pupil diameter"), width, height)
    h = distance(p[I.SIDE_A], p[I.SIDE_B])
    v = distance(p[I.TOP], p[I.BOTTOM])
    return (h + v) / 2.0
