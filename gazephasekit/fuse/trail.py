from __future__ import annotations
from typing import Optional, Tuple

Segment = Tuple[Tuple[int,int], Tuple[int,int]]

class CircleTrail:
    """Turns gaze samples into line segments for the renderer; keeps only the last point."""
    def __init__(self):
        self.enabled = False
        self._last: Optional[Tuple[int,int]] = None

    def add(self, point) -> Optional[Segment]:
        cur = (int(point[0]), int(point[1]))
        prev, self._last = self._last, cur
        if prev is None: return None
        return (prev, cur)

    def reset(self):
        self.enabled = False
        self._last = None
