from __future__ import annotations
import time
from typing import Optional

class FpsMeter:
    """Frames per second, recomputed once every `period` seconds."""
    def __init__(self, period: float=1.0):
        self.period = period
        self.fps = 0
        self._frames = 0
        self._t0: Optional[float] = None

    def tick(self, t: Optional[float]=None) -> int:
        t = t if t is not None else time.time()
        if self._t0 is None: self._t0 = t
        self._frames += 1
        elapsed = t - self._t0
        if elapsed >= self.period:
            self.fps = int(round(self._frames / elapsed))
            self._frames = 0; self._t0 = t
        return self.fps
