from __future__ import annotations
from collections import deque
from typing import Any, Deque, List, Optional
import numpy as np

class SlidingWindow:
    """
    Bounded FIFO; the oldest sample is evicted once `maxlen` is exceeded.
    mean() averages whatever is held, so early in a session it divides by
    fewer than `maxlen` samples.
    """
    def __init__(self, maxlen: int):
        if maxlen < 1:
            raise ValueError("maxlen must be >= 1")
        self.maxlen = maxlen
        self.buf: Deque[Any] = deque(maxlen=maxlen)

    def push(self, value):
        self.buf.append(value)

    def mean(self) -> Optional[Any]:
        if not self.buf: return None
        m = np.mean(np.asarray(self.buf, dtype=np.float64), axis=0)
        return float(m) if np.ndim(m) == 0 else m

    def values(self) -> List[Any]:
        return list(self.buf)

    def last(self) -> Optional[Any]:
        return self.buf[-1] if self.buf else None

    def clear(self):
        self.buf.clear()

    def __len__(self) -> int:
        return len(self.buf)
