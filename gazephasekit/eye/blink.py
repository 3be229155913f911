from __future__ import annotations
import logging, math, time
from typing import NamedTuple, Optional
from .geometry import distance, scale_points
from .landmarks import EyeSlot as S, require_points

log = logging.getLogger(__name__)

def compute_ear(eye_pts, width: int, height: int) -> float:
    """
    Eye-Aspect-Ratio of one eye from its six contour points (normalized coords).
    Coincident corners give inf (or nan when every span is zero); callers decide
    what to do with non-finite values.
    """
    p = scale_points(require_points(eye_pts, 6, "EAR"), width, height)
    A = distance(p[S.UPPER_A], p[S.LOWER_A])
    B = distance(p[S.UPPER_B], p[S.LOWER_B])
    C = distance(p[S.CORNER_A], p[S.CORNER_B])
    if C == 0.0:
        return math.inf if (A + B) > 0.0 else math.nan
    return (A + B) / (2.0 * C)

class BlinkEvent(NamedTuple):
    count: int
    ts: float

class BlinkDetector:
    """
    Counts a blink when the eye reopens after at least `min_frames`
    consecutive samples below `threshold`.
    """
    def __init__(self, threshold: float=0.21, min_frames: int=2):
        self.threshold = threshold
        self.min_frames = min_frames
        self.below = 0
        self.count = 0
        self.last_blink_ts: Optional[float] = None

    def update(self, ear: float, ts: Optional[float]=None) -> Optional[BlinkEvent]:
        if ear < self.threshold:
            self.below += 1
            return None
        run, self.below = self.below, 0
        if run < self.min_frames:
            return None
        self.count += 1
        self.last_blink_ts = ts if ts is not None else time.time()
        log.debug("blink #%d after %d closed frames", self.count, run)
        return BlinkEvent(self.count, self.last_blink_ts)

    def reset(self):
        self.below = 0; self.count = 0; self.last_blink_ts = None
