from __future__ import annotations
import logging, math, time
from dataclasses import dataclass
from typing import List, Optional
from ..config import TrackerConfig
from ..eye.blink import BlinkDetector, BlinkEvent, compute_ear
from ..eye.gaze import GazePoint, GazeSmoother, average_ratio, compute_gaze_ratio
from ..eye.landmarks import LEFT_EYE, RIGHT_EYE, as_frame, check_frame_size, eye_points, iris_points
from ..eye.pupil import compute_pupil_diameter
from ..filters.window import SlidingWindow
from ..fuse.phases import Phase, PhaseMachine, PhaseTrigger

log = logging.getLogger(__name__)

@dataclass
class FrameResult:
    ts: float
    ear_left: float
    ear_right: float
    ear: float
    ear_valid: bool
    gaze: GazePoint
    pupil: float
    phase: Phase
    completed: List[bool]
    blink: Optional[BlinkEvent] = None
    trigger: Optional[PhaseTrigger] = None

class TrackerSession:
    """
    All per-session state: history windows, blink debounce, phase progress.
    Feed it one landmark snapshot per processed frame; drop it to stop.

    Non-finite EAR (coincident eye corners) is reported on the frame but kept
    out of the EAR history and the blink detector.
    """
    def __init__(self, config: Optional[TrackerConfig]=None):
        cfg = config or TrackerConfig()
        self.config = cfg
        self.ear_history = SlidingWindow(cfg.history.ear)
        self.pupil_history = SlidingWindow(cfg.history.pupil)
        self.gaze = GazeSmoother(cfg.history.gaze, screen=(cfg.screen.width, cfg.screen.height))
        self.blinks = BlinkDetector(cfg.blink.threshold, cfg.blink.min_frames)
        p = cfg.phases
        self.phases = PhaseMachine(p.left_threshold, p.right_threshold, p.required_frames, p.decay)
        self.frames = 0

    def on_landmark_frame(self, landmarks, width: int, height: int, ts: Optional[float]=None) -> FrameResult:
        check_frame_size(width, height)
        pts = as_frame(landmarks)
        ts = ts if ts is not None else time.time()
        self.frames += 1

        le, re = eye_points(pts, LEFT_EYE), eye_points(pts, RIGHT_EYE)
        li, ri = iris_points(pts, LEFT_EYE), iris_points(pts, RIGHT_EYE)

        ear_l = compute_ear(le, width, height)
        ear_r = compute_ear(re, width, height)
        ear = (ear_l + ear_r) / 2.0
        ear_valid = math.isfinite(ear)
        blink = None
        if ear_valid:
            self.ear_history.push(ear)
            blink = self.blinks.update(ear, ts)
        else:
            log.debug("frame %d: non-finite EAR (%s), skipped", self.frames, ear)

        ratio = average_ratio(compute_gaze_ratio(li, le, width, height),
                              compute_gaze_ratio(ri, re, width, height))
        gaze = self.gaze.push(ratio)
        trigger = self.phases.update(gaze.h, ts)

        pupil = (compute_pupil_diameter(li, width, height) + compute_pupil_diameter(ri, width, height)) / 2.0
        self.pupil_history.push(pupil)

        return FrameResult(ts=ts, ear_left=ear_l, ear_right=ear_r, ear=ear, ear_valid=ear_valid,
                           gaze=gaze, pupil=self.pupil_history.mean(), phase=self.phases.current,
                           completed=list(self.phases.completed), blink=blink, trigger=trigger)

    def finish_drawing(self, ts: Optional[float]=None) -> Optional[PhaseTrigger]:
        return self.phases.finish_drawing(ts)

    def ear_series(self) -> List[float]:
        """EAR samples for charting; empty until there are at least two."""
        return self.ear_history.values() if len(self.ear_history) >= 2 else []

    @property
    def current_ear(self) -> Optional[float]:
        return self.ear_history.last()

    @property
    def current_gaze(self) -> Optional[GazePoint]:
        return self.gaze.current()

    @property
    def current_pupil(self) -> Optional[float]:
        return self.pupil_history.mean()

    @property
    def blink_count(self) -> int:
        return self.blinks.count

    @property
    def phase(self) -> Phase:
        return self.phases.current

    @property
    def completed(self) -> List[bool]:
        return list(self.phases.completed)
