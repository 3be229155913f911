from __future__ import annotations
import logging, time
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Deque, Dict, List, NamedTuple, Optional

log = logging.getLogger(__name__)

class Phase(IntEnum):
    LOOK_LEFT = 0
    LOOK_RIGHT = 1
    DRAW_CIRCLE = 2
    DONE = 3

class PhaseTrigger(NamedTuple):
    phase: Phase
    next_phase: Phase
    ts: float
    flash: bool = True

@dataclass
class SustainRule:
    """
    Debounced predicate: satisfied after `required` net qualifying frames.
    A failing frame takes `decay` frames back off the counter instead of
    zeroing it.
    """
    phase: Phase
    predicate: Callable[[float], bool]
    required: int = 10
    decay: int = 2
    frames: int = 0

    def step(self, value: float) -> bool:
        if self.predicate(value):
            self.frames += 1
            return self.frames >= self.required
        self.frames = max(0, self.frames - self.decay)
        return False

class PhaseMachine:
    """
    LOOK_LEFT -> LOOK_RIGHT -> DRAW_CIRCLE -> DONE, strictly in order.

    The gaze-ratio mapping is mirrored: looking left raises h, looking
    right lowers it. Only the active phase's rule sees the frame.
    DRAW_CIRCLE has no gaze rule; it is closed by finish_drawing().
    """
    def __init__(self, left_threshold: float=0.65, right_threshold: float=0.35,
                 required: int=10, decay: int=2, history: int=16):
        if not right_threshold < 0.5 < left_threshold:
            raise ValueError("thresholds must straddle 0.5 (right < 0.5 < left)")
        self.left_threshold = left_threshold
        self.right_threshold = right_threshold
        self.rules: Dict[Phase, SustainRule] = {
            Phase.LOOK_LEFT: SustainRule(Phase.LOOK_LEFT, lambda h: h > self.left_threshold, required, decay),
            Phase.LOOK_RIGHT: SustainRule(Phase.LOOK_RIGHT, lambda h: h < self.right_threshold, required, decay),
        }
        self.current = Phase.LOOK_LEFT
        self.completed: List[bool] = [False] * len(Phase)
        self.history: Deque[PhaseTrigger] = deque(maxlen=history)

    def frames(self, phase: Phase) -> int:
        rule = self.rules.get(phase)
        return rule.frames if rule else 0

    def is_completed(self, phase: Phase) -> bool:
        return self.completed[phase]

    @property
    def done(self) -> bool:
        return self.current == Phase.DONE

    def _complete(self, phase: Phase, ts: Optional[float], flash: bool) -> PhaseTrigger:
        self.completed[phase] = True
        nxt = Phase(phase + 1)
        self.current = nxt
        trig = PhaseTrigger(phase, nxt, ts if ts is not None else time.time(), flash)
        self.history.append(trig)
        log.info("phase %s completed, now %s", phase.name, nxt.name)
        return trig

    def update(self, gaze_h: float, ts: Optional[float]=None) -> Optional[PhaseTrigger]:
        phase = self.current
        rule = self.rules.get(phase)
        if rule is None or self.completed[phase]:
            return None
        if not rule.step(gaze_h):
            return None
        rule.frames = 0
        return self._complete(phase, ts, flash=True)

    def finish_drawing(self, ts: Optional[float]=None) -> Optional[PhaseTrigger]:
        if self.current != Phase.DRAW_CIRCLE:
            return None
        return self._complete(Phase.DRAW_CIRCLE, ts, flash=False)
