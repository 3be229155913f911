from __future__ import annotations
import heapq, itertools, logging
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Tuple
from ..config import ChoreographyConfig
from ..fuse.phases import Phase

log = logging.getLogger(__name__)

class Cue(NamedTuple):
    delay: float
    label: str
    payload: Mapping[str, Any] = MappingProxyType({})

def intro_script(cfg: ChoreographyConfig) -> Tuple[List[Cue], List[Cue]]:
    """
    Session start: (ui reveal cues, instruction cues). Only the instruction
    cues belong to the phase timeline and are superseded by a phase change.
    """
    reveal = [Cue(cfg.app_visible_s, "app_visible"),
              Cue(cfg.dashboard_s, "dashboard"),
              Cue(cfg.pointer_s, "pointer")]
    instructions = [Cue(cfg.intro_banner_s, "banner", {"text": "LET'S START THE EXERCISES", "action": ""}),
                    Cue(cfg.intro_hide_s, "banner_hide"),
                    Cue(cfg.first_instruction_s, "banner", {"text": "LOOK LEFT", "action": ""}),
                    Cue(cfg.first_instruction_hide_s, "banner_hide")]
    return reveal, instructions

def phase_script(phase: Phase, cfg: ChoreographyConfig) -> List[Cue]:
    """Overlay timeline for entering `phase`. Delays are relative to entry."""
    if phase == Phase.LOOK_RIGHT:
        return [Cue(0.0, "banner", {"text": "GOOD", "action": "NOW LOOK RIGHT"}),
                Cue(cfg.action_text_s, "action_text"),
                Cue(cfg.look_right_hide_s, "banner_hide")]
    if phase == Phase.DRAW_CIRCLE:
        return [Cue(0.0, "banner", {"text": "PERFECT", "action": "NOW DRAW A CIRCLE"}),
                Cue(cfg.action_text_s, "action_text"),
                Cue(cfg.circle_hide_s, "banner_hide"),
                Cue(cfg.trail_enable_s, "trail_enable"),
                Cue(cfg.circle_finish_s, "finish_drawing")]
    if phase == Phase.DONE:
        return [Cue(0.0, "final_message"),
                Cue(cfg.final_header_s, "final_header"),
                Cue(cfg.final_body_s, "final_body"),
                Cue(cfg.final_cta_s, "final_cta")]
    return []

def flash_script(cfg: ChoreographyConfig) -> List[Cue]:
    return [Cue(0.0, "flash_on"), Cue(cfg.flash_s, "flash_off")]

class Scheduler:
    """
    Non-blocking (delay, action) timer queue. Nothing runs until tick(now);
    due entries fire in due-time order, ties in scheduling order.
    """
    def __init__(self):
        self._q: List[Tuple[float, int, str, Optional[Callable[[], Any]], Optional[str]]] = []
        self._seq = itertools.count()

    def schedule(self, at: float, label: str, action: Optional[Callable[[], Any]]=None, group: Optional[str]=None):
        heapq.heappush(self._q, (at, next(self._seq), label, action, group))

    def schedule_script(self, now: float, cues: List[Cue], handler: Callable[[Cue], Any], group: Optional[str]=None):
        for cue in cues:
            self.schedule(now + cue.delay, cue.label, (lambda c=cue: handler(c)), group)

    def tick(self, now: float) -> List[str]:
        fired = []
        while self._q and self._q[0][0] <= now:
            _, _, label, action, _ = heapq.heappop(self._q)
            if action is not None: action()
            fired.append(label)
        return fired

    def cancel(self, group: str) -> int:
        keep = [e for e in self._q if e[4] != group]
        n = len(self._q) - len(keep)
        if n:
            heapq.heapify(keep)
            self._q = keep
            log.debug("cancelled %d pending %r cues", n, group)
        return n

    def cancel_all(self):
        if self._q: log.debug("cancelling %d pending cues", len(self._q))
        self._q.clear()

    @property
    def pending(self) -> int:
        return len(self._q)
