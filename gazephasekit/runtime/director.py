from __future__ import annotations
import logging, time
from typing import Callable, List, Optional
from ..config import TrackerConfig
from ..fuse.phases import Phase, PhaseTrigger
from ..fuse.trail import CircleTrail
from .choreography import Cue, Scheduler, flash_script, intro_script, phase_script
from .events import Event, Gaze, Metrics
from .fps import FpsMeter
from .session import FrameResult, TrackerSession

log = logging.getLogger(__name__)

class Director:
    """
    Presentation-side driver around one TrackerSession.

    Each process() call runs the frame through the session, then lets due
    choreography cues fire and forwards the gaze point to the circle trail
    while it is enabled. Timers only advance on process()/tick(), never
    inside the session.
    """
    def __init__(self, config: Optional[TrackerConfig]=None, clock: Callable[[], float]=time.time):
        self.config = config or TrackerConfig()
        self.clock = clock
        self.session = TrackerSession(self.config)
        self.scheduler = Scheduler()
        self.trail = CircleTrail()
        self.fps = FpsMeter()
        self._pending: List[Event] = []
        self._start()

    def _start(self):
        now = self.clock()
        reveal, instructions = intro_script(self.config.choreography)
        self.scheduler.schedule_script(now, reveal, self._on_cue, group="intro")
        self.scheduler.schedule_script(now, instructions, self._on_cue, group="phase")

    def _on_cue(self, cue: Cue):
        now = self.clock()
        if cue.label == "trail_enable":
            self.trail.enabled = True
        elif cue.label == "finish_drawing":
            trig = self.session.finish_drawing(now)
            if trig is not None:
                self._on_trigger(trig, now)
        self._pending.append(Event(ts=now, type="cue", phase=int(self.session.phase),
                                   extra={"cue": cue.label, **cue.payload}))

    def _on_trigger(self, trig: PhaseTrigger, now: float):
        self._pending.append(Event(ts=trig.ts, type="phase_trigger", phase=int(trig.phase),
                                   completed=self.session.completed,
                                   extra={"next_phase": int(trig.next_phase), "flash": trig.flash}))
        self._pending.append(Event(ts=trig.ts, type="phase", phase=int(trig.next_phase),
                                   completed=self.session.completed,
                                   extra={"name": trig.next_phase.name}))
        if trig.flash:
            self.scheduler.cancel("flash")
            self.scheduler.schedule_script(now, flash_script(self.config.choreography), self._on_cue, group="flash")
        # a new phase supersedes whatever is left of the previous overlay timeline
        self.scheduler.cancel("phase")
        self.scheduler.schedule_script(now, phase_script(trig.next_phase, self.config.choreography), self._on_cue, group="phase")

    def tick(self) -> List[Event]:
        """Fire due cues without a frame (e.g. while no face is visible)."""
        self.scheduler.tick(self.clock())
        out, self._pending = self._pending, []
        return out

    def process(self, landmarks, width: int, height: int) -> List[Event]:
        now = self.clock()
        res: FrameResult = self.session.on_landmark_frame(landmarks, width, height, ts=now)
        fps = self.fps.tick(now)
        gaze = Gaze(x=res.gaze.x, y=res.gaze.y, h=res.gaze.h, v=res.gaze.v)
        self._pending.append(Event(ts=now, type="metrics", phase=int(res.phase), completed=res.completed, gaze=gaze,
                                   metrics=Metrics(ear=res.ear if res.ear_valid else None, ear_valid=res.ear_valid,
                                                   pupil=res.pupil, blinks=self.session.blink_count, fps=fps)))
        if res.blink is not None:
            self._pending.append(Event(ts=res.blink.ts, type="blink", extra={"count": res.blink.count}))
        if res.trigger is not None:
            self._on_trigger(res.trigger, now)
        self.scheduler.tick(now)
        if self.trail.enabled:
            seg = self.trail.add(res.gaze)
            if seg is not None:
                self._pending.append(Event(ts=now, type="trail", phase=int(self.session.phase),
                                           extra={"from": list(seg[0]), "to": list(seg[1])}))
        out, self._pending = self._pending, []
        return out

    @property
    def phase(self) -> Phase:
        return self.session.phase

    def stop(self):
        """Discard all session state and restart the intro timeline for a fresh session."""
        self.scheduler.cancel_all()
        self.trail.reset()
        self.session = TrackerSession(self.config)
        self.fps = FpsMeter()
        self._pending = []
        log.info("session discarded")
        self._start()
