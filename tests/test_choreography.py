from gazephasekit.config import ChoreographyConfig
from gazephasekit.fuse.phases import Phase
import pytest
from gazephasekit.runtime.choreography import Cue, Scheduler, phase_script, flash_script

def test_scheduler_fires_in_due_order():
    s = Scheduler(); hits = []
    s.schedule(2.0, "b", lambda: hits.append("b"))
    s.schedule(1.0, "a", lambda: hits.append("a"))
    s.schedule(2.0, "c")
    assert s.tick(0.5) == []
    assert s.tick(2.0) == ["a", "b", "c"]
    assert hits == ["a", "b"] and s.pending == 0

def test_cancel_all():
    s = Scheduler()
    s.schedule(1.0, "a")
    s.cancel_all()
    assert s.tick(10.0) == [] and s.pending == 0

def test_circle_script_timings():
    cues = {c.label: c.delay for c in phase_script(Phase.DRAW_CIRCLE, ChoreographyConfig())}
    assert cues == {"banner": 0.0, "action_text": 2.0, "banner_hide": 6.0,
                    "trail_enable": 6.0, "finish_drawing": 16.0}

def test_scripts_per_phase():
    cfg = ChoreographyConfig()
    assert phase_script(Phase.LOOK_LEFT, cfg) == []
    right = phase_script(Phase.LOOK_RIGHT, cfg)
    assert right[0].payload["action"] == "NOW LOOK RIGHT"
    assert [c.label for c in phase_script(Phase.DONE, cfg)][-1] == "final_cta"
    assert [c.delay for c in flash_script(cfg)] == [0.0, 0.2]

def test_schedule_script_passes_cue():
    s = Scheduler(); seen = []
    s.schedule_script(10.0, flash_script(ChoreographyConfig()), seen.append)
    s.tick(10.0)
    assert [c.label for c in seen] == ["flash_on"]
    s.tick(10.25)
    assert [c.label for c in seen] == ["flash_on", "flash_off"]

def test_default_payload_is_read_only():
    a, b = Cue(0.0, "x"), Cue(1.0, "y")
    with pytest.raises(TypeError):
        a.payload["k"] = 1
    assert dict(b.payload) == {}
