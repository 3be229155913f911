import pytest
from gazephasekit.fuse.phases import PhaseMachine, Phase, SustainRule

def feed(m, seq):
    return [m.update(h, ts=float(i)) for i, h in enumerate(seq)]

def test_left_advances_on_tenth_frame():
    m = PhaseMachine()
    out = feed(m, [0.7] * 10)
    assert not any(out[:9])
    trig = out[9]
    assert trig.phase == Phase.LOOK_LEFT and trig.next_phase == Phase.LOOK_RIGHT and trig.flash
    assert m.current == Phase.LOOK_RIGHT
    assert m.is_completed(Phase.LOOK_LEFT)
    assert m.frames(Phase.LOOK_LEFT) == 0

def test_dropout_decays_by_two():
    m = PhaseMachine()
    feed(m, [0.7] * 9)
    assert m.frames(Phase.LOOK_LEFT) == 9
    m.update(0.5)
    assert m.frames(Phase.LOOK_LEFT) == 7
    assert m.update(0.7) is None and m.update(0.7) is None
    assert m.update(0.7) is not None  # 13th frame overall
    assert m.current == Phase.LOOK_RIGHT

def test_decay_floors_at_zero():
    m = PhaseMachine()
    feed(m, [0.7, 0.5, 0.5])
    assert m.frames(Phase.LOOK_LEFT) == 0

def test_threshold_equality_does_not_qualify():
    m = PhaseMachine()
    feed(m, [0.65] * 20)
    assert m.current == Phase.LOOK_LEFT and m.frames(Phase.LOOK_LEFT) == 0

def test_right_threshold_equality_does_not_qualify():
    m = PhaseMachine()
    feed(m, [0.7] * 10)
    feed(m, [0.35] * 20)
    assert m.current == Phase.LOOK_RIGHT and m.frames(Phase.LOOK_RIGHT) == 0

def test_inactive_phase_is_inert():
    m = PhaseMachine()
    feed(m, [0.1] * 20)
    assert m.current == Phase.LOOK_LEFT
    assert m.frames(Phase.LOOK_RIGHT) == 0

def test_completed_phase_is_idempotent():
    m = PhaseMachine()
    feed(m, [0.7] * 10)
    out = feed(m, [0.7] * 15)
    assert not any(out)
    assert m.frames(Phase.LOOK_LEFT) == 0
    assert m.completed == [True, False, False, False]
    assert len(m.history) == 1

def test_full_sequence_to_done():
    m = PhaseMachine()
    feed(m, [0.7] * 10)
    out = feed(m, [0.3] * 10)
    assert out[-1].phase == Phase.LOOK_RIGHT and m.current == Phase.DRAW_CIRCLE
    # no gaze rule while drawing
    assert not any(feed(m, [0.7] * 20 + [0.1] * 20))
    trig = m.finish_drawing(ts=99.0)
    assert trig.phase == Phase.DRAW_CIRCLE and trig.next_phase == Phase.DONE and not trig.flash
    assert m.done and m.completed == [True, True, True, False]
    assert m.finish_drawing() is None
    assert not any(feed(m, [0.7] * 20))

def test_finish_drawing_only_when_active():
    m = PhaseMachine()
    assert m.finish_drawing() is None
    assert m.current == Phase.LOOK_LEFT

def test_thresholds_must_straddle_center():
    with pytest.raises(ValueError):
        PhaseMachine(left_threshold=0.4)
    with pytest.raises(ValueError):
        PhaseMachine(right_threshold=0.5)

def test_sustain_rule_custom():
    rule = SustainRule(Phase.LOOK_LEFT, lambda v: v > 0, required=3, decay=1)
    assert [rule.step(v) for v in (1, 1, -1, 1, 1)] == [False, False, False, False, True]
