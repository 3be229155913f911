import math
import numpy as np
import pytest
from gazephasekit.eye.blink import compute_ear, BlinkDetector
from gazephasekit.eye.landmarks import LandmarkContractError

def eye(corner_w=10.0, v1=4.0, v2=2.0):
    # corners (0,0)-(w,0); lids straddle the corner line
    return np.array([[0,0],[3,v1/2],[7,v2/2],[corner_w,0],[7,-v2/2],[3,-v1/2]], dtype=float)

def test_ear_closed_form():
    assert compute_ear(eye(), 1, 1) == pytest.approx((4.0 + 2.0) / (2 * 10.0))

def test_ear_scales_by_frame_size():
    pts = eye() / 100.0
    assert compute_ear(pts, 100, 100) == pytest.approx(0.3)
    # anisotropic scaling: vertical spans double, horizontal unchanged
    assert compute_ear(pts, 100, 200) == pytest.approx(0.6)

def test_ear_degenerate_corners():
    assert compute_ear(eye(corner_w=0.0), 1, 1) == math.inf
    assert math.isnan(compute_ear(np.zeros((6,2)), 1, 1))

def test_ear_wrong_point_count():
    with pytest.raises(LandmarkContractError):
        compute_ear(np.zeros((5,2)), 1, 1)

def run(seq, **kw):
    det = BlinkDetector(**kw)
    return det, [det.update(e, ts=float(i)) for i, e in enumerate(seq)]

def test_blink_counted_on_reopen():
    det, out = run([0.3,0.3,0.1,0.1,0.1,0.3,0.3])
    hits = [i for i, ev in enumerate(out) if ev]
    assert hits == [5]
    assert out[5].count == 1 and out[5].ts == 5.0
    assert det.count == 1 and det.last_blink_ts == 5.0

def test_single_dip_ignored():
    det, out = run([0.3,0.1,0.3])
    assert det.count == 0 and not any(out)

def test_threshold_is_strict():
    det, _ = run([0.21,0.21,0.3])
    assert det.count == 0

def test_count_matches_long_runs():
    rng = np.random.default_rng(3)
    seq = list(np.where(rng.random(500) < 0.4, 0.1, 0.3)) + [0.3]
    det, _ = run(seq)
    runs, cur = 0, 0
    for e in seq:
        if e < 0.21: cur += 1
        else:
            runs += cur >= 2; cur = 0
    assert det.count == runs

def test_reset():
    det, _ = run([0.1,0.1,0.3])
    det.reset()
    assert det.count == 0 and det.below == 0 and det.last_blink_ts is None
