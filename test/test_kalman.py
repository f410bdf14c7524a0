import math
import pytest
from kalstream.core.kalman import (KalmanFilter, KalmanState,
                                   DEFAULT_ESTIMATE_UNCERTAINTY,
                                   DEFAULT_PROCESS_NOISE,
                                   DEFAULT_MEASUREMENT_NOISE)

def test_new_uses_fixed_defaults():
    for x in (0.0, -3.5, 1e9):
        kf = KalmanFilter.new(x)
        assert kf.estimate == x
        assert kf.estimate_uncertainty == DEFAULT_ESTIMATE_UNCERTAINTY == 1.0
        assert kf.process_noise == DEFAULT_PROCESS_NOISE == 1.0
        assert kf.measurement_noise == DEFAULT_MEASUREMENT_NOISE == 1.0

def test_scenario_one_two_three():
    kf = KalmanFilter.new(0.0)
    outs = [kf.update(y) for y in [1.0, 2.0, 3.0]]

    # P: 1 -> 2/3 -> 5/8 -> 13/21
    expected = [2 / 3, 3 / 2, 17 / 7]
    for got, want in zip(outs, expected):
        assert math.isclose(got, want, rel_tol=1e-12)
    assert math.isclose(kf.estimate_uncertainty, 13 / 21, rel_tol=1e-12)

def test_scenario_is_reproducible():
    a, b = KalmanFilter.new(0.0), KalmanFilter.new(0.0)
    assert [a.update(y) for y in [1.0, 2.0, 3.0]] == [b.update(y) for y in [1.0, 2.0, 3.0]]

def test_converges_on_constant_input():
    kf = KalmanFilter.new(0.0)
    v = 10.0
    prev_est, prev_P = kf.estimate, kf.estimate_uncertainty
    for _ in range(50):
        est = kf.update(v)
        assert kf.estimate_uncertainty <= prev_P
        assert prev_est <= est <= v
        prev_est, prev_P = est, kf.estimate_uncertainty
    assert math.isclose(kf.estimate, v, rel_tol=1e-6)

def test_zero_measurement_noise_trusts_observation():
    kf = KalmanFilter(0.0, measurement_noise=0.0)
    assert kf.update(5.0) == 5.0
    assert kf.estimate_uncertainty == 0.0

def test_zero_over_zero_gain_keeps_prior():
    kf = KalmanFilter(4.0, estimate_uncertainty=0.0, process_noise=0.0, measurement_noise=0.0)
    assert kf.update(100.0) == 4.0
    assert kf.estimate_uncertainty == 0.0
    assert not math.isnan(kf.estimate)

def test_noise_is_not_touched_by_update():
    kf = KalmanFilter(0.0, process_noise=0.3, measurement_noise=2.0)
    for y in [1.0, -4.0, 7.0]:
        kf.update(y)
    assert kf.process_noise == 0.3
    assert kf.measurement_noise == 2.0

def test_nan_propagates_without_error():
    kf = KalmanFilter.new(0.0)
    assert math.isnan(kf.update(float("nan")))

def test_negative_parameters_rejected():
    with pytest.raises(ValueError):
        KalmanFilter(0.0, process_noise=-1.0)
    with pytest.raises(ValueError):
        KalmanFilter(0.0, estimate_uncertainty=-0.1)

def test_attributes_are_read_only():
    kf = KalmanFilter.new(0.0)
    with pytest.raises(AttributeError):
        kf.estimate = 3.0

def test_snapshot_is_detached():
    kf = KalmanFilter.new(1.0)
    snap = kf.snapshot()
    kf.update(9.0)
    assert snap == KalmanState(1.0, 1.0, 1.0, 1.0)
    with pytest.raises(AttributeError):
        snap.estimate = 2.0

def test_restore_overwrites_everything():
    kf = KalmanFilter.new(0.0)
    kf.update(3.0)
    target = KalmanState(estimate=7.0, estimate_uncertainty=0.25,
                         process_noise=0.5, measurement_noise=4.0)
    kf.restore(target)
    assert kf.snapshot() == target

    other = KalmanFilter.new(0.0)
    other.restore(target)
    assert kf.update(2.0) == other.update(2.0)

def test_restore_rejects_foreign_state():
    with pytest.raises(TypeError):
        KalmanFilter.new(0.0).restore({"estimate": 1.0})

def test_restore_rejects_negative_variances():
    kf = KalmanFilter.new(1.0)
    kf.update(2.0)
    before = kf.snapshot()
    with pytest.raises(ValueError):
        kf.restore(KalmanState(0.0, -1.0, -2.0, 0.0))
    with pytest.raises(ValueError):
        kf.restore(KalmanState(0.0, 1.0, 1.0, -0.5))
    assert kf.snapshot() == before
