# tests/unit/test_smoother.py
import math

import pytest

from pose_angle.domain.angle.smoother import ExponentialSmoother


def test_first_update_from_zero():
    s = ExponentialSmoother(factor=0.2)
    assert s.update(90.0) == pytest.approx(18.0)
    assert s.value == pytest.approx(18.0)


def test_converges_to_constant_input():
    """일정한 입력 x 반복 → x에 수렴 (오차 (1-f)^n * x)"""
    s = ExponentialSmoother(factor=0.2)
    for _ in range(100):
        s.update(120.0)
    assert s.value == pytest.approx(120.0, abs=1e-6)
    assert abs(120.0 - s.value) <= (0.8 ** 100) * 120.0 + 1e-9


def test_monotonic_towards_input():
    """상태 < x 이면 갱신마다 증가하고 x를 넘지 않는다"""
    s = ExponentialSmoother(factor=0.3, initial=10.0)
    prev = s.value
    for _ in range(30):
        cur = s.update(100.0)
        assert prev < cur <= 100.0
        prev = cur


def test_deterministic():
    samples = [10.0, 80.5, 33.3, 179.0, 0.0, 91.25]
    a, b = ExponentialSmoother(0.25), ExponentialSmoother(0.25)
    assert [a.update(x) for x in samples] == [b.update(x) for x in samples]


@pytest.mark.parametrize("factor", [0.0, 1.0, -0.1, 1.5])
def test_factor_out_of_range(factor):
    with pytest.raises(ValueError):
        ExponentialSmoother(factor=factor)


def test_factor_setter_validates_and_keeps_state():
    s = ExponentialSmoother(0.2)
    s.update(50.0)
    with pytest.raises(ValueError):
        s.factor = 1.0
    s.factor = 0.5
    assert s.factor == 0.5
    assert s.value == pytest.approx(10.0)


def test_non_finite_sample_rejected():
    s = ExponentialSmoother(0.2)
    with pytest.raises(ValueError):
        s.update(math.nan)
    with pytest.raises(ValueError):
        s.update(math.inf)
    assert s.value == 0.0
