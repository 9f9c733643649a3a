"""
각도 스무딩 Domain Logic
단일 극점 IIR 저역통과 (지수 이동 평균)
"""
import math

from pose_angle.constants import DEFAULT_SMOOTHING_FACTOR


class ExponentialSmoother:
    """
    프레임 간 keypoint 떨림을 줄이는 스칼라 필터

    - state = state * (1 - factor) + sample * factor
    - factor가 클수록 반응이 빠르고, 작을수록 부드럽지만 지연이 생긴다.
    - 0에서 시작해 처음 몇 프레임 동안 수렴. reset 없음.
    """

    def __init__(self, factor: float = DEFAULT_SMOOTHING_FACTOR, initial: float = 0.0):
        self._factor = self._check_factor(factor)
        self._value = float(initial)

    @property
    def factor(self) -> float:
        return self._factor

    @factor.setter
    def factor(self, factor: float) -> None:
        self._factor = self._check_factor(factor)

    @property
    def value(self) -> float:
        return self._value

    def update(self, sample: float) -> float:
        sample = float(sample)
        if not math.isfinite(sample):
            raise ValueError(f"sample must be finite, got {sample}")
        self._value = self._value * (1.0 - self._factor) + sample * self._factor
        return self._value

    @staticmethod
    def _check_factor(factor: float) -> float:
        factor = float(factor)
        if not 0.0 < factor < 1.0:
            raise ValueError(f"smoothing factor must be in (0, 1), got {factor}")
        return factor
