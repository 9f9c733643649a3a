"""
파이프라인 예외 정의

- DetectionUnavailable / IncompleteLandmarks / DegenerateJointGeometry:
  프레임 단위 실패. FrameProcessor 안에서 복구되고 해당 프레임만 스킵된다.
- CaptureConfigurationError:
  캡처 세션 자체의 실패(장치 없음, 권한, 포맷 협상 실패). 세션에 치명적이며
  자동 재시도하지 않고 운영자에게 그대로 노출한다.
"""
from typing import Sequence


class PoseAngleError(Exception):
    """pose_angle 공통 베이스 예외"""


class DetectionUnavailable(PoseAngleError):
    """keypoint 검출기 호출 실패 (포즈 0개와 동일하게 취급)"""


class IncompleteLandmarks(PoseAngleError):
    """필요한 관절 3개 중 일부가 필터링된 keypoint 집합에 없음"""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"missing joints: {', '.join(self.missing)}")


class DegenerateJointGeometry(PoseAngleError):
    """꼭짓점과 다른 관절이 겹쳐 각도가 정의되지 않음"""


class CaptureConfigurationError(PoseAngleError):
    """캡처 장치 열기/설정 실패"""
