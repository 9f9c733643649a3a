"""
keypoint 선택/필터링 Domain Logic
정규화 landmark → 픽셀 keypoint, 관절 트리플 선택
"""
import math
from typing import Dict, List, Tuple

from pose_angle.common.errors import IncompleteLandmarks
from pose_angle.constants import DEFAULT_MIN_CONFIDENCE
from pose_angle.schemas.pose_dto import Keypoint, NormalizedLandmark
from pose_angle.utils.enums.enums import CoordinateOrigin


class KeypointSelector:
    """
    신뢰도 필터 + 좌표 변환 + 관절 선택

    출력 픽셀 좌표계는 항상 좌상단 원점(y 아래로 증가, OpenCV와 동일).
    검출기가 좌하단 원점이면 y를 뒤집는다. 원점이 어긋나면 세로 방향
    각도가 조용히 반전되므로 검출기가 origin을 명시해야 한다.
    """

    def __init__(
        self,
        origin: CoordinateOrigin = CoordinateOrigin.top_left,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ):
        self.origin = CoordinateOrigin(origin)
        self.min_confidence = float(min_confidence)

    def filter_and_project(
        self,
        landmarks: Dict[str, NormalizedLandmark],
        width: int,
        height: int,
    ) -> List[Keypoint]:
        """confidence > min_confidence 인 landmark만 픽셀 keypoint로 변환"""
        keypoints = []
        for name, lm in landmarks.items():
            if not lm.confidence > self.min_confidence:
                continue
            if not (math.isfinite(lm.x) and math.isfinite(lm.y)):
                continue
            x, y = self.to_pixel(lm.x, lm.y, width, height)
            keypoints.append(Keypoint(name=name, x=x, y=y, confidence=lm.confidence))
        return keypoints

    def to_pixel(self, nx: float, ny: float, width: int, height: int) -> Tuple[float, float]:
        """정규화 좌표 → 좌상단 원점 픽셀 좌표"""
        if self.origin == CoordinateOrigin.bottom_left:
            ny = 1.0 - ny
        return (float(nx) * float(width), float(ny) * float(height))

    def select(
        self,
        keypoints: List[Keypoint],
        triple: Tuple[str, str, str],
    ) -> Tuple[Keypoint, Keypoint, Keypoint]:
        """
        이름으로 관절 3개 선택. 하나라도 없으면 IncompleteLandmarks.
        (keypoints는 filter_and_project를 거친 것이어야 함)
        """
        by_name = {kp.name: kp for kp in keypoints}
        missing = [name for name in triple if name not in by_name]
        if missing:
            raise IncompleteLandmarks(missing)
        return by_name[triple[0]], by_name[triple[1]], by_name[triple[2]]
