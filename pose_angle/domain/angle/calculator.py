"""
각도 계산 Domain Logic
세 점(픽셀 좌표) → 꼭짓점 각도 (도)
"""
import math

from pose_angle.schemas.pose_dto import Point


class AngleCalculator:
    """관절 각도 계산기"""

    def angle(self, a: Point, vertex: Point, c: Point) -> float:
        """
        vertex에서 vertex→a, vertex→c 두 반직선 사이 각도 (0~180도)

        atan2 차이로 계산 후 절댓값, 180 초과면 360에서 뺀다.
        atan2(0, 0) == 0 이므로 모든 유한 입력에 대해 값이 정의된다.
        (겹친 점 처리는 FrameProcessor 정책에서 한다)
        """
        theta = (
            math.atan2(c[1] - vertex[1], c[0] - vertex[0])
            - math.atan2(a[1] - vertex[1], a[0] - vertex[0])
        )
        deg = abs(math.degrees(theta))
        if deg > 180.0:
            deg = 360.0 - deg
        return deg

    @staticmethod
    def is_degenerate(a: Point, vertex: Point, c: Point, min_length: float = 0.0) -> bool:
        """a 또는 c가 꼭짓점과 (min_length 이내로) 겹치는지"""
        la = math.hypot(a[0] - vertex[0], a[1] - vertex[1])
        lc = math.hypot(c[0] - vertex[0], c[1] - vertex[1])
        return la <= min_length or lc <= min_length
