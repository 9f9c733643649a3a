from __future__ import annotations
from enum import Enum


# 정규화 좌표의 원점 (검출기마다 다름)
class CoordinateOrigin(str, Enum):
    top_left = "top_left"        # MediaPipe, OpenCV (y 아래로 증가)
    bottom_left = "bottom_left"  # Apple Vision 계열 (y 위로 증가)


# 캡처 출력 방향 (기기 회전)
class Orientation(str, Enum):
    portrait = "portrait"
    portrait_upside_down = "portrait_upside_down"
    landscape_left = "landscape_left"
    landscape_right = "landscape_right"


# 프레임 처리 결과 태그
class FrameOutcome(str, Enum):
    no_pose = "no_pose"          # 포즈 없음 또는 검출 실패
    incomplete = "incomplete"    # 관절 3개 중 누락
    degenerate = "degenerate"    # 관절이 꼭짓점과 겹침
    updated = "updated"          # 각도 갱신됨
