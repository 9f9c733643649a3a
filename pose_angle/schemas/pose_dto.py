"""
포즈 검출 관련 DTO
KeypointDetector 출력 → KeypointSelector 입출력용
"""
from typing import Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, Field

Point = Tuple[float, float]


class NormalizedLandmark(BaseModel):
    """검출기가 돌려주는 정규화 좌표 keypoint (검출기 원점 기준)"""
    x: float = Field(..., description="정규화된 X 좌표 (대략 0~1)")
    y: float = Field(..., description="정규화된 Y 좌표 (대략 0~1)")
    confidence: float = Field(..., description="신뢰도 (0 이하 = 검출 안 됨)")


class Keypoint(BaseModel):
    """픽셀 좌표계(좌상단 원점)로 변환된 keypoint"""
    name: str
    x: float = Field(..., description="픽셀 X")
    y: float = Field(..., description="픽셀 Y (아래로 증가)")
    confidence: float

    @property
    def position(self) -> Point:
        return (self.x, self.y)


class NoPose(BaseModel):
    """포즈가 하나도 없는 프레임"""
    kind: Literal["no_pose"] = "no_pose"


class PoseFound(BaseModel):
    """첫 번째 포즈의 관절 이름 → 정규화 landmark"""
    kind: Literal["pose"] = "pose"
    landmarks: Dict[str, NormalizedLandmark] = Field(default_factory=dict)


PoseDetection = Union[NoPose, PoseFound]


def first_pose(poses: List[Dict[str, NormalizedLandmark]]) -> PoseDetection:
    """검출 결과(0개 이상)에서 첫 포즈만 사용"""
    if not poses:
        return NoPose()
    return PoseFound(landmarks=poses[0])
