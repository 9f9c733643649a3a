"""
프레임 관련 DTO
FrameSource → FrameProcessor → 표시 싱크 입출력용
"""
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, Field

from pose_angle.schemas.pose_dto import Keypoint
from pose_angle.utils.enums.enums import FrameOutcome, Orientation


class Frame(BaseModel):
    """캡처된 1개 프레임 (BGR 이미지 + 메타데이터)"""
    image: np.ndarray
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    index: int = Field(default=0, ge=0, description="세션 내 프레임 번호")
    timestamp: float = Field(default=0.0, description="캡처 시각 (monotonic 초)")
    orientation: Orientation = Orientation.portrait

    class Config:
        # NumPy 배열 보관
        arbitrary_types_allowed = True

    @classmethod
    def from_image(cls, image: np.ndarray, index: int = 0, timestamp: float = 0.0,
                   orientation: Orientation = Orientation.portrait) -> "Frame":
        h, w = int(image.shape[0]), int(image.shape[1])
        return cls(image=image, width=w, height=h, index=index,
                   timestamp=timestamp, orientation=orientation)


class DisplayResult(BaseModel):
    """
    표시 싱크로 넘기는 1프레임 결과 (불변)

    - status == updated 일 때만 angle/angle_text가 채워진다.
    - no_pose면 image는 원본 프레임 그대로.
    """
    image: np.ndarray
    status: FrameOutcome
    angle: Optional[float] = None
    angle_text: Optional[str] = None
    raw_angle: Optional[float] = None
    keypoints: List[Keypoint] = Field(default_factory=list)
    frame_index: int = 0
    timestamp: float = 0.0

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    @property
    def annotated(self) -> bool:
        return self.status != FrameOutcome.no_pose


class DisplayResultResponse(BaseModel):
    """DisplayResult에서 이미지를 뺀 API 응답"""
    status: FrameOutcome
    angle: Optional[float] = None
    angle_text: Optional[str] = None
    raw_angle: Optional[float] = None
    keypoints: List[Keypoint] = Field(default_factory=list)
    frame_index: int
    timestamp: float
    width: int
    height: int

    @classmethod
    def from_result(cls, result: DisplayResult) -> "DisplayResultResponse":
        h, w = int(result.image.shape[0]), int(result.image.shape[1])
        return cls(
            status=result.status,
            angle=result.angle,
            angle_text=result.angle_text,
            raw_angle=result.raw_angle,
            keypoints=list(result.keypoints),
            frame_index=result.frame_index,
            timestamp=result.timestamp,
            width=w,
            height=h,
        )
