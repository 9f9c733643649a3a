"""
파이프라인 설정 DTO
GET/PUT /pose/config 입출력용
"""
from typing import Optional

from pydantic import BaseModel, Field

from pose_angle.schemas.angle_dto import JointTriple
from pose_angle.utils.enums.enums import Orientation


class PipelineConfig(BaseModel):
    """현재 적용 중인 파이프라인 설정"""
    joints: JointTriple
    smoothing_factor: float = Field(..., gt=0.0, lt=1.0)
    min_confidence: float = Field(..., ge=0.0, lt=1.0)
    orientation: Orientation


class PipelineConfigUpdate(BaseModel):
    """부분 업데이트 요청 (None이면 유지)"""
    joints: Optional[JointTriple] = None
    smoothing_factor: Optional[float] = Field(
        default=None, gt=0.0, lt=1.0, description="스무딩 계수 (클수록 민감)"
    )
    min_confidence: Optional[float] = Field(
        default=None, ge=0.0, lt=1.0, description="keypoint 신뢰도 하한 (초과해야 사용)"
    )
    orientation: Optional[Orientation] = None

    class Config:
        json_schema_extra = {
            "example": {
                "joints": {"first": "left_shoulder", "vertex": "left_elbow", "last": "left_wrist"},
                "smoothing_factor": 0.3,
                "orientation": "landscape_left",
            }
        }
