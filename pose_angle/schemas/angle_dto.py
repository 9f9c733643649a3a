"""
각도 계산 관련 DTO
관절 트리플 설정 + API 응답용
"""
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, Field, validator

from pose_angle.constants import JOINT_NAMES, JOINT_TRIPLE_PRESETS, RIGHT_ARM


class JointTriple(BaseModel):
    """각도를 잴 관절 3개 (vertex가 꼭짓점)"""
    first: str = Field(RIGHT_ARM[0], description="첫 번째 관절 (예: 어깨)")
    vertex: str = Field(RIGHT_ARM[1], description="꼭짓점 관절 (예: 팔꿈치)")
    last: str = Field(RIGHT_ARM[2], description="마지막 관절 (예: 손목)")

    @validator("first", "vertex", "last")
    def _known_joint(cls, v):
        if v not in JOINT_NAMES:
            raise ValueError(f"unknown joint: {v}")
        return v

    @classmethod
    def from_names(cls, names: Sequence[str]) -> "JointTriple":
        """
        ["right_arm"] 같은 프리셋 1개, 또는 관절 이름 3개로 생성
        """
        names = [n.strip() for n in names if n and n.strip()]
        if len(names) == 1 and names[0] in JOINT_TRIPLE_PRESETS:
            names = list(JOINT_TRIPLE_PRESETS[names[0]])
        if len(names) != 3:
            raise ValueError(f"joint triple needs 3 joints or a preset, got {names}")
        return cls(first=names[0], vertex=names[1], last=names[2])

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.first, self.vertex, self.last)


class AngleResponse(BaseModel):
    """최근 갱신된 스무딩 각도"""
    angle: float = Field(..., ge=0.0, le=180.0, description="스무딩된 각도 (도)")
    angle_text: str = Field(..., description="표시용 문자열 (소수 2자리)")
    raw_angle: Optional[float] = Field(None, description="해당 프레임의 원시 각도")
    frame_index: int
    timestamp: float
    joints: JointTriple
