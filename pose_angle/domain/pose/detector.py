"""
keypoint 검출 Domain Logic
이미지 1장 → 포즈 0개 이상 (관절 이름 → 정규화 좌표 + 신뢰도)
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List

import cv2
import numpy as np

from pose_angle.common.errors import DetectionUnavailable
from pose_angle.constants import JOINT_NAMES
from pose_angle.schemas.pose_dto import NormalizedLandmark
from pose_angle.utils.enums.enums import CoordinateOrigin

logger = logging.getLogger(__name__)

Pose = Dict[str, NormalizedLandmark]


class KeypointDetector(ABC):
    """
    검출기 어댑터 인터페이스

    - 입력: BGR 이미지 (H, W, 3 uint8)
    - 출력: 포즈 리스트. 빈 리스트는 정상 응답(사람 없음)
    - origin: 정규화 좌표의 원점
    """

    origin: CoordinateOrigin = CoordinateOrigin.top_left

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def detect(self, image_bgr: np.ndarray) -> List[Pose]: ...

    def close(self) -> None:
        pass


class NoopKeypointDetector(KeypointDetector):
    """항상 포즈 없음 (테스트/모델 없는 환경용)"""

    def name(self) -> str:
        return "noop"

    def detect(self, image_bgr: np.ndarray) -> List[Pose]:
        return []


class MediaPipeKeypointDetector(KeypointDetector):
    """
    MediaPipe Pose 기반 검출기

    - MediaPipe는 좌상단 원점 정규화 좌표를 쓴다.
    - visibility를 confidence로 사용.
    - 단일 인물 모델이라 포즈는 최대 1개.
    """

    origin = CoordinateOrigin.top_left

    def __init__(
        self,
        model_complexity: int = 1,  # 0, 1, 2 (높을수록 정확하지만 느림)
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ):
        try:
            import mediapipe as mp
            self.mp_pose = mp.solutions.pose
        except (ImportError, AttributeError) as e:
            raise DetectionUnavailable(
                "MediaPipe Pose is not available. Install with: pip install mediapipe"
            ) from e

        self._options = dict(
            static_image_mode=False,
            model_complexity=int(model_complexity),
            enable_segmentation=False,
            smooth_landmarks=True,
            min_detection_confidence=float(min_detection_confidence),
            min_tracking_confidence=float(min_tracking_confidence),
        )
        self.pose = self.mp_pose.Pose(**self._options)
        # 관절 이름 → MediaPipe landmark 인덱스
        self._indices = {
            name: int(self.mp_pose.PoseLandmark[name.upper()]) for name in JOINT_NAMES
        }

    def name(self) -> str:
        return "mediapipe_pose"

    def detect(self, image_bgr: np.ndarray) -> List[Pose]:
        # MediaPipe는 RGB 사용
        rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        if self.pose is None:
            # close() 후 서비스 재시작
            self.pose = self.mp_pose.Pose(**self._options)
        results = self.pose.process(rgb)

        if not results or not results.pose_landmarks:
            return []

        landmarks = results.pose_landmarks.landmark
        pose = {
            name: NormalizedLandmark(
                x=float(landmarks[idx].x),
                y=float(landmarks[idx].y),
                confidence=float(landmarks[idx].visibility or 0.0),
            )
            for name, idx in self._indices.items()
        }
        return [pose]

    def close(self) -> None:
        if self.pose is not None:
            self.pose.close()
            self.pose = None
            logger.info("🧹 MediaPipe Pose closed")
