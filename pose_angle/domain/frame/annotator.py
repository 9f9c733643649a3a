# Overlay renderer: keypoint 마커와 각도 텍스트를 프레임 복사본에 그린다.

from __future__ import annotations

from typing import Optional, Sequence

import cv2
import numpy as np

from pose_angle.constants import (
    DEFAULT_MARKER_RADIUS,
    MARKER_COLOR_BGR,
    TEXT_BG_COLOR_BGR,
    TEXT_COLOR_BGR,
)
from pose_angle.schemas.pose_dto import Keypoint


class FrameAnnotator:
    """원본 프레임 + 점 오버레이 (스켈레톤 선은 그리지 않음)"""

    def __init__(self, marker_radius: int = DEFAULT_MARKER_RADIUS, draw_angle_text: bool = True):
        self.marker_radius = int(marker_radius)
        self.draw_angle_text = bool(draw_angle_text)

    def annotate(
        self,
        image: np.ndarray,
        keypoints: Sequence[Keypoint],
        angle_text: Optional[str] = None,
    ) -> np.ndarray:
        img = image.copy()
        for kp in keypoints:
            center = (int(round(kp.x)), int(round(kp.y)))
            cv2.circle(img, center, self.marker_radius, MARKER_COLOR_BGR, -1, cv2.LINE_AA)

        if angle_text and self.draw_angle_text:
            self._draw_label(img, angle_text)
        return img

    def _draw_label(self, img: np.ndarray, text: str) -> None:
        (tw, th), baseline = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, 1.0, 2)
        cv2.rectangle(img, (8, 8), (8 + tw + 12, 8 + th + baseline + 12), TEXT_BG_COLOR_BGR, -1)
        cv2.putText(
            img,
            text,
            (14, 14 + th),
            cv2.FONT_HERSHEY_SIMPLEX,
            1.0,
            TEXT_COLOR_BGR,
            2,
            cv2.LINE_AA,
        )
