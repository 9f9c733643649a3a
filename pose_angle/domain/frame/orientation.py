"""
프레임 방향 보정
기기 회전에 맞춰 캡처 이미지를 돌리고, 필요하면 좌우 반전
"""
import cv2
import numpy as np

from pose_angle.utils.enums.enums import Orientation

_ROTATIONS = {
    Orientation.portrait: None,
    Orientation.portrait_upside_down: cv2.ROTATE_180,
    Orientation.landscape_left: cv2.ROTATE_90_COUNTERCLOCKWISE,
    Orientation.landscape_right: cv2.ROTATE_90_CLOCKWISE,
}


def apply_orientation(image: np.ndarray, orientation: Orientation, mirror: bool = False) -> np.ndarray:
    """회전 → 반전 순서로 적용 (입력 배열은 수정하지 않음)"""
    code = _ROTATIONS[Orientation(orientation)]
    out = image if code is None else cv2.rotate(image, code)
    if mirror:
        out = cv2.flip(out, 1)
    return out
