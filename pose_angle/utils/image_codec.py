# image_codec.py
import cv2
import numpy as np

from pose_angle.constants import DEFAULT_JPEG_QUALITY


def encode_jpeg(image: np.ndarray, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """BGR 이미지 → JPEG bytes"""
    ok, buffer = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    if not ok:
        raise ValueError("JPEG encoding failed")
    return buffer.tobytes()


def decode_image(data: bytes) -> np.ndarray:
    """업로드된 이미지 bytes → BGR 이미지. 디코딩 불가면 ValueError"""
    if not data:
        raise ValueError("empty image payload")
    arr = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError("cannot decode image")
    return image
