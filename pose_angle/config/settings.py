from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

# helpers
from pose_angle.config.env_utils import env_bool, env_float, env_int, env_list
from pose_angle.constants import (
    RIGHT_ARM,
    DEFAULT_CAPTURE_FPS,
    DEFAULT_VIDEO_MIRROR,
    DEFAULT_VIDEO_ORIENTATION,
    DEFAULT_MAX_READ_FAILURES,
    DEFAULT_SMOOTHING_FACTOR,
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_MIN_SEGMENT_PX,
    DEFAULT_MARKER_RADIUS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MJPEG_FPS,
)


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml / requirements.txt 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수, 그것도 없으면 현재 작업 디렉토리
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any(
            (parent / m).exists()
            for m in (".git", "pyproject.toml", "requirements.txt")
        ):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    return Path.cwd()


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = int(os.getenv("FASTAPI_PORT", 8000))
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    INTERNAL_API_KEY: str = os.getenv("INTERNAL_API_KEY", "test-api-key")

    ROOT: Path = ROOT

    # ── Capture (카메라 세션) ──────────────────────────────
    CAMERA_ENABLED: bool = env_bool("CAMERA_ENABLED", True)
    # 숫자면 장치 인덱스, 아니면 파일 경로/스트림 URL
    CAMERA_SOURCE: str = os.getenv("CAMERA_SOURCE", "0")
    CAPTURE_FPS: float = env_float("CAPTURE_FPS", DEFAULT_CAPTURE_FPS)
    CAPTURE_WIDTH: int = env_int("CAPTURE_WIDTH", 0)    # 0 = 장치 기본값
    CAPTURE_HEIGHT: int = env_int("CAPTURE_HEIGHT", 0)
    VIDEO_MIRROR: bool = env_bool("VIDEO_MIRROR", DEFAULT_VIDEO_MIRROR)
    VIDEO_ORIENTATION: str = os.getenv("VIDEO_ORIENTATION", DEFAULT_VIDEO_ORIENTATION)
    CAPTURE_MAX_READ_FAILURES: int = env_int(
        "CAPTURE_MAX_READ_FAILURES", DEFAULT_MAX_READ_FAILURES
    )

    # ── Detector ──────────────────────────────────────────
    DETECTOR_BACKEND: str = os.getenv("DETECTOR_BACKEND", "mediapipe")  # "mediapipe" | "noop"
    MEDIAPIPE_MODEL_COMPLEXITY: int = env_int("MEDIAPIPE_MODEL_COMPLEXITY", 1)
    MEDIAPIPE_MIN_DETECTION_CONFIDENCE: float = env_float(
        "MEDIAPIPE_MIN_DETECTION_CONFIDENCE", 0.5
    )
    MEDIAPIPE_MIN_TRACKING_CONFIDENCE: float = env_float(
        "MEDIAPIPE_MIN_TRACKING_CONFIDENCE", 0.5
    )

    # ── Angle / Smoothing ─────────────────────────────────
    # 관절 3개 이름 또는 프리셋 이름 1개 (right_arm, left_arm, right_leg, left_leg)
    ANGLE_JOINTS = env_list("ANGLE_JOINTS", list(RIGHT_ARM))
    SMOOTHING_FACTOR: float = env_float("SMOOTHING_FACTOR", DEFAULT_SMOOTHING_FACTOR)
    MIN_CONFIDENCE: float = env_float("MIN_CONFIDENCE", DEFAULT_MIN_CONFIDENCE)
    MIN_SEGMENT_PX: float = env_float("MIN_SEGMENT_PX", DEFAULT_MIN_SEGMENT_PX)

    # ── Display ───────────────────────────────────────────
    MARKER_RADIUS: int = env_int("MARKER_RADIUS", DEFAULT_MARKER_RADIUS)
    DRAW_ANGLE_TEXT: bool = env_bool("DRAW_ANGLE_TEXT", True)
    JPEG_QUALITY: int = env_int("JPEG_QUALITY", DEFAULT_JPEG_QUALITY)
    MJPEG_FPS: float = env_float("MJPEG_FPS", DEFAULT_MJPEG_FPS)


# 전역 싱글톤처럼 사용
settings = Settings()
