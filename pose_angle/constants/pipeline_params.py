# Fallback defaults (settings에서 ENV 미지정 시 사용)
DEFAULT_CAPTURE_FPS = 15
DEFAULT_VIDEO_MIRROR = False
DEFAULT_VIDEO_ORIENTATION = "portrait"
DEFAULT_MAX_READ_FAILURES = 30

DEFAULT_SMOOTHING_FACTOR = 0.2
DEFAULT_MIN_CONFIDENCE = 0.0
DEFAULT_MIN_SEGMENT_PX = 1e-6

# 표시(오버레이) 관련
DEFAULT_MARKER_RADIUS = 10
MARKER_COLOR_BGR = (255, 0, 0)  # blue
TEXT_COLOR_BGR = (255, 255, 255)
TEXT_BG_COLOR_BGR = (0, 0, 0)
ANGLE_TEXT_FORMAT = "{:.2f}"

DEFAULT_JPEG_QUALITY = 80
DEFAULT_MJPEG_FPS = 15.0
