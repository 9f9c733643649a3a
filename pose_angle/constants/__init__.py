# re-exports: 다른 모듈에서 짧게 import 하도록

from .joint_names import (
    NOSE, L_EYE, R_EYE, L_EAR, R_EAR,
    L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE,
    JOINT_NAMES, RIGHT_ARM, LEFT_ARM, RIGHT_LEG, LEFT_LEG, JOINT_TRIPLE_PRESETS,
)

from .pipeline_params import (
    DEFAULT_CAPTURE_FPS,
    DEFAULT_VIDEO_MIRROR,
    DEFAULT_VIDEO_ORIENTATION,
    DEFAULT_MAX_READ_FAILURES,
    DEFAULT_SMOOTHING_FACTOR,
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_MIN_SEGMENT_PX,
    DEFAULT_MARKER_RADIUS,
    MARKER_COLOR_BGR,
    TEXT_COLOR_BGR,
    TEXT_BG_COLOR_BGR,
    ANGLE_TEXT_FORMAT,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MJPEG_FPS,
)
