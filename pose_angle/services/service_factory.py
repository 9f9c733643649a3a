import logging
from typing import Optional

from pose_angle.common.errors import DetectionUnavailable
from pose_angle.config.settings import Settings, settings as default_settings
from pose_angle.domain.angle.calculator import AngleCalculator
from pose_angle.domain.angle.smoother import ExponentialSmoother
from pose_angle.domain.frame.annotator import FrameAnnotator
from pose_angle.domain.frame.processor import FrameProcessor
from pose_angle.domain.pose.detector import (
    KeypointDetector,
    MediaPipeKeypointDetector,
    NoopKeypointDetector,
)
from pose_angle.domain.pose.selector import KeypointSelector
from pose_angle.infrastructure.capture.camera import CaptureFrameSource
from pose_angle.schemas.angle_dto import JointTriple
from pose_angle.services.pose_stream_service import PoseStreamService
from pose_angle.utils.enums.enums import Orientation

logger = logging.getLogger(__name__)


def create_detector(backend: str, settings: Settings = default_settings) -> KeypointDetector:
    """
    검출기 생성. MediaPipe를 쓸 수 없으면 noop으로 대체 (포즈 없음 처리)
    """
    if backend == "noop":
        logger.info("🧪 Detector: NoOp 모드 (항상 포즈 없음)")
        return NoopKeypointDetector()
    if backend != "mediapipe":
        raise ValueError(f"unknown detector backend: {backend}")
    try:
        detector = MediaPipeKeypointDetector(
            model_complexity=settings.MEDIAPIPE_MODEL_COMPLEXITY,
            min_detection_confidence=settings.MEDIAPIPE_MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=settings.MEDIAPIPE_MIN_TRACKING_CONFIDENCE,
        )
    except DetectionUnavailable as e:
        logger.error(f"❌ {e} → falling back to noop detector")
        return NoopKeypointDetector()
    logger.info(f"🚀 Detector: {detector.name()}")
    return detector


def create_frame_processor(
        detector: KeypointDetector,
        settings: Settings = default_settings,
) -> FrameProcessor:
    """설정값으로 FrameProcessor 조립"""
    return FrameProcessor(
        detector=detector,
        joint_triple=JointTriple.from_names(settings.ANGLE_JOINTS),
        smoother=ExponentialSmoother(factor=settings.SMOOTHING_FACTOR),
        selector=KeypointSelector(
            origin=detector.origin,
            min_confidence=settings.MIN_CONFIDENCE,
        ),
        calculator=AngleCalculator(),
        annotator=FrameAnnotator(
            marker_radius=settings.MARKER_RADIUS,
            draw_angle_text=settings.DRAW_ANGLE_TEXT,
        ),
        min_segment_px=settings.MIN_SEGMENT_PX,
    )


def create_pose_stream_service(
        settings: Settings = default_settings,
        detector: Optional[KeypointDetector] = None,
) -> PoseStreamService:
    """
    PoseStreamService 인스턴스 생성

    Args:
        settings: 런타임 설정
        detector: 검출기 주입 (없으면 DETECTOR_BACKEND로 생성)

    Returns:
        PoseStreamService 인스턴스 (아직 start 전)
    """
    # Domain 컴포넌트 초기화
    detector = detector or create_detector(settings.DETECTOR_BACKEND, settings)
    processor = create_frame_processor(detector, settings)

    # Infrastructure 컴포넌트 초기화 (optional)
    source = None
    if settings.CAMERA_ENABLED:
        source = CaptureFrameSource(
            source=settings.CAMERA_SOURCE,
            fps=settings.CAPTURE_FPS,
            width=settings.CAPTURE_WIDTH,
            height=settings.CAPTURE_HEIGHT,
            mirror=settings.VIDEO_MIRROR,
            orientation=Orientation(settings.VIDEO_ORIENTATION),
            max_read_failures=settings.CAPTURE_MAX_READ_FAILURES,
        )

    return PoseStreamService(processor=processor, source=source)
