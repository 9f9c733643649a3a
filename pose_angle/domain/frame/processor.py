"""
프레임 처리 Domain Logic
검출 → keypoint 선택 → 각도 계산 → 스무딩 → 표시 결과
"""
import logging
import threading
from typing import Dict, List, Optional

from pose_angle.common.errors import DegenerateJointGeometry, IncompleteLandmarks
from pose_angle.constants import ANGLE_TEXT_FORMAT, DEFAULT_MIN_CONFIDENCE, DEFAULT_MIN_SEGMENT_PX
from pose_angle.domain.angle.calculator import AngleCalculator
from pose_angle.domain.angle.smoother import ExponentialSmoother
from pose_angle.domain.frame.annotator import FrameAnnotator
from pose_angle.domain.pose.detector import KeypointDetector
from pose_angle.domain.pose.selector import KeypointSelector
from pose_angle.schemas.angle_dto import JointTriple
from pose_angle.schemas.frame_dto import DisplayResult, Frame
from pose_angle.schemas.pose_dto import Keypoint, NoPose, PoseDetection, first_pose
from pose_angle.utils.enums.enums import FrameOutcome

logger = logging.getLogger(__name__)


class FrameProcessor:
    """
    프레임 1장 → DisplayResult

    책임:
    - 검출 실패는 로그만 남기고 '포즈 없음'으로 처리 (예외 전파 없음)
    - 관절 3개가 모두 있고 기하가 유효할 때만 스무딩 상태를 1회 갱신
    - process/reconfigure는 같은 락으로 직렬화 (스무딩 상태는 단일 writer)
    """

    def __init__(
        self,
        detector: KeypointDetector,
        joint_triple: Optional[JointTriple] = None,
        smoother: Optional[ExponentialSmoother] = None,
        selector: Optional[KeypointSelector] = None,
        calculator: Optional[AngleCalculator] = None,
        annotator: Optional[FrameAnnotator] = None,
        min_segment_px: float = DEFAULT_MIN_SEGMENT_PX,
    ):
        """
        Args:
            detector: keypoint 검출기
            joint_triple: 각도를 잴 관절 (기본: 오른팔 어깨-팔꿈치-손목)
            smoother: 각도 스무딩 필터 (기본 factor 0.2)
            selector: keypoint 필터/좌표 변환 (기본: 검출기 origin 사용)
            calculator: 각도 계산기
            annotator: 오버레이 렌더러
            min_segment_px: 관절-꼭짓점 최소 거리 (이하면 프레임 스킵)
        """
        self.detector = detector
        self.joint_triple = joint_triple or JointTriple()
        self.smoother = smoother or ExponentialSmoother()
        self.selector = selector or KeypointSelector(
            origin=detector.origin, min_confidence=DEFAULT_MIN_CONFIDENCE
        )
        self.calculator = calculator or AngleCalculator()
        self.annotator = annotator or FrameAnnotator()
        self.min_segment_px = float(min_segment_px)

        self._lock = threading.Lock()
        self._stats: Dict[str, int] = {
            "frames": 0,
            "updates": 0,
            "no_pose": 0,
            "incomplete": 0,
            "degenerate": 0,
            "detector_failures": 0,
        }

    @property
    def smoothed_angle(self) -> float:
        with self._lock:
            return self.smoother.value

    def process(self, frame: Frame) -> DisplayResult:
        with self._lock:
            return self._process(frame)

    def reconfigure(
        self,
        joint_triple: Optional[JointTriple] = None,
        smoothing_factor: Optional[float] = None,
        min_confidence: Optional[float] = None,
    ) -> None:
        """프레임 사이에 원자적으로 적용. 스무딩 상태는 유지된다."""
        with self._lock:
            if smoothing_factor is not None:
                self.smoother.factor = smoothing_factor
            if joint_triple is not None:
                self.joint_triple = joint_triple
            if min_confidence is not None:
                self.selector.min_confidence = float(min_confidence)
        logger.info(
            f"🔧 processor reconfigured: joints={self.joint_triple.as_tuple()}, "
            f"factor={self.smoother.factor}, min_confidence={self.selector.min_confidence}"
        )

    def stats(self) -> Dict[str, float]:
        with self._lock:
            out: Dict[str, float] = dict(self._stats)
            out["smoothed_angle"] = self.smoother.value
            return out

    # ========== 내부 단계 ==========

    def _process(self, frame: Frame) -> DisplayResult:
        self._stats["frames"] += 1

        # ========== Step 1: 검출 ==========
        detection = self._detect(frame)
        if isinstance(detection, NoPose):
            self._stats["no_pose"] += 1
            return DisplayResult(
                image=frame.image,
                status=FrameOutcome.no_pose,
                frame_index=frame.index,
                timestamp=frame.timestamp,
            )

        # ========== Step 2: 필터 + 픽셀 변환 ==========
        keypoints = self.selector.filter_and_project(
            detection.landmarks, frame.width, frame.height
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"[frame {frame.index}] points: "
                + ", ".join(f"{kp.name}=({kp.x:.1f},{kp.y:.1f})" for kp in keypoints)
            )

        # ========== Step 3: 관절 선택 ==========
        try:
            first, vertex, last = self.selector.select(keypoints, self.joint_triple.as_tuple())
            self._check_geometry(first, vertex, last)
        except IncompleteLandmarks as e:
            self._stats["incomplete"] += 1
            logger.debug(f"[frame {frame.index}] skip angle: {e}")
            return self._annotated(frame, FrameOutcome.incomplete, keypoints)
        except DegenerateJointGeometry as e:
            self._stats["degenerate"] += 1
            logger.debug(f"[frame {frame.index}] skip angle: {e}")
            return self._annotated(frame, FrameOutcome.degenerate, keypoints)

        # ========== Step 4: 각도 + 스무딩 ==========
        raw = self.calculator.angle(first.position, vertex.position, last.position)
        smoothed = self.smoother.update(raw)
        self._stats["updates"] += 1
        text = ANGLE_TEXT_FORMAT.format(smoothed)
        logger.debug(f"💪 [frame {frame.index}] angle raw={raw:.2f} smoothed={text}")

        return DisplayResult(
            image=self.annotator.annotate(frame.image, keypoints, text),
            status=FrameOutcome.updated,
            angle=smoothed,
            angle_text=text,
            raw_angle=raw,
            keypoints=keypoints,
            frame_index=frame.index,
            timestamp=frame.timestamp,
        )

    def _detect(self, frame: Frame) -> PoseDetection:
        """검출기 예외나 형식이 틀린 응답은 DetectionUnavailable로 보고 포즈 없음 처리"""
        try:
            return first_pose(self.detector.detect(frame.image))
        except Exception as e:
            self._stats["detector_failures"] += 1
            logger.warning(f"⚠️ detection unavailable (frame {frame.index}): {type(e).__name__}: {e}")
            return NoPose()

    def _check_geometry(self, first: Keypoint, vertex: Keypoint, last: Keypoint) -> None:
        if self.calculator.is_degenerate(
            first.position, vertex.position, last.position, self.min_segment_px
        ):
            raise DegenerateJointGeometry(
                f"{first.name}/{last.name} coincides with {vertex.name}"
            )

    def _annotated(self, frame: Frame, status: FrameOutcome, keypoints: List[Keypoint]) -> DisplayResult:
        return DisplayResult(
            image=self.annotator.annotate(frame.image, keypoints),
            status=status,
            keypoints=keypoints,
            frame_index=frame.index,
            timestamp=frame.timestamp,
        )
