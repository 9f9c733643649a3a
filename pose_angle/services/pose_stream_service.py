"""
실시간 포즈 각도 Service Layer
캡처 → 채널 → 처리 워커 → 표시 싱크 파이프라인 실행
"""
import logging
import threading
from typing import Any, Dict, Optional

from pose_angle.common.errors import CaptureConfigurationError
from pose_angle.domain.frame.processor import FrameProcessor
from pose_angle.infrastructure.capture.camera import CaptureFrameSource
from pose_angle.infrastructure.capture.channel import LatestFrameChannel
from pose_angle.schemas.config_dto import PipelineConfig, PipelineConfigUpdate
from pose_angle.schemas.frame_dto import DisplayResult, Frame
from pose_angle.services.result_sink import LatestResultSink
from pose_angle.utils.enums.enums import Orientation

logger = logging.getLogger(__name__)


class PoseStreamService:
    """
    실시간 각도 파이프라인 메인 서비스

    책임:
    - 캡처 스레드(producer)와 처리 워커(consumer) 수명 관리
    - 처리 중 도착한 프레임은 채널에서 폐기 (지연 누적 방지)
    - 캡처 설정 실패를 프레임 단위 실패와 구분해서 보관/노출
    - 설정 변경을 프레임 사이에 원자적으로 적용
    """

    def __init__(
        self,
        processor: FrameProcessor,
        source: Optional[CaptureFrameSource] = None,
        channel: Optional[LatestFrameChannel] = None,
        sink: Optional[LatestResultSink] = None,
        take_timeout: float = 0.5,
    ):
        """
        Args:
            processor: 프레임 처리기 (스무딩 상태 소유)
            source: 캡처 FrameSource (없으면 업로드 프레임만 처리)
            channel: 캡처 → 워커 단일 슬롯 채널
            sink: 최신 결과 보관소
            take_timeout: 워커가 프레임을 기다리는 최대 시간(초)
        """
        self.processor = processor
        self.source = source
        self.channel = channel or LatestFrameChannel()
        self.sink = sink or LatestResultSink()
        self.take_timeout = float(take_timeout)

        self._orientation = source.orientation if source else Orientation.portrait
        self._capture_error: Optional[CaptureConfigurationError] = None
        self._stop = threading.Event()
        self._worker: Optional[threading.Thread] = None

    # ========== 수명 주기 ==========

    def start(self) -> bool:
        """
        캡처 + 워커 시작. 캡처 설정 실패 시 False (에러는 capture_error로 노출)
        """
        if self.source is None:
            logger.info("📷 no capture source configured; accepting uploaded frames only")
            return False
        if self.running:
            return True

        # stop()에서 닫힌 채널을 다시 연다
        self.channel.reopen()
        try:
            self.source.start(self.channel.offer)
        except CaptureConfigurationError as e:
            self._capture_error = e
            logger.error(f"❌ capture configuration failed: {e}")
            return False

        self._capture_error = None
        self._stop.clear()
        self._worker = threading.Thread(
            target=self._run, name="pose_stream_worker", daemon=True
        )
        self._worker.start()
        logger.info("🚀 pose stream started")
        return True

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        self.channel.close()
        if self.source is not None:
            self.source.stop(timeout=timeout)
        w = self._worker
        if w is not None and w.is_alive():
            w.join(timeout=timeout)
        self._worker = None
        self.processor.detector.close()
        logger.info("🛑 pose stream stopped")

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    @property
    def capture_error(self) -> Optional[CaptureConfigurationError]:
        if self._capture_error is not None:
            return self._capture_error
        return self.source.error if self.source is not None else None

    # ========== 프레임 처리 ==========

    def submit_frame(self, frame: Frame) -> DisplayResult:
        """외부(업로드)에서 들어온 프레임을 같은 처리기로 동기 처리"""
        result = self.processor.process(frame)
        self.sink.publish(result)
        return result

    def _run(self) -> None:
        while not self._stop.is_set():
            frame = self.channel.take(timeout=self.take_timeout)
            if frame is None:
                if self.channel.closed:
                    break
                if self.source is not None and not self.source.running:
                    if self.source.error is not None:
                        logger.error(f"❌ capture session ended: {self.source.error}")
                    break
                continue
            try:
                self.sink.publish(self.processor.process(frame))
            except Exception as e:
                # 이 프레임만 놓치고 스트림은 계속
                logger.error(f"❌ frame {frame.index} failed: {e}", exc_info=True)
            finally:
                self.channel.done()

    # ========== 설정 ==========

    def config(self) -> PipelineConfig:
        return PipelineConfig(
            joints=self.processor.joint_triple,
            smoothing_factor=self.processor.smoother.factor,
            min_confidence=self.processor.selector.min_confidence,
            orientation=self._orientation,
        )

    def update_config(self, update: PipelineConfigUpdate) -> PipelineConfig:
        """
        같은 값을 다시 적용해도 결과가 같다 (멱등).
        처리기 설정은 처리기 락 안에서, 방향은 캡처 락 안에서 바뀐다.
        """
        self.processor.reconfigure(
            joint_triple=update.joints,
            smoothing_factor=update.smoothing_factor,
            min_confidence=update.min_confidence,
        )
        if update.orientation is not None:
            self._orientation = update.orientation
            if self.source is not None:
                self.source.set_orientation(update.orientation)
        return self.config()

    def status(self) -> Dict[str, Any]:
        err = self.capture_error
        return {
            "running": self.running,
            "detector": self.processor.detector.name(),
            "capture": self.source.stats() if self.source is not None else None,
            "capture_error": str(err) if err else None,
            "channel": self.channel.stats(),
            "processor": self.processor.stats(),
            "published": self.sink.seq,
        }
