"""
OpenCV 캡처 FrameSource
별도 스레드에서 프레임을 읽어 콜백(보통 LatestFrameChannel.offer)으로 넘긴다.
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Union

import cv2

from pose_angle.common.errors import CaptureConfigurationError
from pose_angle.constants import DEFAULT_CAPTURE_FPS, DEFAULT_MAX_READ_FAILURES
from pose_angle.domain.frame.orientation import apply_orientation
from pose_angle.schemas.frame_dto import Frame
from pose_angle.utils.enums.enums import Orientation

logger = logging.getLogger(__name__)

FrameCallback = Callable[[Frame], Any]


class CaptureFrameSource:
    """
    카메라(장치 인덱스) 또는 파일/URL에서 프레임을 읽는 producer

    - 프레임 레이트 상한(fps): 카메라는 일찍 도착한 프레임을 버리고,
      파일은 다음 슬롯까지 대기한다.
    - 방향/반전은 캡처 단계에서 적용 (프레임 사이에 원자적으로 변경)
    - 장치 열기 실패, 연속 읽기 실패는 CaptureConfigurationError (재시도 없음)
    """

    def __init__(
        self,
        source: Union[int, str] = 0,
        fps: float = DEFAULT_CAPTURE_FPS,
        width: int = 0,
        height: int = 0,
        mirror: bool = False,
        orientation: Orientation = Orientation.portrait,
        max_read_failures: int = DEFAULT_MAX_READ_FAILURES,
        capture_factory: Callable[[Union[int, str]], Any] = cv2.VideoCapture,
    ):
        self.source = self._parse_source(source)
        self.is_file = not isinstance(self.source, int)
        self.fps = float(fps)
        self.width = int(width)
        self.height = int(height)
        self.mirror = bool(mirror)
        self.max_read_failures = max(1, int(max_read_failures))
        self._capture_factory = capture_factory

        self._lock = threading.Lock()
        self._orientation = Orientation(orientation)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._cap = None
        self._error: Optional[CaptureConfigurationError] = None
        self._frames_read = 0
        self._frames_emitted = 0

    # ----- 상태 -----
    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def error(self) -> Optional[CaptureConfigurationError]:
        return self._error

    @property
    def orientation(self) -> Orientation:
        with self._lock:
            return self._orientation

    def set_orientation(self, orientation: Orientation) -> None:
        with self._lock:
            self._orientation = Orientation(orientation)
        logger.info(f"🔄 capture orientation -> {self._orientation.value}")

    def stats(self) -> Dict[str, Any]:
        return {
            "source": str(self.source),
            "running": self.running,
            "frames_read": self._frames_read,
            "frames_emitted": self._frames_emitted,
            "orientation": self.orientation.value,
            "error": str(self._error) if self._error else None,
        }

    # ----- 수명 주기 -----
    def start(self, on_frame: FrameCallback) -> None:
        if self.running:
            return
        self._error = None
        self._cap = self._open()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, args=(on_frame,), name="capture_frame_source", daemon=True
        )
        self._thread.start()
        logger.info(f"🎥 capture started: source={self.source}, fps<={self.fps}")

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        t = self._thread
        if t is not None and t.is_alive() and t is not threading.current_thread():
            t.join(timeout=timeout)
        self._thread = None
        logger.info("🛑 capture stopped")

    # ----- 내부 -----
    def _open(self):
        try:
            cap = self._capture_factory(self.source)
        except Exception as e:
            raise CaptureConfigurationError(f"cannot create capture for {self.source}: {e}") from e

        if cap is None or not cap.isOpened():
            raise CaptureConfigurationError(f"cannot open capture source: {self.source}")

        if not self.is_file:
            self._configure(cap, cv2.CAP_PROP_FPS, self.fps)
            if self.width > 0:
                self._configure(cap, cv2.CAP_PROP_FRAME_WIDTH, self.width)
            if self.height > 0:
                self._configure(cap, cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        return cap

    @staticmethod
    def _configure(cap, prop: int, value: float) -> None:
        # 장치가 거부해도 세션은 유지 (드라이버마다 지원 범위가 다름)
        if not cap.set(prop, float(value)):
            logger.warning(f"⚠️ capture property {prop} not accepted (value={value})")

    def _loop(self, on_frame: FrameCallback) -> None:
        cap = self._cap
        min_interval = 1.0 / self.fps if self.fps > 0 else 0.0
        last_emit = float("-inf")
        failures = 0
        try:
            while not self._stop.is_set():
                ok, image = cap.read()
                if self.is_file and (not ok or image is None):
                    logger.info(f"📼 end of stream: {self.source}")
                    break
                if not ok or image is None or image.size == 0:
                    failures += 1
                    if failures >= self.max_read_failures:
                        self._error = CaptureConfigurationError(
                            f"capture read failed {failures} times in a row: {self.source}"
                        )
                        logger.error(f"❌ {self._error}")
                        break
                    time.sleep(0.01)
                    continue
                failures = 0
                self._frames_read += 1

                now = time.monotonic()
                wait = min_interval - (now - last_emit)
                if wait > 0:
                    if not self.is_file:
                        continue
                    self._stop.wait(wait)
                    now = time.monotonic()
                last_emit = now

                with self._lock:
                    orientation = self._orientation
                try:
                    oriented = apply_orientation(image, orientation, self.mirror)
                    frame = Frame.from_image(
                        oriented,
                        index=self._frames_emitted,
                        timestamp=now,
                        orientation=orientation,
                    )
                    self._frames_emitted += 1
                    on_frame(frame)
                except Exception as e:
                    # 이 프레임만 건너뛰고 세션은 유지
                    logger.warning(f"⚠️ skipped captured frame: {type(e).__name__}: {e}")
        except Exception as e:
            # 장치 쪽 예외로 루프가 끝나면 세션 실패로 노출
            self._error = CaptureConfigurationError(f"capture session crashed: {type(e).__name__}: {e}")
            logger.error(f"❌ {self._error}", exc_info=True)
        finally:
            cap.release()

    @staticmethod
    def _parse_source(source: Union[int, str]) -> Union[int, str]:
        if isinstance(source, int):
            return source
        s = str(source).strip()
        return int(s) if s.isdigit() else s
