"""
표시 싱크
처리 워커가 publish한 최신 DisplayResult를 다른 스레드(HTTP/UI)에 넘긴다.
결과 객체는 불변이고 참조 교체만 락 안에서 하므로 부분 쓰기가 보이지 않는다.
"""
import threading
from typing import Optional, Tuple

from pose_angle.schemas.frame_dto import DisplayResult
from pose_angle.utils.enums.enums import FrameOutcome


class LatestResultSink:
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._latest: Optional[DisplayResult] = None
        self._latest_angle: Optional[DisplayResult] = None
        self._seq = 0

    def publish(self, result: DisplayResult) -> int:
        with self._cond:
            self._latest = result
            if result.status == FrameOutcome.updated:
                self._latest_angle = result
            self._seq += 1
            self._cond.notify_all()
            return self._seq

    def latest(self) -> Optional[DisplayResult]:
        """가장 최근 프레임 결과 (상태 무관)"""
        with self._cond:
            return self._latest

    def latest_angle(self) -> Optional[DisplayResult]:
        """가장 최근에 각도가 갱신된 결과 (스킵된 프레임은 무시)"""
        with self._cond:
            return self._latest_angle

    @property
    def seq(self) -> int:
        with self._cond:
            return self._seq

    def wait_next(self, after_seq: int, timeout: Optional[float] = None) -> Tuple[int, Optional[DisplayResult]]:
        """after_seq 이후 새 결과가 올 때까지 대기. timeout이면 (seq, None)"""
        with self._cond:
            if not self._cond.wait_for(lambda: self._seq > after_seq, timeout):
                return self._seq, None
            return self._seq, self._latest
