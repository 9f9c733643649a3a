"""
캡처 → 처리 사이의 단일 슬롯 채널

- producer(캡처 스레드) 1개, consumer(처리 워커) 1개
- consumer가 이전 프레임을 처리 중이면 새 프레임은 버린다 (큐잉하지 않음)
- 아직 가져가지 않은 프레임이 있으면 새 프레임으로 교체 (늦은 프레임 폐기)
"""
import threading
from typing import Dict, Optional

from pose_angle.schemas.frame_dto import Frame


class LatestFrameChannel:
    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._pending: Optional[Frame] = None
        self._busy = False
        self._closed = False
        self._offered = 0
        self._accepted = 0
        self._dropped = 0

    def offer(self, frame: Frame) -> bool:
        """프레임 전달. 버려졌으면 False"""
        with self._cond:
            self._offered += 1
            if self._closed or self._busy:
                self._dropped += 1
                return False
            if self._pending is not None:
                # 아직 처리 안 된 오래된 프레임은 폐기
                self._dropped += 1
                self._accepted -= 1
            self._pending = frame
            self._accepted += 1
            self._cond.notify()
            return True

    def take(self, timeout: Optional[float] = None) -> Optional[Frame]:
        """
        다음 프레임을 꺼내고 busy 상태로 전환.
        timeout 또는 close 시 None. 처리 후 반드시 done() 호출.
        """
        with self._cond:
            if not self._cond.wait_for(lambda: self._pending is not None or self._closed, timeout):
                return None
            if self._pending is None:
                return None
            frame, self._pending = self._pending, None
            self._busy = True
            return frame

    def done(self) -> None:
        with self._cond:
            self._busy = False

    def close(self) -> None:
        with self._cond:
            self._closed = True
            if self._pending is not None:
                self._dropped += 1
                self._accepted -= 1
                self._pending = None
            self._cond.notify_all()

    def reopen(self) -> None:
        """close 이후 재시작용. 카운터는 누적 유지"""
        with self._cond:
            self._closed = False
            self._busy = False
            self._pending = None

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def stats(self) -> Dict[str, int]:
        with self._cond:
            return {
                "offered": self._offered,
                "accepted": self._accepted,
                "dropped": self._dropped,
            }
