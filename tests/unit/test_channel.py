# tests/unit/test_channel.py
import threading

from pose_angle.infrastructure.capture.channel import LatestFrameChannel
from tests.test_helpers import create_frame


def _invariant(ch: LatestFrameChannel):
    st = ch.stats()
    assert st["offered"] == st["accepted"] + st["dropped"]


def test_offer_then_take():
    ch = LatestFrameChannel()
    assert ch.offer(create_frame(index=1))
    frame = ch.take(timeout=0.1)
    assert frame is not None and frame.index == 1
    ch.done()
    _invariant(ch)


def test_drop_while_consumer_busy():
    """처리 중(take 후 done 전)에 온 프레임은 버린다"""
    ch = LatestFrameChannel()
    ch.offer(create_frame(index=1))
    ch.take(timeout=0.1)

    assert ch.offer(create_frame(index=2)) is False
    assert ch.take(timeout=0.01) is None

    ch.done()
    assert ch.offer(create_frame(index=3)) is True
    assert ch.take(timeout=0.1).index == 3
    assert ch.stats() == {"offered": 3, "accepted": 2, "dropped": 1}


def test_stale_pending_frame_replaced():
    ch = LatestFrameChannel()
    ch.offer(create_frame(index=1))
    ch.offer(create_frame(index=2))
    assert ch.take(timeout=0.1).index == 2
    assert ch.stats() == {"offered": 2, "accepted": 1, "dropped": 1}


def test_take_timeout_returns_none():
    assert LatestFrameChannel().take(timeout=0.01) is None


def test_close_wakes_consumer_and_drops_pending():
    ch = LatestFrameChannel()
    got = []
    t = threading.Thread(target=lambda: got.append(ch.take(timeout=2.0)))
    t.start()
    ch.close()
    t.join(timeout=2.0)
    assert got == [None]

    assert ch.closed
    assert ch.offer(create_frame()) is False
    _invariant(ch)


def test_close_counts_pending_as_dropped():
    ch = LatestFrameChannel()
    ch.offer(create_frame())
    ch.close()
    assert ch.stats() == {"offered": 1, "accepted": 0, "dropped": 1}
