"""
Frame clocks: the "invoke a callback once per display refresh" primitive.

Contract (shared by all clocks):
  - request_frame(callback) returns an integer handle
  - each requested callback is delivered at most once, with the frame
    timestamp in milliseconds
  - cancel_frame(handle) turns a pending request into a no-op
  - callbacks requested while a frame is being delivered run on the next one

ManualFrameClock is driven explicitly (tests, headless sampling).
AsyncioFrameClock delivers frames from the running asyncio loop.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, Optional, Protocol

from models.enums import LogCategory
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.CLOCK)

FrameCallback = Callable[[float], None]


class FrameClock(Protocol):
    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class _PendingFrames:
    """Pending request bookkeeping shared by the clocks"""

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _deliver(self, now_ms: float) -> int:
        """Deliver every callback pending at call time exactly once"""
        handles = list(self._pending.keys())
        delivered = 0
        for handle in handles:
            # An earlier callback in this frame may have cancelled it
            callback = self._pending.pop(handle, None)
            if callback is None:
                continue
            try:
                callback(now_ms)
            except Exception as e:
                log.error(f"Frame callback failed: {e}", handle=handle)
            delivered += 1
        return delivered


class ManualFrameClock(_PendingFrames):
    """
    Deterministic clock advanced by hand.

    Example:
        clock = ManualFrameClock()
        driver = SessionDriver(clock)
        driver.animate(subject, config, target=100.0)
        clock.run_until_idle()
    """

    def __init__(self, start_ms: float = 0.0, frame_ms: float = 1000 / 60):
        super().__init__()
        self.now_ms = start_ms
        self.frame_ms = frame_ms

    def tick(self, now_ms: Optional[float] = None) -> int:
        """Deliver one frame at now_ms (or the current time)"""
        if now_ms is not None:
            self.now_ms = now_ms
        return self._deliver(self.now_ms)

    def advance(self, ms: Optional[float] = None) -> int:
        """Move time forward by ms (default one frame) and deliver"""
        return self.tick(self.now_ms + (self.frame_ms if ms is None else ms))

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        """Keep delivering frames until nothing is pending"""
        frames = 0
        # First delivery happens at the current time, later ones one frame apart
        if self.pending_count:
            self.tick()
            frames += 1
        while self.pending_count and frames < max_frames:
            self.advance()
            frames += 1
        return frames


class AsyncioFrameClock(_PendingFrames):
    """
    Frame clock running on the asyncio event loop.

    A single loop.call_later timer is armed while requests are pending;
    timestamps come from loop.time().
    """

    def __init__(self, fps: int = 60):
        super().__init__()
        self.fps = max(1, min(fps, 240))
        self.frame_interval = 1.0 / self.fps
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self.frames_delivered = 0

        log.debug("AsyncioFrameClock initialized", fps=self.fps)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = super().request_frame(callback)
        self._arm()
        return handle

    def cancel_frame(self, handle: int) -> None:
        super().cancel_frame(handle)
        if not self.pending_count and self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm(self) -> None:
        if self._timer is not None:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._timer = self._loop.call_later(self.frame_interval, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._deliver(self._loop.time() * 1000)
        self.frames_delivered += 1
        if self.pending_count:
            self._arm()

    def close(self) -> None:
        """Drop every pending request and disarm the timer"""
        self._pending.clear()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
