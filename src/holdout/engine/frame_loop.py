"""Frame loop — asyncio-driven per-frame stepping of a GameSession.

Measures the real time between frames with a monotonic clock and hands
it to the session as dt. The very first frame is stepped with dt = 0.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Callable, Optional

from holdout.models.input import InputState

if TYPE_CHECKING:
    from holdout.engine.session import GameSession

InputSource = Callable[[], InputState]


class FrameLoop:
    """Steps a session at the configured frame rate until stopped.

    Args:
        session: The session to drive.
        input_source: Called once per frame for that frame's input;
            idle input when omitted.
        max_frames: Stop after this many frames (None = run until stop()).
    """

    def __init__(self, session: GameSession, input_source: Optional[InputSource] = None,
                 max_frames: Optional[int] = None) -> None:
        self._session = session
        self._input = input_source or InputState
        self._max_frames = max_frames
        self._interval = 1.0 / session.config.frame_rate if session.config.frame_rate > 0 else 0.0
        self._running = False

        # --- Monitoring counters ---
        self.frame_count: int = 0
        self.started_at: float = 0.0
        self.last_dt: float = 0.0
        self.last_frame_ms: float = 0.0
        self.avg_frame_ms: float = 0.0
        self._frame_ms_sum: float = 0.0

    async def run(self) -> None:
        """Run frames until stop() is called or max_frames is reached."""
        self._running = True
        self.started_at = time.monotonic()
        last: Optional[float] = None
        while self._running:
            now = time.monotonic()
            dt = 0.0 if last is None else now - last
            last = now

            t0 = time.monotonic()
            self._session.step(self._input(), dt)
            elapsed_ms = (time.monotonic() - t0) * 1000

            self.frame_count += 1
            self.last_dt = dt
            self.last_frame_ms = elapsed_ms
            self._frame_ms_sum += elapsed_ms
            self.avg_frame_ms = self._frame_ms_sum / self.frame_count

            if self._max_frames is not None and self.frame_count >= self._max_frames:
                self._running = False
                break
            # sleep only what is left of this frame's slot
            spent = time.monotonic() - now
            await asyncio.sleep(max(0.0, self._interval - spent))

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the loop started."""
        if self.started_at == 0.0:
            return 0.0
        return time.monotonic() - self.started_at

    @property
    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Signal the loop to stop after the current frame."""
        self._running = False
