"""
Frame Loop
==========

The game's only scheduling primitive: one repeating task that runs a
step callback once per display frame. start() arms it, cancel() withdraws
the next frame request. A frame already in progress always completes.

run() arms the loop itself unless it was cancelled: a cancel() that
arrives before run() is honored, and only an explicit start() re-arms it.
"""

from typing import Callable, Optional

import pygame

from ..utils.logger import get_logger


logger = get_logger(__name__)


class FrameLoop:
    """
    Repeating per-frame task driven by the pygame clock.

    Args:
        step: Called once per frame with no arguments
        fps: Target frame rate
        tick: Frame pacing function taking the fps; defaults to a
              pygame.time.Clock. Tests pass a no-op.
    """

    def __init__(self, step: Callable[[], None], fps: int,
                 tick: Optional[Callable[[int], object]] = None):
        self.step = step
        self.fps = fps
        if tick is None:
            tick = pygame.time.Clock().tick
        self._tick = tick
        self._scheduled = False
        self._cancelled = False
        self.frames_run = 0

    @property
    def running(self) -> bool:
        return self._scheduled

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        self._scheduled = True
        self._cancelled = False

    def cancel(self) -> None:
        """Stop after the current frame. run() stays stopped until start()."""
        if self._scheduled:
            logger.debug(f"Frame loop cancelled after {self.frames_run} frames")
        self._scheduled = False
        self._cancelled = True

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Run frames until cancelled (or max_frames is reached).

        Returns:
            Number of frames executed by this call; 0 if cancel() was
            called and start() has not been called since
        """
        if self._cancelled:
            return 0
        if not self._scheduled:
            self.start()

        executed = 0
        while self._scheduled:
            if max_frames is not None and executed >= max_frames:
                self._scheduled = False
                break
            self.step()
            executed += 1
            self.frames_run += 1
            if self._scheduled:
                self._tick(self.fps)
        return executed
