"""Time-driven animation that reports progress to a callback."""

from __future__ import annotations

from typing import Callable


class Animation:
    """Runs ``update_func(progress)`` each tick until ``duration`` has elapsed."""

    def __init__(self, duration: float, update_func: Callable[[float], None]) -> None:
        self.duration = duration
        self.current_time = 0.0
        self.finished = False
        self._update_func = update_func

    def update(self, delta_time: float) -> None:
        """Advance by ``delta_time`` seconds and report the new progress."""
        if self.finished:
            return
        self.current_time += delta_time
        progress = self.current_time / self.duration if self.duration > 0 else 1.0
        if progress >= 1.0:
            progress = 1.0
            self.finished = True
        self._update_func(progress)