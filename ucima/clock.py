"""A simple elapsed-time clock."""

from __future__ import annotations

import time
from typing import Callable


class Clock:
    """Measures time elapsed since it was started."""

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self.start_time = 0.0
        self.elapsed = 0.0

    @property
    def running(self) -> bool:
        return self.start_time != 0

    def start(self) -> None:
        self.start_time = self._time_source()
        self.elapsed = 0.0

    def update(self) -> None:
        """Refresh the elapsed time; does nothing while stopped."""
        if self.start_time != 0:
            self.elapsed = self._time_source() - self.start_time

    def stop(self) -> None:
        self.start_time = 0.0