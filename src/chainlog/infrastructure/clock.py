"""Wall-clock implementation of the Clock port."""

from __future__ import annotations

import time

from chainlog.domain.port.clock import Clock


class SystemClock(Clock):
    """Unix seconds that never step backwards within one process."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, int(time.time()))
        return self._last
