"""
Batch number generation: ``LB`` followed by epoch milliseconds.
"""

import threading
import time
from typing import Callable


class BatchNumberGenerator:
    """Strictly increasing within a process, even for calls in the same millisecond."""

    prefix = "LB"

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> str:
        with self._lock:
            millis = int(self._clock() * 1000)
            if millis <= self._last:
                millis = self._last + 1
            self._last = millis
        return f"{self.prefix}{millis}"


default_generator = BatchNumberGenerator()
