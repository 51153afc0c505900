"""Process-wide fixed-window request limiter."""
import logging
import threading
import time
from typing import Callable


class RateLimitExceeded(Exception):
    """Raised when the request ceiling for the current window is reached."""
    pass


class RateLimiter:
    """
    Fixed-window counter shared by every caller.

    The window rolls over lazily: each admit() first checks whether more
    than window_seconds have passed since the window started and, if so,
    resets the counter. There is no background timer.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._count = 0
        self._window_start = clock()

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def admit(self) -> bool:
        """Count one request; return False if the window is already full."""
        with self._lock:
            now = self._clock()
            if now - self._window_start > self.window_seconds:
                self._count = 0
                self._window_start = now

            if self._count >= self.max_requests:
                return False

            self._count += 1
            return True

    def check(self) -> None:
        """
        Admit one request or fail.

        Raises:
            RateLimitExceeded: If the ceiling is reached within the current window
        """
        if not self.admit():
            logging.warning(f"Rate limit exceeded ({self.max_requests} requests per {self.window_seconds:.0f}s)")
            raise RateLimitExceeded("Rate limit exceeded")
