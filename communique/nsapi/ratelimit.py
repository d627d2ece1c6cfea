"""Request limiting for the NationStates API.

The API allows 50 requests per 30 seconds per client. Exceeding it gets
the client locked out for 15 minutes, so requests wait for a free slot
instead of failing.
"""

import asyncio
import logging
import time

logger = logging.getLogger("communique.nsapi.ratelimit")


class RequestLimiter:
    """Sliding-window limiter shared by all requests of one client.

    Default: 50 requests per 30 seconds.
    """

    def __init__(
        self,
        max_requests: int = 50,
        window_seconds: float = 30.0,
        clock=time.monotonic,
        sleep=asyncio.sleep,
    ):
        """Initialize request limiter.

        Args:
            max_requests: Maximum requests allowed per window
            window_seconds: Time window in seconds
            clock: Monotonic time source (injectable for tests)
            sleep: Async sleep used while waiting for a slot
        """
        self.max_requests = max(1, max_requests)
        self.window = max(0.001, window_seconds)
        self._clock = clock
        self._sleep = sleep
        self._requests: list[float] = []
        self._lock = asyncio.Lock()

    def _prune(self, now: float):
        self._requests = [t for t in self._requests if now - t < self.window]

    def wait_time(self) -> float:
        """Seconds until a request may be made (0 if one is available now)."""
        now = self._clock()
        self._prune(now)
        if len(self._requests) < self.max_requests:
            return 0.0
        oldest = self._requests[0]
        return max(0.0, self.window - (now - oldest))

    async def acquire(self):
        """Wait until a slot is free, then record the request."""
        async with self._lock:
            delay = self.wait_time()
            while delay > 0:
                logger.info(f"API rate limit reached, waiting {delay:.1f}s")
                await self._sleep(delay)
                delay = self.wait_time()
            self._requests.append(self._clock())
