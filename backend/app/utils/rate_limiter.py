# backend/app/utils/rate_limiter.py
import time
import logging
import asyncio

from backend.app.core import settings

logger = logging.getLogger(__name__)

class RateLimiter:
    """Spaces out calls so at most `calls_per_minute` start in any minute. 0 disables it."""

    def __init__(self, calls_per_minute: int = 20):
        self.min_interval = 60.0 / calls_per_minute if calls_per_minute > 0 else 0.0
        self.last_called = 0.0
        self._lock = asyncio.Lock()

    async def wait(self):
        if not self.min_interval:
            return
        # Concurrent sessions share the limiter, so reserve slots one at a time
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self.last_called
            to_wait = self.min_interval - elapsed
            if to_wait > 0:
                logger.info(f"Rate limit: sleeping {to_wait:.2f}s")
                await asyncio.sleep(to_wait)
            self.last_called = time.monotonic()

# Global limiter (conservative for free tier)
limiter = RateLimiter(calls_per_minute=settings.LLM_CALLS_PER_MINUTE)
