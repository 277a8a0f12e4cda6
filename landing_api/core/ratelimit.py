# landing_api/core/ratelimit.py
"""
Fixed-window, per-client request limiter.

State is an explicit mapping ``client key -> WindowState`` owned by a
RateLimiter instance. create_app() builds one and hands it to
RateLimitMiddleware; nothing is module-global. Counters live in memory
only and start from zero on every process restart.
"""
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from landing_api.core.errors import RateLimited
from landing_api.core.security import rate_limit_key


@dataclass
class WindowState:
    start: float
    count: int = 0


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # whole seconds until the window rolls over

    def headers(self) -> Dict[str, str]:
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.windows: Dict[str, WindowState] = {}
        self._lock = threading.Lock()
        self._last_prune = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Count one request for `key` and say whether it fits in the current window."""
        now = self.clock()
        with self._lock:
            self._prune(now)

            state = self.windows.get(key)
            if state is None or now - state.start >= self.window_seconds:
                state = WindowState(start=now)
                self.windows[key] = state

            reset_after = max(0, math.ceil(state.start + self.window_seconds - now))
            if state.count >= self.max_requests:
                return RateLimitDecision(False, self.max_requests, 0, reset_after)

            state.count += 1
            return RateLimitDecision(
                True, self.max_requests, self.max_requests - state.count, reset_after
            )

    def _prune(self, now: float) -> None:
        # at most once per window
        if now - self._last_prune < self.window_seconds:
            return
        expired = [k for k, s in self.windows.items() if now - s.start >= self.window_seconds]
        for k in expired:
            del self.windows[k]
        self._last_prune = now


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies one limiter to every route; public and admin alike."""

    def __init__(self, app, limiter: RateLimiter, trust_proxy: bool = True):
        super().__init__(app)
        self.limiter = limiter
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        key = rate_limit_key(request, self.trust_proxy)
        decision = self.limiter.hit(key)
        if not decision.allowed:
            return RateLimited(headers=decision.headers()).to_response()

        response = await call_next(request)
        response.headers.update(decision.headers())
        return response
