"""In-process fixed-window rate limiting for the auth endpoints."""
from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request

from contatos.services.errors import ServiceError


class RateLimitedError(ServiceError):
    code = "rate_limited"
    status_code = 429

    def __init__(self, retry_after: int) -> None:
        super().__init__("Muitas requisições. Tente novamente em instantes.")
        self.retry_after = retry_after


class FixedWindowLimiter:
    """Counts hits per key; each key gets a window starting at its first hit."""

    def __init__(self) -> None:
        self._windows: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, limit: int, window_seconds: int) -> None:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            count, ends_at = self._windows.get(key, (0, now + window_seconds))
            count += 1
            self._windows[key] = (count, ends_at)
        if count > limit:
            raise RateLimitedError(retry_after=max(1, int(ends_at - now)))

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, ends_at) in self._windows.items() if now >= ends_at]
        for key in expired:
            del self._windows[key]

    def __len__(self) -> int:
        return len(self._windows)

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()


_limiter = FixedWindowLimiter()


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    _limiter.hit(f"{scope}:{client_ip(request)}", limit, window_seconds)


def reset_rate_limits() -> None:
    """Forget every recorded hit (used by tests)."""
    _limiter.clear()
