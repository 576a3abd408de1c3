from __future__ import annotations

import pytest

from contatos.core import rate_limiter
from contatos.core.rate_limiter import FixedWindowLimiter, RateLimitedError


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def monotonic(self) -> float:
        return self.now


@pytest.fixture()
def clock(monkeypatch):
    fake = _Clock()
    monkeypatch.setattr(rate_limiter, "time", fake)
    return fake


def test_blocks_after_limit_until_window_ends(clock):
    limiter = FixedWindowLimiter()
    for _ in range(3):
        limiter.hit("login:1.2.3.4", limit=3, window_seconds=60)
    with pytest.raises(RateLimitedError) as exc:
        limiter.hit("login:1.2.3.4", limit=3, window_seconds=60)
    assert exc.value.status_code == 429
    assert exc.value.retry_after == 60

    clock.now += 61
    limiter.hit("login:1.2.3.4", limit=3, window_seconds=60)


def test_expired_windows_are_dropped(clock):
    limiter = FixedWindowLimiter()
    for i in range(50):
        limiter.hit(f"login:10.0.0.{i}", limit=5, window_seconds=60)
    assert len(limiter) == 50

    clock.now += 61
    limiter.hit("login:10.0.1.1", limit=5, window_seconds=60)
    assert len(limiter) == 1
