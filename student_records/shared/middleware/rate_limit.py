# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock

from flask import Request, request

from student_records.shared.config import load_config
from student_records.shared.errors import RateLimitedError
from student_records.shared.logging import logger


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = Lock()
        self._buckets: dict[str, Bucket] = defaultdict(lambda: Bucket(deque(maxlen=self._limit)))
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._buckets)

    def _sweep(self, now: float) -> None:
        # At most once per window, forget clients whose newest hit has expired.
        if now - self._last_sweep < self._window:
            return
        self._last_sweep = now
        stale = [
            key
            for key, bucket in self._buckets.items()
            if not bucket.timestamps or (now - bucket.timestamps[-1]) > self._window
        ]
        for key in stale:
            del self._buckets[key]

    def retry_after(self, key: str) -> float:
        """Return 0 when ``key`` may proceed (and record the hit), else seconds to wait."""
        with self._lock:
            now = self._clock()
            self._sweep(now)
            bucket = self._buckets[key]
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return max(0.1, self._window - (now - bucket.timestamps[0]))
            bucket.timestamps.append(now)
            return 0.0

    def allow(self, key: str) -> bool:
        return self.retry_after(key) == 0.0


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    config = load_config()
    enabled = config.security.enable_rate_limit
    limiter = InMemoryRateLimiter(
        limit or config.security.rate_limit_requests,
        window_seconds or config.security.rate_limit_window,
    )

    def decorator(f: Callable):
        if not enabled:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            key = f"{request.path}:{_client_key(request)}"
            wait = limiter.retry_after(key)
            if wait:
                logger.warning(f"rate_limit: blocked {key} retry_after={wait:.1f}s")
                raise RateLimitedError(wait)
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
