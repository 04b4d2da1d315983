"""Input sanitization, security headers and per-client rate limiting."""

from __future__ import annotations

import logging
import math
import random
import re
import threading
import time
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

SECURITY_HEADERS: Mapping[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

SCRIPT_TAG_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)


def apply_security_headers(headers: MutableMapping[str, str]) -> None:
    """Set the fixed security headers on a response header map."""
    for name, value in SECURITY_HEADERS.items():
        headers[name] = value


def sanitize_value(value: str) -> str:
    """Strip ``<script>`` blocks and surrounding whitespace.

    Best-effort only. This does not replace output encoding and does nothing
    about attribute-based injection.
    """
    return SCRIPT_TAG_RE.sub("", value).strip()


def sanitize_input(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with every top-level string value sanitized."""
    return {key: sanitize_value(value) if isinstance(value, str) else value for key, value in data.items()}


@dataclass
class RateLimitEntry:
    count: int
    window_start: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    retry_after: int | None = None


class RateLimiter:
    """Fixed-window request counter keyed by client address.

    The first request from a key opens a window. Requests inside the window
    are counted and rejected once the count exceeds ``max_requests``. A key
    whose window has elapsed starts a new one.

    Expired entries are swept on a random subset of requests, and always
    once the map holds more than ``max_entries`` keys.
    """

    def __init__(
        self,
        window_seconds: float = 900.0,
        max_requests: int = 100,
        *,
        cleanup_probability: float = 0.01,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.cleanup_probability = cleanup_probability
        self.max_entries = max_entries
        self._clock = clock
        self._rand = rand
        self._lock = threading.Lock()
        self._entries: dict[str, RateLimitEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def check(self, key: str) -> RateLimitDecision:
        """Count one request from ``key`` and decide whether it may proceed."""
        now = self._clock()
        with self._lock:
            decision = self._count(key, now)
            if self._rand() < self.cleanup_probability or len(self._entries) > self.max_entries:
                self._sweep(now)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for client %s", key)
        return decision

    def _count(self, key: str, now: float) -> RateLimitDecision:
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = RateLimitEntry(count=1, window_start=now)
            return RateLimitDecision(allowed=True)

        if now - entry.window_start > self.window_seconds:
            entry.count = 1
            entry.window_start = now
            return RateLimitDecision(allowed=True)

        entry.count += 1
        if entry.count > self.max_requests:
            remaining = entry.window_start + self.window_seconds - now
            return RateLimitDecision(allowed=False, retry_after=max(math.ceil(remaining), 0))
        return RateLimitDecision(allowed=True)

    def sweep(self) -> int:
        """Drop every entry whose window has elapsed. Returns how many were removed."""
        with self._lock:
            return self._sweep(self._clock())

    def _sweep(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if now - entry.window_start > self.window_seconds]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
