"""In-memory key/value store with per-entry time-to-live."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


logger = logging.getLogger("uvicorn.error")

DEFAULT_TTL = 600
DEFAULT_CHECK_PERIOD = 120


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    key_count: int
    sets: int
    expired: int


@dataclass
class _Entry:
    value: Any
    expires_at: Optional[float]

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class TTLCache:
    """Expiring cache with lazy expiry on read and an optional sweeper thread.

    An entry whose TTL has elapsed is treated as absent by every read even if
    the sweeper has not evicted it yet. A TTL of ``0`` keeps the entry until it
    is deleted or flushed. There is no capacity bound.
    """

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        check_period: float = DEFAULT_CHECK_PERIOD,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_ttl < 0:
            raise ValueError("default_ttl must be >= 0")
        self.default_ttl = default_ttl
        self.check_period = check_period
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._expired = 0
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None

    def _live_entry(self, key: str, now: float) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(now):
            del self._entries[key]
            self._expired += 1
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key, self._clock())
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> bool:
        if ttl is None:
            ttl = self.default_ttl
        if ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {ttl!r}")
        with self._lock:
            expires_at = None if ttl == 0 else self._clock() + ttl
            self._entries[key] = _Entry(value=value, expires_at=expires_at)
            self._sets += 1
        return True

    def delete(self, *keys: str) -> int:
        removed = 0
        with self._lock:
            now = self._clock()
            for key in keys:
                if self._live_entry(key, now) is not None:
                    del self._entries[key]
                    removed += 1
        return removed

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key, self._clock()) is not None

    def flush(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._sets = 0
            self._expired = 0

    def sweep(self) -> int:
        """Evict every expired entry and return how many were removed."""

        with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]
            self._expired += len(expired_keys)
        if expired_keys:
            logger.debug("Cache sweep evicted %d expired entries", len(expired_keys))
        return len(expired_keys)

    def stats(self) -> CacheStats:
        with self._lock:
            now = self._clock()
            key_count = sum(1 for entry in self._entries.values() if not entry.is_expired(now))
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                key_count=key_count,
                sets=self._sets,
                expired=self._expired,
            )

    @property
    def sweeping(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def start(self) -> None:
        """Start the background sweeper; a no-op when check_period is 0."""

        if self.check_period <= 0 or self.sweeping:
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, name="ttl-cache-sweeper", daemon=True)
        self._sweeper.start()

    def stop(self) -> None:
        self._stop_event.set()
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is not None:
            sweeper.join(timeout=max(1.0, self.check_period))

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self.check_period):
            try:
                self.sweep()
            except Exception:  # pragma: no cover
                logger.exception("Cache sweep failed")
