"""ExpressionCache: in-process store of compiled lexicons.

Design goals:
  - Build-once: concurrent callers asking for the same key wait for one build
  - Bounded lifetime: entries expire after a TTL (24h by default)
  - Explicit: passed into the detector, cleared with invalidate_all()
"""

from __future__ import annotations
import logging
import threading
import time
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_TTL = 86400  # 24 hours

T = TypeVar("T")


class ExpressionCache(Generic[T]):
    """Key → value store with TTL and single-flight builds."""

    __slots__ = ("_ttl", "_clock", "_entries", "_lock", "_key_locks")

    def __init__(
        self,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, tuple[float, T]] = {}     # key → (expires_at, value)
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def get(self, key: str) -> T | None:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    def get_or_compile(self, key: str, builder: Callable[[], T]) -> T:
        """Return the cached value or build it exactly once per key."""
        value = self.get(key)
        if value is not None:
            return value

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        try:
            with key_lock:
                # Another thread may have finished the build while we waited
                value = self.get(key)
                if value is not None:
                    return value
                started = time.perf_counter()
                value = builder()
                self.put(key, value)
                logger.info(f"Compiled cache entry {key} in {time.perf_counter() - started:.3f}s")
        finally:
            with self._lock:
                self._key_locks.pop(key, None)
        return value

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} cached lexicon(s)")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)

    def keys(self) -> list[str]:
        with self._lock:
            now = self._clock()
            return [k for k, (expires_at, _) in self._entries.items() if now < expires_at]


_default_cache: ExpressionCache | None = None


def default_cache() -> ExpressionCache:
    """Shared cache for detectors created without an explicit one."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ExpressionCache()
    return _default_cache
