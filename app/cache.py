import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class CacheEntry:
    value: Any
    created_at: float


class SnapshotCache:
    """Single-slot in-memory cache with a TTL and an injectable clock.

    Holds at most one value. An entry is served while
    ``clock() - created_at < ttl_seconds``; expired entries are dropped on read.
    """

    def __init__(self, ttl_seconds: float = 45.0, clock: Optional[Callable[[], float]] = None):
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.time
        self._entry: Optional[CacheEntry] = None

    def get(self) -> Optional[Any]:
        entry = self._entry
        if entry is None:
            return None
        if self._clock() - entry.created_at >= self.ttl_seconds:
            self._entry = None
            return None
        return entry.value

    def put(self, value: Any) -> CacheEntry:
        self._entry = CacheEntry(value=value, created_at=self._clock())
        return self._entry

    def clear(self) -> None:
        self._entry = None

    def expires_at(self) -> Optional[float]:
        """Epoch seconds at which the current entry goes stale, if any."""
        if self._entry is None:
            return None
        return self._entry.created_at + self.ttl_seconds

    def age(self) -> Optional[float]:
        if self._entry is None:
            return None
        return self._clock() - self._entry.created_at

    @property
    def has_entry(self) -> bool:
        return self.get() is not None
