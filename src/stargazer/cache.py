"""In-process response cache with per-entry TTL.

Passed explicitly to run(); nothing in the package holds a global instance.
"""

from __future__ import annotations

import hashlib
import json
import threading
import time
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class _Entry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[K, V]):
    """Thread-safe dict with expiry. Oldest insertion is evicted when full."""

    def __init__(self, maxsize: int = 512, clock: Callable[[], float] = time.time):
        self.maxsize = maxsize
        self._clock = clock
        self._lock = threading.Lock()
        self._data: dict[K, _Entry[V]] = {}

    def get(self, key: K) -> V | None:
        now = self._clock()
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            if entry.expires_at <= now:
                del self._data[key]
                return None
            return entry.value

    def set(self, key: K, value: V, ttl_seconds: float) -> None:
        with self._lock:
            self._data.pop(key, None)
            while self._data and len(self._data) >= self.maxsize:
                self._data.pop(next(iter(self._data)))
            self._data[key] = _Entry(value=value, expires_at=self._clock() + float(ttl_seconds))

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def response_cache_key(params: Mapping[str, Any]) -> str:
    """SHA-256 of the key-sorted JSON encoding of `params`."""
    stable = json.dumps(dict(params), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(stable.encode("utf-8")).hexdigest()
