"""In-memory TTL cache shared by every provider call.

One instance is built per application in create_app() and handed to
handlers through app.state. Entries expire lazily: a stale entry stays in
the store until the same key is set again or the cache is cleared, and
get() simply reports it as a miss. There is no sweeper and no size bound,
which is fine for the handful of provider/parameter keys this service sees.
A large or user-controlled keyspace would need a capacity limit.

Note: each uvicorn worker has its own cache instance.
"""

import threading
import time
from datetime import timedelta
from typing import Any, Callable, NamedTuple


class CacheEntry(NamedTuple):
    value: Any
    inserted_at: float


class TTLCache:
    """Thread-safe string-keyed cache whose entries go stale after `timeout`.

    An entry is fresh while its age is <= timeout and stale once it is
    strictly greater. A zero timeout makes every read miss; a negative
    one is treated as zero.
    """

    def __init__(
        self,
        timeout: float | timedelta,
        clock: Callable[[], float] = time.monotonic,
    ):
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        timeout = float(timeout)
        # NaN fails the comparison and is treated like a negative timeout
        self.timeout: float = timeout if timeout >= 0 else 0.0
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> tuple[Any, bool]:
        """Return (value, True) for a fresh entry, (None, False) otherwise."""
        with self._lock:
            entry = self._store.get(key)
        if entry is None:
            return None, False
        if not self.timeout or self._clock() - entry.inserted_at > self.timeout:
            return None, False
        return entry.value, True

    def set(self, key: str, value: Any) -> None:
        entry = CacheEntry(value, self._clock())
        with self._lock:
            self._store[key] = entry

    def clear(self) -> None:
        with self._lock:
            self._store = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
