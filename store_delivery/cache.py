"""In-memory response cache with a fixed time-to-live."""

import time
from typing import Any, Callable


class ResponseCache:
    """Cache API results by key for ``ttl_seconds``.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must not be negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one key, or everything when ``key`` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def get_or_fetch(self, key: str, fetch: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, calling ``fetch`` on a miss."""
        value = self.get(key)
        if value is None:
            value = fetch()
            self.set(key, value)
        return value

    def __len__(self) -> int:
        return len(self._entries)
