"""In-process response cache with per-entry TTL."""

import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

MISSING = object()


class TTLCache:
    """Bounded key/value cache where every entry expires after its own TTL.

    One instance lives on the application state and is handed to the
    upstream clients through a dependency, so tests can build their own
    instance with a fake clock.
    """

    def __init__(self, max_entries: int = 512, clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[float, Any]] = OrderedDict()

    def get(self, key: Hashable) -> Any:
        """Return the cached value, or ``MISSING`` if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return MISSING
        expires_at, value = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return MISSING
        self._entries.move_to_end(key)
        return value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        self._entries[key] = (self._clock() + ttl, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def invalidate(self, key: Hashable | None = None) -> None:
        """Drop one key, or everything when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not MISSING

    def __len__(self) -> int:
        return len(self._entries)
