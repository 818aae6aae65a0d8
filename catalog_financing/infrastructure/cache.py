"""In-memory TTL cache for slow-changing reference data"""

import time
from typing import Any, Callable, Dict, Hashable, Tuple

from catalog_financing.infrastructure.observability.metrics import cache_hit_counter, cache_miss_counter


class TTLCache:
    """
    Keyed cache whose entries expire ttl_seconds after they were loaded.

    The clock is injected so expiry can be tested without sleeping. Entries are
    reloaded lazily on the first read after expiry.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic, name: str = "reference"):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.name = name
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        now = self.clock()
        entry = self._entries.get(key)

        if entry is not None and (now - entry[0]) <= self.ttl_seconds:
            cache_hit_counter.labels(cache=self.name).inc()
            return entry[1]

        cache_miss_counter.labels(cache=self.name).inc()
        value = loader()
        self._entries[key] = (now, value)
        return value

    def invalidate(self, key: Hashable | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)
