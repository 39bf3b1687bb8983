"""Bounded in-memory cache with TTL expiry and insertion-order eviction."""

import time
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISSING = object()


class BoundedTTLCache(Generic[K, V]):
    """Map with a per-entry expiry and a maximum size.

    Expired entries are dropped lazily on read and in bulk by ``prune``.
    When full, the oldest insertion is evicted first. ``prune`` walks a
    snapshot of the keys, so lookups running between awaits never see a
    half-swept structure.
    """

    def __init__(
        self,
        ttl_s: float,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.ttl_s = ttl_s
        self.max_size = max_size
        self._clock = clock
        self._data: "OrderedDict[K, Tuple[float, V]]" = OrderedDict()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        entry = self._data.get(key)
        if entry is None:
            return default
        expires_at, value = entry
        if self._clock() >= expires_at:
            self._data.pop(key, None)
            return default
        return value

    def set(self, key: K, value: V, ttl_s: Optional[float] = None) -> None:
        """Insert or refresh an entry; a refreshed key moves to the newest position."""
        self._data.pop(key, None)
        self._data[key] = (self._clock() + (self.ttl_s if ttl_s is None else ttl_s), value)
        while len(self._data) > self.max_size:
            self._data.popitem(last=False)

    def delete(self, key: K) -> bool:
        return self._data.pop(key, None) is not None

    def __contains__(self, key: object) -> bool:
        return self.get(key, _MISSING) is not _MISSING  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._data))

    def items(self) -> List[Tuple[K, V]]:
        """Snapshot of the live (unexpired) entries, oldest first."""
        now = self._clock()
        return [(k, v) for k, (expires_at, v) in list(self._data.items()) if now < expires_at]

    def expired_keys(self) -> List[K]:
        now = self._clock()
        return [k for k, (expires_at, _) in list(self._data.items()) if now >= expires_at]

    def prune(self) -> int:
        """Drop expired entries and enforce the size bound. Returns entries removed."""
        removed = 0
        for key in self.expired_keys():
            if self._data.pop(key, None) is not None:
                removed += 1
        while len(self._data) > self.max_size:
            self._data.popitem(last=False)
            removed += 1
        return removed

    def clear(self) -> None:
        self._data.clear()
