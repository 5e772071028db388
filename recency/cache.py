from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable, Iterable
from enum import Enum
from typing import Final, Generic, Literal, TypeAlias, TypeVar

from structlog.typing import FilteringBoundLogger

from recency.errors import InvalidCapacityError
from recency.logger import get_logger


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _Missing(Enum):
    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return "NOT_FOUND"


# Returned by RecencyCache.get() on a miss. Never equal to a stored value.
NOT_FOUND: Final = _Missing.NOT_FOUND
NotFound: TypeAlias = Literal[_Missing.NOT_FOUND]


class RecencyCache(Generic[K, V]):
    """
    Fixed-capacity key/value store with least-recently-used eviction.

    Recency is kept in an OrderedDict: the first item is the oldest,
    the last one the most recently touched. get() on a hit and set()
    both move the key to the end; eviction pops from the front.
    """

    __slots__ = ("_capacity", "_order", "_log")

    def __init__(self, capacity: int, initial: Iterable[tuple[K, V]] = ()) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidCapacityError(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity < 1:
            raise InvalidCapacityError(f"capacity must be >= 1, got {capacity}")

        self._capacity: int = capacity
        self._order: OrderedDict[K, V] = OrderedDict()
        self._log: FilteringBoundLogger = get_logger("cache")

        for key, value in initial:
            self.set(key, value)

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> V | NotFound:
        """Return the value for *key* and mark it most recently used, or NOT_FOUND."""
        if key not in self._order:
            return NOT_FOUND
        self._order.move_to_end(key, last=True)
        return self._order[key]

    def set(self, key: K, value: V) -> None:
        """Store *value* under *key* as the most recently used entry, evicting if over capacity."""
        # pop + insert even when key is already newest
        self._order.pop(key, None)
        self._order[key] = value
        if len(self._order) > self._capacity:
            evicted, _ = self._order.popitem(last=False)
            self._log.debug("cache.evict", key=evicted, capacity=self._capacity)

    def delete(self, key: K) -> None:
        self._order.pop(key, None)

    def clear(self) -> None:
        dropped = len(self._order)
        self._order.clear()
        self._log.debug("cache.clear", dropped=dropped)

    def entries(self) -> list[tuple[K, V]]:
        """Snapshot of all entries, most recently used first."""
        return list(reversed(self._order.items()))

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        # membership only, does not touch recency
        return key in self._order

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._order)})"


__all__ = ["NOT_FOUND", "NotFound", "RecencyCache"]
