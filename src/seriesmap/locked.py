"""Coarse-grained lock wrapper around SynchronizedSeriesMap.

insert() and add() are multi-step: pad the other series, then append
the new value. A reader running between those steps on another thread
would see series of different lengths. One threading.Lock around every
operation makes each call atomic from the outside.

Iteration hands back snapshots taken under the lock, never live views,
since a live view would be read after the lock is released.
"""
from __future__ import annotations

import threading
from typing import Callable, Generic, Hashable, Iterable, Iterator, Mapping, TypeVar

from seriesmap.series_map import SynchronizedSeriesMap
from seriesmap.types import DefaultFactory, Step

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LockedSeriesMap(Generic[K, V]):
    """SynchronizedSeriesMap wrapped in a single coarse lock.

    Args:
        series_map: Map to guard. Built from *default_factory* when omitted.
        default_factory: Padding factory for the map built here; ignored
            when *series_map* is given.

    Every method acquires the same lock, so concurrent writers serialize
    on it. That is the price of never exposing a half-padded step.
    """

    def __init__(
        self,
        series_map: SynchronizedSeriesMap[K, V] | None = None,
        default_factory: DefaultFactory[V] | None = None,
    ) -> None:
        if series_map is None:
            if default_factory is None:
                raise ValueError("Pass either series_map or default_factory")
            series_map = SynchronizedSeriesMap(default_factory)
        self._map = series_map
        self._lock = threading.Lock()

    # ---- mutation --------------------------------------------------------

    def insert(self, key: K, value: V) -> None:
        with self._lock:
            self._map.insert(key, value)

    def add(self, observed: Mapping[K, V] | Iterable[tuple[K, V]]) -> None:
        # build the dict before taking the lock
        observed = dict(observed)
        with self._lock:
            self._map.add(observed)

    def remove(self, key: K) -> list[V] | None:
        with self._lock:
            return self._map.remove(key)

    def retain(self, predicate: Callable[[K, list[V]], bool]) -> None:
        """Drop the series for which predicate(key, series) is false.

        The predicate runs on a snapshot outside the lock, so it may call
        back into this wrapper. Keys added after the snapshot are kept.
        """
        with self._lock:
            snap = list(self._map.items())
        doomed = [key for key, series in snap if not predicate(key, series)]
        with self._lock:
            for key in doomed:
                self._map.remove(key)

    def clear(self) -> None:
        with self._lock:
            self._map.clear()

    def drain(self) -> list[tuple[K, list[V]]]:
        """Empty the map and return every (key, series) pair."""
        with self._lock:
            return list(self._map.drain())

    def reserve(self, additional: int) -> None:
        with self._lock:
            self._map.reserve(additional)

    def shrink_to_fit(self) -> None:
        with self._lock:
            self._map.shrink_to_fit()

    # ---- queries ---------------------------------------------------------

    def get(self, key: K) -> list[V] | None:
        with self._lock:
            return self._map.get(key)

    def get_key_value(self, key: K) -> tuple[K, list[V]] | None:
        with self._lock:
            return self._map.get_key_value(key)

    def step(self, index: Step) -> dict[K, V]:
        with self._lock:
            return self._map.step(index)

    def nb_keys(self) -> int:
        with self._lock:
            return self._map.nb_keys()

    def nb_elements(self) -> int:
        with self._lock:
            return self._map.nb_elements()

    def is_empty(self) -> bool:
        with self._lock:
            return self._map.is_empty()

    def capacity(self) -> int:
        with self._lock:
            return self._map.capacity()

    def keys(self) -> list[K]:
        """Snapshot of all keys."""
        with self._lock:
            return list(self._map.keys())

    def values(self) -> list[list[V]]:
        """Snapshot of all series."""
        with self._lock:
            return list(self._map.values())

    def items(self) -> list[tuple[K, list[V]]]:
        """Snapshot of all (key, series) pairs, taken in one critical section."""
        with self._lock:
            return list(self._map.items())

    def snapshot(self) -> SynchronizedSeriesMap[K, V]:
        """Independent copy of the whole map, consistent as of one instant."""
        with self._lock:
            return self._map.copy()

    def check_invariants(self) -> None:
        with self._lock:
            self._map.check_invariants()

    @property
    def series_map(self) -> SynchronizedSeriesMap[K, V]:
        """The wrapped map. Only touch it once no other thread uses the wrapper."""
        return self._map

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._map

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys())

    def __len__(self) -> int:
        return self.nb_keys()

    def __repr__(self) -> str:
        with self._lock:
            return f"LockedSeriesMap({self._map!r})"
