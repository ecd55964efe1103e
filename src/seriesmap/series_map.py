"""Synchronized series map: a dict of equal-length lists.

Each key names one series (a column). Every insert() or add() call is
one step: the series that received a value get it appended, every other
series gets a default appended, so all series always share one length.
A key seen for the first time is caught up with defaults for every step
it missed before its own value is appended.

    m = SynchronizedSeriesMap(int)
    m.insert("a", 1)              # a=[1]
    m.insert("b", 8)              # a=[1, 0]     b=[0, 8]
    m.add({"a": 5, "c": 7})       # a=[1, 0, 5]  b=[0, 8, 0]  c=[0, 0, 7]

The shape is a sparse column-oriented table: nb_keys() columns by
nb_elements() rows, where absent observations read as the default.

Accessors return copies of the stored lists. Handing out the live list
would let a caller append to one series and silently desynchronize it
from the rest.
"""
from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Iterator, Mapping, TypeVar

from seriesmap.errors import SeriesLengthError
from seriesmap.types import DefaultFactory, Series, Step

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SynchronizedSeriesMap(Mapping[K, Series[V]]):
    """Map of keys to series kept at one common length.

    Args:
        default_factory: Zero-argument callable producing the padding
            value (``int``, ``float``, ``list``, ...). Called once per
            padding slot, so mutable defaults are never shared.

    INVARIANT: after every public method returns, every series has
    exactly nb_elements() items.
    """

    __slots__ = ("_inner", "_default_factory", "_capacity")

    def __init__(self, default_factory: DefaultFactory[V]) -> None:
        if not callable(default_factory):
            raise TypeError(
                "default_factory must be callable, got "
                f"{type(default_factory).__name__}"
            )
        self._inner: dict[K, list[V]] = {}
        self._default_factory = default_factory
        self._capacity: int = 0

    @classmethod
    def with_capacity(
        cls, default_factory: DefaultFactory[V], capacity: int
    ) -> SynchronizedSeriesMap[K, V]:
        """Empty map sized for *capacity* keys.

        Python dicts grow on their own, so this only records a hint
        (see capacity()). Contents behave exactly as with the plain
        constructor.
        """
        m = cls(default_factory)
        m.reserve(capacity)
        return m

    # ---- queries ---------------------------------------------------------

    def nb_keys(self) -> int:
        return len(self._inner)

    def nb_elements(self) -> int:
        """Common length of every series, 0 when the map is empty."""
        for series in self._inner.values():
            return len(series)
        return 0

    def is_empty(self) -> bool:
        return not self._inner

    def capacity(self) -> int:
        return max(self._capacity, len(self._inner))

    def get(self, key: K, default: list[V] | None = None) -> list[V] | None:
        """Copy of the series for *key*, or *default* if it was never inserted."""
        series = self._inner.get(key)
        if series is None:
            return default
        return list(series)

    def get_key_value(self, key: K) -> tuple[K, list[V]] | None:
        """Return (stored_key, series) or None.

        The stored key is the object the map actually holds, which can
        differ from an equal *key* (1 vs 1.0 vs True). Finding it is a
        linear scan over the keys: a dict has no O(1) way to hand back
        its own key object. The scan matches the way a dict does, hash
        first, then identity or equality.
        """
        if key not in self._inner:
            return None
        key_hash = hash(key)
        for stored, series in self._inner.items():
            if hash(stored) == key_hash and (stored is key or stored == key):
                return stored, list(series)
        return None

    def step(self, index: Step) -> dict[K, V]:
        """The row recorded at one step, keyed by series.

        Negative indices count back from the newest step, like list
        indexing. Raises IndexError outside [-nb_elements(), nb_elements()).
        """
        n = self.nb_elements()
        if not -n <= index < n:
            raise IndexError(f"Step {index} out of range for {n} elements")
        return {key: series[index] for key, series in self._inner.items()}

    def check_invariants(self) -> None:
        """Raise SeriesLengthError if any series is out of step."""
        expected = self.nb_elements()
        for key, series in self._inner.items():
            if len(series) != expected:
                raise SeriesLengthError(key, expected, len(series))

    # ---- mutation --------------------------------------------------------

    def insert(self, key: K, value: V) -> None:
        """Append *value* to the series for *key*, one default to every other.

        A new key is first filled with nb_elements() defaults so it
        lines up with the step the others are about to reach.

        Every default is built before any series is touched, so a
        default_factory that raises leaves the map unchanged.
        """
        n = self.nb_elements()
        target = self._inner.get(key)
        pads = [
            (series, self._default_factory())
            for series in self._inner.values()
            if series is not target
        ]
        caught_up = self._caught_up(n) if target is None else None

        for series, pad in pads:
            series.append(pad)
        if target is None:
            target = caught_up
            self._inner[key] = target
            log.debug("insert: new series %r caught up to %d elements", key, n)
        target.append(value)

    def add(self, observed: Mapping[K, V] | Iterable[tuple[K, V]]) -> None:
        """Record one step where only the keys in *observed* have values.

        *observed* is a mapping or an iterable of (key, value) pairs; a
        key repeated in the pairs keeps its last value. Keys not in the
        map yet are caught up with defaults, keys the map has but
        *observed* lacks get a default. Every series grows by exactly one.
        As with insert(), all defaults exist before the first append.
        """
        observed = dict(observed)
        new_keys, missing_keys = self._key_partition(observed)
        n = self.nb_elements()

        fresh = {key: self._caught_up(n) for key in new_keys}
        pads = {key: self._default_factory() for key in missing_keys}

        self._inner.update(fresh)

        for key, value in observed.items():
            self._inner[key].append(value)

        for key, pad in pads.items():
            self._inner[key].append(pad)

        if new_keys:
            log.debug(
                "add: %d new series caught up to %d elements", len(new_keys), n
            )

    def remove(self, key: K) -> list[V] | None:
        """Delete *key* and hand back its series, or None if absent."""
        return self._inner.pop(key, None)

    def retain(self, predicate: Callable[[K, list[V]], bool]) -> None:
        """Keep only the series for which predicate(key, series) is true.

        The predicate sees a copy of each series.
        """
        doomed = [
            key for key, series in self._inner.items()
            if not predicate(key, list(series))
        ]
        for key in doomed:
            del self._inner[key]

    def clear(self) -> None:
        log.debug("clear: dropping %d series", len(self._inner))
        self._inner.clear()

    def drain(self) -> Iterator[tuple[K, list[V]]]:
        """Remove every series and yield the (key, series) pairs once.

        The map is empty as soon as drain() returns, whether or not the
        iterator is consumed.
        """
        drained, self._inner = self._inner, {}
        log.debug("drain: detached %d series", len(drained))
        return iter(drained.items())

    def reserve(self, additional: int) -> None:
        """Raise the capacity hint to at least nb_keys() + *additional*."""
        if additional < 0:
            raise ValueError(f"additional must be >= 0, got {additional}")
        self._capacity = max(self._capacity, len(self._inner) + additional)

    def shrink_to_fit(self) -> None:
        self._capacity = len(self._inner)

    def copy(self) -> SynchronizedSeriesMap[K, V]:
        """Independent copy: new lists, same default."""
        clone = self._spawn()
        clone._inner = {key: list(series) for key, series in self._inner.items()}
        clone._capacity = self._capacity
        return clone

    __copy__ = copy

    # ---- internals -------------------------------------------------------

    def _spawn(self) -> SynchronizedSeriesMap[K, V]:
        """Empty map with the same padding configuration."""
        return type(self)(self._default_factory)

    def _caught_up(self, n: int) -> list[V]:
        return [self._default_factory() for _ in range(n)]

    def _key_partition(self, observed: dict[K, V]) -> tuple[set[K], set[K]]:
        """(keys only in *observed*, keys only in the map)."""
        new_keys = {key for key in observed if key not in self._inner}
        missing_keys = {key for key in self._inner if key not in observed}
        return new_keys, missing_keys

    # ---- dunder ----------------------------------------------------------

    def __getitem__(self, key: K) -> list[V]:
        return list(self._inner[key])

    def __contains__(self, key: object) -> bool:
        return key in self._inner

    def __iter__(self) -> Iterator[K]:
        return iter(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}"
            f"(keys={len(self._inner)}, elements={self.nb_elements()})"
        )
