"""Series map padded with one fixed fill value.

The simpler of the two variants: instead of a factory, the caller hands
over the padding value itself, e.g. FilledSeriesMap(0.0) or
FilledSeriesMap(None). Each padding slot receives copy.copy(fill_value),
so a mutable fill value such as [] is not aliased between slots.
"""
from __future__ import annotations

import copy
import functools
from typing import Hashable, TypeVar

from seriesmap.series_map import SynchronizedSeriesMap

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class FilledSeriesMap(SynchronizedSeriesMap[K, V]):
    """SynchronizedSeriesMap whose default is a fixed value."""

    __slots__ = ("_fill_value",)

    def __init__(self, fill_value: V) -> None:
        super().__init__(functools.partial(copy.copy, fill_value))
        self._fill_value = fill_value

    @classmethod
    def with_capacity(cls, fill_value: V, capacity: int) -> FilledSeriesMap[K, V]:
        m = cls(fill_value)
        m.reserve(capacity)
        return m

    @property
    def fill_value(self) -> V:
        return self._fill_value

    def _spawn(self) -> FilledSeriesMap[K, V]:
        return type(self)(self._fill_value)

    def __repr__(self) -> str:
        return (
            f"FilledSeriesMap(fill_value={self._fill_value!r}, "
            f"keys={len(self)}, elements={self.nb_elements()})"
        )
