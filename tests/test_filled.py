"""Tests for FilledSeriesMap, the fixed fill-value variant."""
from __future__ import annotations

import pytest

from seriesmap.filled import FilledSeriesMap
from seriesmap.series_map import SynchronizedSeriesMap


class TestFilledBasics:
    def test_insert_pads_with_fill_value(self):
        m = FilledSeriesMap(0)
        m.insert("a", 1)
        m.insert("a", 10)
        m.insert("b", 8)
        assert m.get("a") == [1, 10, 0]
        assert m.get("b") == [0, 0, 8]

    def test_add_pads_with_fill_value(self):
        m = FilledSeriesMap(-1.0)
        m.insert("a", 1.0)
        m.add({"a": 1.0, "b": 2.0})
        m.add({"b": 22.0, "c": 33.0})
        assert m.get("a") == [1.0, 1.0, -1.0]
        assert m.get("b") == [-1.0, 2.0, 22.0]
        assert m.get("c") == [-1.0, -1.0, 33.0]

    def test_none_fill_value(self):
        m = FilledSeriesMap(None)
        m.insert("a", "x")
        m.insert("b", "y")
        assert m.get("a") == ["x", None]
        assert m.get("b") == [None, "y"]

    def test_fill_value_property(self):
        assert FilledSeriesMap("n/a").fill_value == "n/a"

    def test_is_a_series_map(self):
        assert isinstance(FilledSeriesMap(0), SynchronizedSeriesMap)


class TestFilledCopies:
    def test_mutable_fill_value_copied_per_slot(self):
        fill: list[str] = []
        m = FilledSeriesMap(fill)
        m.insert("a", ["x"])
        m.insert("b", ["y"])
        m.insert("c", ["z"])
        pad_a = m.get("a")[1]
        pad_b = m.get("b")[0]
        assert pad_a == pad_b == []
        assert pad_a is not pad_b
        assert pad_a is not fill

    def test_copy_keeps_variant(self):
        m = FilledSeriesMap(7)
        m.insert("a", 1)
        clone = m.copy()
        assert isinstance(clone, FilledSeriesMap)
        assert clone.fill_value == 7
        clone.insert("b", 2)
        assert clone.get("a") == [1, 7]
        assert m.nb_keys() == 1


class TestFilledCapacity:
    def test_with_capacity(self):
        m = FilledSeriesMap.with_capacity(0, 16)
        assert isinstance(m, FilledSeriesMap)
        assert m.capacity() >= 16
        assert m.is_empty()

    def test_with_capacity_rejects_negative(self):
        with pytest.raises(ValueError):
            FilledSeriesMap.with_capacity(0, -1)

    def test_repr(self):
        m = FilledSeriesMap(0)
        m.insert("a", 1)
        assert repr(m) == "FilledSeriesMap(fill_value=0, keys=1, elements=1)"


class BrittleFill:
    """Fill value whose copy fails on the *fail_on*-th copy.copy()."""

    def __init__(self, fail_on: int) -> None:
        self.copies = 0
        self.fail_on = fail_on

    def __copy__(self):
        self.copies += 1
        if self.copies == self.fail_on:
            raise RuntimeError("copy failed")
        return BrittleFill(fail_on=0)


class TestFilledFailedCopy:
    def test_insert_unchanged_when_copy_raises(self):
        m = FilledSeriesMap(BrittleFill(fail_on=2))
        m.add({"a": 1, "b": 2, "c": 3})
        before = dict(m.items())

        with pytest.raises(RuntimeError):
            m.insert("d", 4)

        m.check_invariants()
        assert dict(m.items()) == before
