"""Exceptions raised by seriesmap.

Not-found is never an exception here: get(), get_key_value() and
remove() return None for absent keys. These types cover the one
condition correct use of the public API can never reach, a pair of
series that disagree in length.
"""
from __future__ import annotations

from typing import Hashable


class SeriesMapError(Exception):
    """Base class for errors raised by this package."""


class SeriesLengthError(SeriesMapError):
    """Raised when a series is out of step with the rest of the map."""

    def __init__(self, key: Hashable, expected: int, actual: int) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Series {key!r} has {actual} elements, expected {expected}"
        )
