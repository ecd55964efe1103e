"""Maps of keys to equal-length series.

Public API:
    SynchronizedSeriesMap: series padded by a default factory
    FilledSeriesMap: series padded by one fixed fill value
    LockedSeriesMap: single-lock wrapper for sharing a map across threads
    SeriesMapError, SeriesLengthError: error types
"""
from seriesmap.errors import SeriesLengthError, SeriesMapError
from seriesmap.filled import FilledSeriesMap
from seriesmap.locked import LockedSeriesMap
from seriesmap.series_map import SynchronizedSeriesMap

__all__ = [
    "FilledSeriesMap",
    "LockedSeriesMap",
    "SeriesLengthError",
    "SeriesMapError",
    "SynchronizedSeriesMap",
]
