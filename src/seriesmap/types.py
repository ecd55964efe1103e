"""Shared type aliases used across the package."""
from __future__ import annotations

from typing import Callable, TypeAlias, TypeVar

V = TypeVar("V")

Series: TypeAlias = list[V]
DefaultFactory: TypeAlias = Callable[[], V]
Step: TypeAlias = int  # zero-based index of one insert/add round
