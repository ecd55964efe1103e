"""Shared fixtures for seriesmap tests."""
from __future__ import annotations

import random

import pytest

from seriesmap.series_map import SynchronizedSeriesMap


# Fixed seed so randomized step sequences are reproducible across runs
SEED = 42

KEY_POOL = ["cpu", "mem", "disk", "net", "gpu", "fan", "temp", "load"]


@pytest.fixture
def int_map() -> SynchronizedSeriesMap[str, int]:
    return SynchronizedSeriesMap(int)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)


@pytest.fixture
def random_steps(rng):
    """Build a list of n random steps.

    Each step is ("insert", key, value) or ("add", {key: value, ...}),
    drawn from KEY_POOL so keys keep appearing mid-sequence.
    """

    def build(n: int) -> list[tuple]:
        steps = []
        for i in range(n):
            if rng.random() < 0.5:
                steps.append(("insert", rng.choice(KEY_POOL), i + 1))
            else:
                keys = rng.sample(KEY_POOL, rng.randint(0, 4))
                steps.append(("add", {k: rng.randint(1, 100) for k in keys}))
        return steps

    return build
