"""
Shared fixtures: candle series built from close lists and a seeded random walk.
"""
import numpy as np
import pytest

from stockwise.shared.types import Candle, CandleSeries


DAY = 86400
START = 1_704_153_600  # 2024-01-02 00:00 UTC


def series_from_closes(closes, highs=None, lows=None, start=START):
    """One candle per day; high/low default to the close."""
    highs = closes if highs is None else highs
    lows = closes if lows is None else lows
    return CandleSeries(tuple(
        Candle(start + i * DAY, float(c), float(h), float(lo), float(c), 1000.0)
        for i, (c, h, lo) in enumerate(zip(closes, highs, lows))
    ))


@pytest.fixture
def make_series():
    """Factory: make_series([10, 11, 12]) -> CandleSeries."""
    return series_from_closes


@pytest.fixture
def random_walk_series():
    """300 daily candles of a seeded random walk around 100."""
    rng = np.random.default_rng(42)
    closes = 100 * np.exp(np.cumsum(rng.normal(0, 0.02, 300)))
    spread = np.abs(rng.normal(0, 0.01, 300))
    return series_from_closes(closes, highs=closes * (1 + spread), lows=closes * (1 - spread))


@pytest.fixture
def sine_series():
    """120 daily candles oscillating around 100 with a 30-day cycle."""
    t = np.arange(120)
    closes = 100 + 10 * np.sin(2 * np.pi * t / 30)
    return series_from_closes(closes, highs=closes + 1, lows=closes - 1)
