"""
Crossover rules shared by the strategies.

Two indicator series are aligned on candle time (inner join) before any
comparison. A bullish cross at row i means A[i-1] <= B[i-1] and A[i] > B[i];
a bearish cross is the mirror with >= / <. A flat touch followed by
separation therefore counts as a cross in the direction of separation.
"""
from typing import Callable, List, Optional, Union

import pandas as pd

from ..shared.types import CandleSeries, Signal, SignalType


Reason = Union[str, Callable[[pd.Series], str]]


def crossovers(a: pd.Series, b: pd.Series) -> pd.DataFrame:
    """
    Detect crossovers of `a` against `b`.

    Returns:
        DataFrame indexed by the common times with columns a, b, bullish, bearish.
        The first common time never crosses (it has no previous row).
    """
    aligned = pd.concat({"a": a, "b": b}, axis=1, join="inner")
    prev = aligned.shift(1)
    aligned["bullish"] = (prev["a"] <= prev["b"]) & (aligned["a"] > aligned["b"])
    aligned["bearish"] = (prev["a"] >= prev["b"]) & (aligned["a"] < aligned["b"])
    return aligned


def make_signal(
    series: CandleSeries,
    time: int,
    signal_type: SignalType,
    reason: str,
) -> Optional[Signal]:
    """Signal at the candle with this time, priced at its close. None if no such candle."""
    index = series.index_of(time)
    if index is None:
        return None
    return Signal(
        time=int(time),
        signal_type=signal_type,
        price=series[index].close,
        reason=reason,
        source_index=index,
    )


def _reason_text(reason: Reason, row: pd.Series) -> str:
    return reason(row) if callable(reason) else reason


def crossover_signals(
    series: CandleSeries,
    crosses: pd.DataFrame,
    buy_reason: Reason,
    sell_reason: Reason,
) -> List[Signal]:
    """
    Emit a BUY on every bullish row and a SELL on every bearish row.

    No position is tracked: consecutive buys (or sells) are emitted as-is and
    left to the backtest's pairing step.
    """
    signals: List[Signal] = []
    events = crosses[crosses["bullish"] | crosses["bearish"]]
    for time, row in events.iterrows():
        if row["bullish"]:
            signal = make_signal(series, time, SignalType.BUY, _reason_text(buy_reason, row))
        else:
            signal = make_signal(series, time, SignalType.SELL, _reason_text(sell_reason, row))
        if signal is not None:
            signals.append(signal)
    return signals
