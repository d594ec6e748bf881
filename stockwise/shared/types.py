"""
Shared types for the indicator, strategy and backtest modules.

This module holds the input data model (Candle, CandleSeries), the point
types produced by indicators, and the Signal type produced by strategies.
Every type is immutable; indicators, strategies and the backtest only ever
read a CandleSeries and build new values from it.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import pandas as pd


OHLCV_COLUMNS = ("open", "high", "low", "close", "volume")


@dataclass(frozen=True)
class Candle:
    """One OHLCV bar. `time` is unix seconds."""
    time: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


def _index_to_unix_seconds(index: pd.Index) -> List[int]:
    """Convert a DatetimeIndex (naive = UTC) or integer index to unix seconds."""
    if isinstance(index, pd.DatetimeIndex):
        if index.tz is not None:
            index = index.tz_convert("UTC").tz_localize(None)
        return ((index - pd.Timestamp("1970-01-01")) // pd.Timedelta(seconds=1)).tolist()
    return [int(t) for t in index]


@dataclass(frozen=True)
class CandleSeries:
    """
    Ordered, immutable sequence of candles, unique and ascending by time.

    Only the time ordering is checked; OHLC ordering (high >= open/close >= low)
    is left to the data source.
    """
    candles: tuple = ()

    def __post_init__(self) -> None:
        candles = tuple(self.candles)
        object.__setattr__(self, "candles", candles)
        for prev, curr in zip(candles, candles[1:]):
            if curr.time <= prev.time:
                raise ValueError(
                    f"Candle times must be strictly increasing, got {curr.time} after {prev.time}"
                )

    @classmethod
    def from_records(cls, records: Iterable[Union[Candle, Mapping[str, Any]]]) -> "CandleSeries":
        """
        Build a series from Candle objects or mappings.

        Mappings need `time` and `close`; open/high/low default to close and
        volume defaults to 0.
        """
        candles = []
        for rec in records:
            if isinstance(rec, Candle):
                candles.append(rec)
                continue
            close = float(rec["close"])
            candles.append(Candle(
                time=int(rec["time"]),
                open=float(rec.get("open", close)),
                high=float(rec.get("high", close)),
                low=float(rec.get("low", close)),
                close=close,
                volume=float(rec.get("volume", 0.0)),
            ))
        return cls(tuple(candles))

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CandleSeries":
        """
        Build a series from a DataFrame.

        Times come from a `time` column (unix seconds) if present, otherwise
        from the index (DatetimeIndex or integer seconds). Column names are
        matched case-insensitively, so `Close` and `close` both work.
        """
        columns = {str(c).lower(): c for c in df.columns}
        if "close" not in columns:
            raise ValueError(f"DataFrame has no close column (columns: {list(df.columns)})")

        if "time" in columns:
            times = [int(t) for t in df[columns["time"]]]
        else:
            times = _index_to_unix_seconds(df.index)

        close = df[columns["close"]].astype(float)

        def _column(name: str, fallback: pd.Series) -> pd.Series:
            return df[columns[name]].astype(float) if name in columns else fallback

        opens = _column("open", close)
        highs = _column("high", close)
        lows = _column("low", close)
        volumes = _column("volume", pd.Series(0.0, index=df.index))

        candles = tuple(
            Candle(int(t), float(o), float(h), float(lo), float(c), float(v))
            for t, o, h, lo, c, v in zip(times, opens, highs, lows, close, volumes)
        )
        return cls(candles)

    def __len__(self) -> int:
        return len(self.candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self.candles)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return CandleSeries(self.candles[item])
        return self.candles[item]

    @property
    def times(self) -> List[int]:
        return [c.time for c in self.candles]

    @cached_property
    def frame(self) -> pd.DataFrame:
        """OHLCV DataFrame indexed by time (unix seconds). Treat as read-only."""
        return pd.DataFrame(
            [(c.open, c.high, c.low, c.close, c.volume) for c in self.candles],
            columns=list(OHLCV_COLUMNS),
            index=pd.Index([c.time for c in self.candles], dtype="int64", name="time"),
            dtype=float,
        )

    @property
    def closes(self) -> pd.Series:
        """Close prices indexed by time."""
        return self.frame["close"]

    @cached_property
    def _positions(self) -> Dict[int, int]:
        # time -> position lookup, built once per series
        return {c.time: i for i, c in enumerate(self.candles)}

    def index_of(self, time: int) -> Optional[int]:
        """Position of the candle with this exact time, or None."""
        return self._positions.get(int(time))


# --- Indicator points ---

@dataclass(frozen=True)
class IndicatorPoint:
    time: int
    value: float


@dataclass(frozen=True)
class MACDPoint:
    time: int
    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class BollingerPoint:
    time: int
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class KDJPoint:
    time: int
    k: float
    d: float
    j: float


# --- Signals ---

class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Signal:
    """
    A buy or sell event emitted by a strategy.

    `price` is the close of the candle at `time`; `source_index` is that
    candle's position in the series the strategy ran on.
    """
    time: int
    signal_type: SignalType
    price: float
    reason: str = ""
    source_index: Optional[int] = None

    @property
    def is_buy(self) -> bool:
        return self.signal_type is SignalType.BUY

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["signal_type"] = self.signal_type.value
        return data
