"""
Individual indicator implementations following the Indicator interface.

These classes provide a uniform interface for all technical indicators,
and back compute_indicator(), the single entry point that maps an
indicator kind plus a loose parameter mapping to a list of points.
"""
from typing import Any, Dict, List, Mapping, Optional, Type, Union

import pandas as pd

from .base import Indicator, IndicatorKind
from .technical import (
    check_number,
    check_period,
    calculate_ma,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_bollinger,
    calculate_kdj,
)
from ..shared.types import (
    CandleSeries,
    IndicatorPoint,
    MACDPoint,
    BollingerPoint,
    KDJPoint,
)
from ..shared.defaults import (
    MA_PERIOD, EMA_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD,
    BOLL_PERIOD, BOLL_STD_DEV,
    KDJ_PERIOD,
)


def _value_points(values: pd.Series) -> List[IndicatorPoint]:
    return [IndicatorPoint(int(t), float(v)) for t, v in values.items()]


class MAIndicator(Indicator):
    """Simple Moving Average indicator."""

    kind = IndicatorKind.MA
    param_names = ("period",)

    def __init__(self, period: int = MA_PERIOD):
        self.period = check_period("period", period)

    def calculate(self, series: CandleSeries) -> pd.Series:
        return calculate_ma(series, self.period)

    def to_points(self, values: pd.Series) -> List[IndicatorPoint]:
        return _value_points(values)


class EMAIndicator(Indicator):
    """Exponential Moving Average indicator."""

    kind = IndicatorKind.EMA
    param_names = ("period",)

    def __init__(self, period: int = EMA_PERIOD):
        self.period = check_period("period", period)

    def calculate(self, series: CandleSeries) -> pd.Series:
        return calculate_ema(series, self.period)

    def to_points(self, values: pd.Series) -> List[IndicatorPoint]:
        return _value_points(values)


class MACDIndicator(Indicator):
    """MACD (Moving Average Convergence Divergence) indicator."""

    kind = IndicatorKind.MACD
    param_names = ("fast", "slow", "signal")

    def __init__(
        self,
        fast: int = MACD_FAST,
        slow: int = MACD_SLOW,
        signal: int = MACD_SIGNAL,
    ):
        self.fast = check_period("fast", fast)
        self.slow = check_period("slow", slow)
        self.signal = check_period("signal", signal)

    def calculate(self, series: CandleSeries) -> pd.DataFrame:
        """Calculate all MACD components: macd, signal, histogram."""
        return calculate_macd(series, self.fast, self.slow, self.signal)

    def to_points(self, values: pd.DataFrame) -> List[MACDPoint]:
        return [
            MACDPoint(int(t), float(row.macd), float(row.signal), float(row.histogram))
            for t, row in zip(values.index, values.itertuples(index=False))
        ]


class RSIIndicator(Indicator):
    """Relative Strength Index indicator."""

    kind = IndicatorKind.RSI
    param_names = ("period",)

    def __init__(self, period: int = RSI_PERIOD):
        self.period = check_period("period", period)

    def calculate(self, series: CandleSeries) -> pd.Series:
        return calculate_rsi(series, self.period)

    def to_points(self, values: pd.Series) -> List[IndicatorPoint]:
        return _value_points(values)


class BollingerIndicator(Indicator):
    """Bollinger Bands indicator."""

    kind = IndicatorKind.BOLL
    param_names = ("period", "std_dev")

    def __init__(self, period: int = BOLL_PERIOD, std_dev: float = BOLL_STD_DEV):
        self.period = check_period("period", period)
        self.std_dev = check_number("std_dev", std_dev)
        if self.std_dev < 0:
            raise ValueError(f"std_dev must be >= 0, got {std_dev}")

    def calculate(self, series: CandleSeries) -> pd.DataFrame:
        return calculate_bollinger(series, self.period, self.std_dev)

    def to_points(self, values: pd.DataFrame) -> List[BollingerPoint]:
        return [
            BollingerPoint(int(t), float(row.upper), float(row.middle), float(row.lower))
            for t, row in zip(values.index, values.itertuples(index=False))
        ]


class KDJIndicator(Indicator):
    """KDJ stochastic oscillator."""

    kind = IndicatorKind.KDJ
    param_names = ("period",)

    def __init__(self, period: int = KDJ_PERIOD):
        self.period = check_period("period", period)

    def calculate(self, series: CandleSeries) -> pd.DataFrame:
        return calculate_kdj(series, self.period)

    def to_points(self, values: pd.DataFrame) -> List[KDJPoint]:
        return [
            KDJPoint(int(t), float(row.k), float(row.d), float(row.j))
            for t, row in zip(values.index, values.itertuples(index=False))
        ]


INDICATORS: Dict[IndicatorKind, Type[Indicator]] = {
    IndicatorKind.MA: MAIndicator,
    IndicatorKind.EMA: EMAIndicator,
    IndicatorKind.MACD: MACDIndicator,
    IndicatorKind.RSI: RSIIndicator,
    IndicatorKind.BOLL: BollingerIndicator,
    IndicatorKind.KDJ: KDJIndicator,
}


def compute_indicator(
    kind: Union[IndicatorKind, str],
    series: CandleSeries,
    params: Optional[Mapping[str, Any]] = None,
) -> List[Any]:
    """
    Compute one indicator over a series.

    Args:
        kind: IndicatorKind or its name (MA, EMA, MACD, RSI, BOLL, KDJ)
        series: Candle series
        params: Optional parameter overrides, e.g. {"period": 10} or
            {"fast": 12, "slow": 26, "signal": 9}

    Returns:
        List of points in time order; empty if the series is shorter than
        the warm-up window

    Raises:
        UnknownIndicatorError: kind is not supported
        ValueError: unknown parameter key or invalid period
    """
    indicator_cls = INDICATORS[IndicatorKind.parse(kind)]
    return indicator_cls.from_params(params).points(series)


__all__ = [
    'MAIndicator',
    'EMAIndicator',
    'MACDIndicator',
    'RSIIndicator',
    'BollingerIndicator',
    'KDJIndicator',
    'INDICATORS',
    'compute_indicator',
]
