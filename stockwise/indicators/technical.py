"""
Technical indicators computed from a CandleSeries.

Provides MA, EMA, MACD, RSI, Bollinger Bands and KDJ as pure functions.
Every result is a pandas Series/DataFrame indexed by candle time with the
warm-up rows dropped, so results of different warm-up lengths line up by
time (index intersection), never by position. A series shorter than the
warm-up window gives an empty result.
"""
import pandas as pd

from ..shared.types import CandleSeries
from ..shared.defaults import (
    MA_PERIOD, EMA_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD,
    BOLL_PERIOD, BOLL_STD_DEV,
    KDJ_PERIOD, KDJ_SEED, KDJ_SMOOTHING,
)


def check_number(name: str, value) -> float:
    """Convert a numeric parameter to float. Raises ValueError on misuse."""
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def check_period(name: str, value: float) -> int:
    """Validate a window length and return it as int. Raises ValueError on misuse."""
    number = check_number(name, value)
    if isinstance(value, bool) or not number.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    period = int(number)
    if period < 1:
        raise ValueError(f"{name} must be >= 1, got {period}")
    return period


def _empty(values: pd.Series) -> pd.Series:
    return values.iloc[0:0].astype(float)


def _empty_frame(values: pd.Series, columns) -> pd.DataFrame:
    return pd.DataFrame(columns=list(columns), index=values.index[:0], dtype=float)


# --- Building blocks on plain value series ---

def sma(values: pd.Series, period: int) -> pd.Series:
    """Trailing simple moving average; first value at position period-1."""
    period = check_period("period", period)
    if len(values) < period:
        return _empty(values)
    return values.astype(float).rolling(period).mean().iloc[period - 1:]


def _seeded_ewm(values: pd.Series, period: int, seed: float, alpha: float) -> pd.Series:
    """Recursive average over values[period-1:], with the first value replaced by seed."""
    seeded = values.iloc[period - 1:].astype(float)
    seeded.iloc[0] = seed
    return seeded.ewm(alpha=alpha, adjust=False).mean()


def ema(values: pd.Series, period: int) -> pd.Series:
    """
    Exponential moving average seeded with the simple average of the first
    `period` values, then ema = value * k + ema_prev * (1 - k), k = 2/(period+1).
    """
    period = check_period("period", period)
    if len(values) < period:
        return _empty(values)
    seed = sma(values, period).iloc[0]
    return _seeded_ewm(values, period, seed, 2.0 / (period + 1))


def wilder_average(values: pd.Series, period: int) -> pd.Series:
    """Wilder smoothing: seed = mean of first `period` values, avg = (avg*(n-1) + x) / n."""
    seed = values.iloc[:period].mean()
    return _seeded_ewm(values, period, seed, 1.0 / period)


def _smooth_from(values: pd.Series, seed: float, alpha: float) -> pd.Series:
    """Recursive smoothing whose previous value before the first point is `seed`."""
    padded = pd.concat([pd.Series([seed]), values.astype(float)], ignore_index=True)
    smoothed = padded.ewm(alpha=alpha, adjust=False).mean().iloc[1:]
    return pd.Series(smoothed.to_numpy(), index=values.index)


# --- Indicators on a CandleSeries ---

def calculate_ma(series: CandleSeries, period: int = MA_PERIOD) -> pd.Series:
    """Simple moving average of close."""
    return sma(series.closes, period)


def calculate_ema(series: CandleSeries, period: int = EMA_PERIOD) -> pd.Series:
    """Exponential moving average of close."""
    return ema(series.closes, period)


def calculate_macd(
    series: CandleSeries,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> pd.DataFrame:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    The fast and slow EMAs warm up over different numbers of bars, so they are
    intersected on time before subtracting.

    Returns:
        DataFrame with columns macd, signal, histogram
    """
    fast = check_period("fast", fast)
    slow = check_period("slow", slow)
    signal = check_period("signal", signal)

    closes = series.closes
    lines = pd.concat(
        {"fast": ema(closes, fast), "slow": ema(closes, slow)}, axis=1, join="inner"
    )
    macd_line = lines["fast"] - lines["slow"]
    signal_line = ema(macd_line, signal)

    out = pd.concat({"macd": macd_line, "signal": signal_line}, axis=1, join="inner")
    out["histogram"] = out["macd"] - out["signal"]
    return out


def calculate_rsi(series: CandleSeries, period: int = RSI_PERIOD) -> pd.Series:
    """
    Calculate Relative Strength Index (RSI) with Wilder smoothing.

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    When the average loss is 0 the RSI is 100. The first value sits on the
    candle after the first `period` price changes.
    """
    period = check_period("period", period)
    closes = series.closes
    if len(closes) <= period:
        return _empty(closes)

    delta = closes.diff().iloc[1:]
    gain = delta.clip(lower=0.0)
    loss = (-delta).clip(lower=0.0)

    avg_gain = wilder_average(gain, period)
    avg_loss = wilder_average(loss, period)

    rsi = 100 - (100 / (1 + avg_gain / avg_loss))
    return rsi.where(avg_loss != 0, 100.0)


def calculate_bollinger(
    series: CandleSeries,
    period: int = BOLL_PERIOD,
    std_dev: float = BOLL_STD_DEV,
) -> pd.DataFrame:
    """
    Calculate Bollinger Bands.

    middle = MA(period); upper/lower = middle +/- std_dev * population stddev
    of the trailing `period` closes.

    Returns:
        DataFrame with columns upper, middle, lower
    """
    period = check_period("period", period)
    std_dev = check_number("std_dev", std_dev)
    if std_dev < 0:
        raise ValueError(f"std_dev must be >= 0, got {std_dev}")
    closes = series.closes
    if len(closes) < period:
        return _empty_frame(closes, ("upper", "middle", "lower"))

    middle = sma(closes, period)
    width = closes.rolling(period).std(ddof=0).iloc[period - 1:] * std_dev
    return pd.DataFrame(
        {"upper": middle + width, "middle": middle, "lower": middle - width}
    )


def calculate_kdj(series: CandleSeries, period: int = KDJ_PERIOD) -> pd.DataFrame:
    """
    Calculate the KDJ stochastic oscillator.

    RSV = (close - lowest low) / (highest high - lowest low) * 100 over the
    trailing `period` bars, 0 when the range is flat. K smooths RSV and D
    smooths K, both by 1/3 starting from 50. J = 3K - 2D is not bounded.

    Returns:
        DataFrame with columns k, d, j
    """
    period = check_period("period", period)
    frame = series.frame
    if len(frame) < period:
        return _empty_frame(frame["close"], ("k", "d", "j"))

    lowest = frame["low"].rolling(period).min()
    highest = frame["high"].rolling(period).max()
    price_range = highest - lowest
    rsv = ((frame["close"] - lowest) / price_range * 100).where(price_range != 0, 0.0)
    rsv = rsv.iloc[period - 1:]

    k = _smooth_from(rsv, KDJ_SEED, KDJ_SMOOTHING)
    d = _smooth_from(k, KDJ_SEED, KDJ_SMOOTHING)
    return pd.DataFrame({"k": k, "d": d, "j": 3 * k - 2 * d})
