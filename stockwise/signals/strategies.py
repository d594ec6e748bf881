"""
Strategy catalog: six named strategies, each a pure (series, params) -> signals function.

MACD cross, MA cross, KDJ cross and EMA trend emit every qualifying crossover
without tracking a position. RSI and Bollinger track their own position and
therefore strictly alternate BUY/SELL. The backtest pairs both kinds of
stream the same way.
"""
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .config import (
    StrategyKind,
    StrategyParams,
    MacdCrossParams,
    MaCrossParams,
    RsiParams,
    BollingerParams,
    KdjParams,
    EmaTrendParams,
    PARAMS_BY_KIND,
    build_params,
)
from .rules import crossovers, crossover_signals, make_signal
from ..indicators.technical import (
    calculate_ma,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_bollinger,
    calculate_kdj,
)
from ..shared.defaults import KDJ_J_FILTER_OFFSET
from ..shared.types import CandleSeries, Signal, SignalType


logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    return f"{value:g}"


# --- Stateless crossover strategies ---

def macd_cross(series: CandleSeries, params: MacdCrossParams) -> List[Signal]:
    """Buy when the MACD line crosses above the signal line, sell when it crosses below."""
    macd = calculate_macd(series, params.fast, params.slow, params.signal)
    crosses = crossovers(macd["macd"], macd["signal"])
    return crossover_signals(series, crosses, "MACD golden cross", "MACD death cross")


def ma_cross(series: CandleSeries, params: MaCrossParams) -> List[Signal]:
    """Buy when the short MA crosses above the long MA, sell on the reverse."""
    short_ma = calculate_ma(series, params.short_period)
    long_ma = calculate_ma(series, params.long_period)
    crosses = crossovers(short_ma, long_ma)
    short_p, long_p = params.short_period, params.long_period
    return crossover_signals(
        series, crosses,
        f"MA{short_p} crossed above MA{long_p}",
        f"MA{short_p} crossed below MA{long_p}",
    )


def kdj_cross(series: CandleSeries, params: KdjParams) -> List[Signal]:
    """
    Buy when K crosses above D with J below j_oversold + 30; sell when K
    crosses below D with J above j_overbought - 30.
    """
    kdj = calculate_kdj(series, params.period)
    crosses = crossovers(kdj["k"], kdj["d"])
    crosses["j"] = kdj["j"]
    crosses["bullish"] &= crosses["j"] < params.j_oversold + KDJ_J_FILTER_OFFSET
    crosses["bearish"] &= crosses["j"] > params.j_overbought - KDJ_J_FILTER_OFFSET
    return crossover_signals(
        series, crosses,
        lambda row: f"KDJ golden cross (J={row['j']:.1f})",
        lambda row: f"KDJ death cross (J={row['j']:.1f})",
    )


def ema_trend(series: CandleSeries, params: EmaTrendParams) -> List[Signal]:
    """
    Buy when the short EMA crosses above the long EMA while the short EMA is
    rising (above its value two bars earlier); sell when it crosses below.
    """
    short_ema = calculate_ema(series, params.short_ema)
    long_ema = calculate_ema(series, params.long_ema)
    rising = short_ema > short_ema.shift(2)
    crosses = crossovers(short_ema, long_ema)
    crosses["bullish"] &= rising.reindex(crosses.index, fill_value=False)
    short_p, long_p = params.short_ema, params.long_ema
    return crossover_signals(
        series, crosses,
        f"EMA{short_p} crossed above EMA{long_p} (uptrend)",
        f"EMA{short_p} crossed below EMA{long_p} (trend weakening)",
    )


# --- Position-tracking strategies ---

def rsi_oversold(series: CandleSeries, params: RsiParams) -> List[Signal]:
    """
    Buy the moment RSI drops below `oversold` while flat; sell the moment it
    rises above `overbought` while holding.
    """
    rsi = calculate_rsi(series, params.period)
    signals: List[Signal] = []
    in_position = False
    prev: Optional[float] = None
    for time, curr in rsi.items():
        if prev is not None:
            signal = None
            if not in_position and prev >= params.oversold and curr < params.oversold:
                signal = make_signal(
                    series, time, SignalType.BUY,
                    f"RSI fell below {_fmt(params.oversold)} (oversold)",
                )
            elif in_position and prev <= params.overbought and curr > params.overbought:
                signal = make_signal(
                    series, time, SignalType.SELL,
                    f"RSI rose above {_fmt(params.overbought)} (overbought)",
                )
            if signal is not None:
                signals.append(signal)
                in_position = signal.is_buy
        prev = curr
    return signals


def boll_breakout(series: CandleSeries, params: BollingerParams) -> List[Signal]:
    """
    Buy when the close breaks below the lower band while flat; sell when it
    breaks above the upper band while holding. The first band point is only
    a reference and never triggers.
    """
    bands = calculate_bollinger(series, params.period, params.std_dev)
    closes = series.closes
    signals: List[Signal] = []
    in_position = False
    for time, band in bands.iloc[1:].iterrows():
        price = closes.loc[time]
        signal = None
        if not in_position and price < band["lower"]:
            signal = make_signal(series, time, SignalType.BUY, "Close broke below lower Bollinger band")
        elif in_position and price > band["upper"]:
            signal = make_signal(series, time, SignalType.SELL, "Close broke above upper Bollinger band")
        if signal is not None:
            signals.append(signal)
            in_position = signal.is_buy
    return signals


# --- Catalog ---

@dataclass(frozen=True)
class ParamSpec:
    """Display metadata for one strategy parameter (suggested range, not enforced)."""
    key: str
    label: str
    min: float
    max: float
    step: float


@dataclass(frozen=True)
class StrategyInfo:
    kind: StrategyKind
    name: str
    description: str
    theory: str
    param_specs: Tuple[ParamSpec, ...]
    run: Callable[[CandleSeries, Any], List[Signal]]
    tracks_position: bool = False

    @property
    def params_cls(self):
        return PARAMS_BY_KIND[self.kind]

    def defaults(self) -> Dict[str, Any]:
        """Default value of every parameter, keyed by name."""
        return {f.name: f.default for f in fields(self.params_cls)}


STRATEGIES: Dict[StrategyKind, StrategyInfo] = {
    StrategyKind.MACD_CROSS: StrategyInfo(
        kind=StrategyKind.MACD_CROSS,
        name="MACD Golden/Death Cross",
        description=(
            "Buy when the MACD line crosses above the signal line (golden cross), "
            "sell when it crosses below (death cross)."
        ),
        theory="Dow theory - trend following",
        param_specs=(
            ParamSpec("fast", "Fast period", 5, 20, 1),
            ParamSpec("slow", "Slow period", 15, 40, 1),
            ParamSpec("signal", "Signal period", 5, 15, 1),
        ),
        run=macd_cross,
    ),
    StrategyKind.MA_CROSS: StrategyInfo(
        kind=StrategyKind.MA_CROSS,
        name="Moving Average Cross",
        description=(
            "Buy when the short moving average crosses above the long one, "
            "sell when it crosses below."
        ),
        theory="Graham - mean reversion",
        param_specs=(
            ParamSpec("short_period", "Short MA", 5, 20, 1),
            ParamSpec("long_period", "Long MA", 20, 60, 5),
        ),
        run=ma_cross,
    ),
    StrategyKind.RSI_OVERSOLD: StrategyInfo(
        kind=StrategyKind.RSI_OVERSOLD,
        name="RSI Overbought/Oversold",
        description=(
            "Buy when RSI drops below the oversold line, sell when it rises "
            "above the overbought line."
        ),
        theory="Keynes - market sentiment",
        param_specs=(
            ParamSpec("period", "RSI period", 7, 21, 1),
            ParamSpec("oversold", "Oversold line", 20, 35, 1),
            ParamSpec("overbought", "Overbought line", 65, 80, 1),
        ),
        run=rsi_oversold,
        tracks_position=True,
    ),
    StrategyKind.BOLL_BREAKOUT: StrategyInfo(
        kind=StrategyKind.BOLL_BREAKOUT,
        name="Bollinger Band Breakout",
        description=(
            "Buy when price breaks below the lower band, sell when it breaks "
            "above the upper band."
        ),
        theory="Soros - reflexivity",
        param_specs=(
            ParamSpec("period", "MA period", 10, 30, 1),
            ParamSpec("std_dev", "Std dev multiplier", 1, 3, 0.5),
        ),
        run=boll_breakout,
        tracks_position=True,
    ),
    StrategyKind.KDJ_CROSS: StrategyInfo(
        kind=StrategyKind.KDJ_CROSS,
        name="KDJ Golden/Death Cross",
        description=(
            "Buy when K crosses above D, sell when it crosses below, filtered "
            "by J overbought/oversold levels."
        ),
        theory="Williams - stochastic oscillator",
        param_specs=(
            ParamSpec("period", "KDJ period", 5, 14, 1),
            ParamSpec("j_oversold", "J oversold line", 10, 30, 5),
            ParamSpec("j_overbought", "J overbought line", 70, 90, 5),
        ),
        run=kdj_cross,
    ),
    StrategyKind.EMA_TREND: StrategyInfo(
        kind=StrategyKind.EMA_TREND,
        name="EMA Trend Following",
        description=(
            "Buy when the short EMA crosses above the long EMA while rising, "
            "sell when it crosses back below."
        ),
        theory="Peter Lynch - growth investing",
        param_specs=(
            ParamSpec("short_ema", "Short EMA", 5, 15, 1),
            ParamSpec("long_ema", "Long EMA", 20, 50, 5),
        ),
        run=ema_trend,
    ),
}


def get_strategy(strategy_id: Union[StrategyKind, str]) -> StrategyInfo:
    """Catalog entry for a strategy id. Raises UnknownStrategyError."""
    return STRATEGIES[StrategyKind.parse(strategy_id)]


def run_strategy(
    strategy_id: Union[StrategyKind, str],
    series: CandleSeries,
    params: Optional[Union[Mapping[str, Any], StrategyParams]] = None,
) -> List[Signal]:
    """
    Run one catalog strategy over a series.

    Args:
        strategy_id: StrategyKind or its id (e.g. "macd_cross")
        series: Candle series
        params: Parameter overrides, e.g. {"fast": 12, "slow": 26, "signal": 9};
            unspecified parameters use the strategy's defaults

    Returns:
        Signals in time order; empty if the series is too short

    Raises:
        UnknownStrategyError: strategy_id is not in the catalog
        ValueError: unknown parameter or invalid value
    """
    info = get_strategy(strategy_id)
    resolved = build_params(info.kind, params)
    signals = info.run(series, resolved)
    logger.debug(
        f"{info.kind.value} {resolved.to_dict()}: {len(signals)} signal(s) over {len(series)} candles"
    )
    return signals
