"""
Strategy configuration for trading signals.

Contains the closed set of strategy kinds, one typed parameter dataclass per
kind, and the BacktestConfig that ties a strategy to a data file.
Config validation runs at construction time (fail fast with clear errors).
"""
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, Union

from ..indicators.technical import check_number, check_period
from ..shared.errors import UnknownStrategyError
from ..shared.defaults import (
    MA_SHORT_PERIOD, MA_LONG_PERIOD,
    EMA_SHORT_PERIOD, EMA_LONG_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    BOLL_PERIOD, BOLL_STD_DEV,
    KDJ_PERIOD, KDJ_J_OVERSOLD, KDJ_J_OVERBOUGHT,
)


class StrategyKind(Enum):
    """Strategies available for backtesting."""
    MACD_CROSS = "macd_cross"
    MA_CROSS = "ma_cross"
    RSI_OVERSOLD = "rsi_oversold"
    BOLL_BREAKOUT = "boll_breakout"
    KDJ_CROSS = "kdj_cross"
    EMA_TREND = "ema_trend"

    @classmethod
    def parse(cls, strategy_id: Union["StrategyKind", str]) -> "StrategyKind":
        """Accept a StrategyKind or its id string in any case."""
        if isinstance(strategy_id, cls):
            return strategy_id
        if isinstance(strategy_id, str):
            try:
                return cls(strategy_id.strip().lower())
            except ValueError:
                pass
        raise UnknownStrategyError(strategy_id)


def _validate_thresholds(
    *,
    oversold: Optional[float] = None,
    overbought: Optional[float] = None,
    std_dev: Optional[float] = None,
) -> None:
    """Validate threshold parameters. Raises ValueError with clear message on failure."""
    if oversold is not None and overbought is not None and oversold >= overbought:
        raise ValueError(
            f"RSI oversold ({oversold}) must be less than overbought ({overbought})"
        )
    if std_dev is not None and std_dev < 0:
        raise ValueError(f"std_dev must be >= 0, got {std_dev}")


@dataclass
class StrategyParams:
    """Base for per-strategy parameter sets."""

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None) -> "StrategyParams":
        """
        Build from a loose {name: number} mapping.

        Missing names fall back to defaults; unknown names raise ValueError.
        """
        params = dict(params or {})
        names = [f.name for f in fields(cls)]
        unknown = sorted(set(params) - set(names))
        if unknown:
            raise ValueError(
                f"Unknown parameter(s) for {cls.__name__}: {', '.join(unknown)} "
                f"(expected: {', '.join(names)})"
            )
        return cls(**params)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MacdCrossParams(StrategyParams):
    fast: int = MACD_FAST
    slow: int = MACD_SLOW
    signal: int = MACD_SIGNAL

    def __post_init__(self) -> None:
        self.fast = check_period("fast", self.fast)
        self.slow = check_period("slow", self.slow)
        self.signal = check_period("signal", self.signal)


@dataclass
class MaCrossParams(StrategyParams):
    short_period: int = MA_SHORT_PERIOD
    long_period: int = MA_LONG_PERIOD

    def __post_init__(self) -> None:
        self.short_period = check_period("short_period", self.short_period)
        self.long_period = check_period("long_period", self.long_period)


@dataclass
class RsiParams(StrategyParams):
    period: int = RSI_PERIOD
    oversold: float = RSI_OVERSOLD
    overbought: float = RSI_OVERBOUGHT

    def __post_init__(self) -> None:
        self.period = check_period("period", self.period)
        self.oversold = check_number("oversold", self.oversold)
        self.overbought = check_number("overbought", self.overbought)
        _validate_thresholds(oversold=self.oversold, overbought=self.overbought)


@dataclass
class BollingerParams(StrategyParams):
    period: int = BOLL_PERIOD
    std_dev: float = BOLL_STD_DEV

    def __post_init__(self) -> None:
        self.period = check_period("period", self.period)
        self.std_dev = check_number("std_dev", self.std_dev)
        _validate_thresholds(std_dev=self.std_dev)


@dataclass
class KdjParams(StrategyParams):
    period: int = KDJ_PERIOD
    j_oversold: float = KDJ_J_OVERSOLD
    j_overbought: float = KDJ_J_OVERBOUGHT

    def __post_init__(self) -> None:
        self.period = check_period("period", self.period)
        self.j_oversold = check_number("j_oversold", self.j_oversold)
        self.j_overbought = check_number("j_overbought", self.j_overbought)


@dataclass
class EmaTrendParams(StrategyParams):
    short_ema: int = EMA_SHORT_PERIOD
    long_ema: int = EMA_LONG_PERIOD

    def __post_init__(self) -> None:
        self.short_ema = check_period("short_ema", self.short_ema)
        self.long_ema = check_period("long_ema", self.long_ema)


PARAMS_BY_KIND: Dict[StrategyKind, Type[StrategyParams]] = {
    StrategyKind.MACD_CROSS: MacdCrossParams,
    StrategyKind.MA_CROSS: MaCrossParams,
    StrategyKind.RSI_OVERSOLD: RsiParams,
    StrategyKind.BOLL_BREAKOUT: BollingerParams,
    StrategyKind.KDJ_CROSS: KdjParams,
    StrategyKind.EMA_TREND: EmaTrendParams,
}


def build_params(
    strategy_id: Union[StrategyKind, str],
    params: Optional[Union[Mapping[str, Any], StrategyParams]] = None,
) -> StrategyParams:
    """Resolve the parameter dataclass for a strategy from a mapping (or pass one through)."""
    kind = StrategyKind.parse(strategy_id)
    params_cls = PARAMS_BY_KIND[kind]
    if isinstance(params, StrategyParams):
        if not isinstance(params, params_cls):
            raise ValueError(
                f"{type(params).__name__} does not belong to strategy {kind.value}"
            )
        return params
    return params_cls.from_mapping(params)


@dataclass
class BacktestConfig:
    """Complete backtest configuration: which strategy, which knobs, which data."""
    strategy: StrategyKind
    params: Dict[str, float] = field(default_factory=dict)
    name: str = ""
    description: str = ""
    data_path: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def __post_init__(self) -> None:
        self.strategy = StrategyKind.parse(self.strategy)
        self.params = dict(self.params or {})
        if not self.name:
            self.name = self.strategy.value
        # Validate now; raises ValueError
        build_params(self.strategy, self.params)

    @property
    def strategy_params(self) -> StrategyParams:
        return build_params(self.strategy, self.params)
