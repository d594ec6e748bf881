"""
Signal generation module.

A closed catalog of strategies built on the indicator library. Each
strategy turns a CandleSeries plus typed parameters into a time-ordered
list of BUY/SELL signals.
"""
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
    BacktestConfig,
    build_params,
)
from .config_loader import load_config_from_yaml
from .rules import crossovers, crossover_signals, make_signal
from .strategies import (
    ParamSpec,
    StrategyInfo,
    STRATEGIES,
    get_strategy,
    run_strategy,
)

__all__ = [
    'StrategyKind',
    'StrategyParams',
    'MacdCrossParams',
    'MaCrossParams',
    'RsiParams',
    'BollingerParams',
    'KdjParams',
    'EmaTrendParams',
    'PARAMS_BY_KIND',
    'BacktestConfig',
    'build_params',
    'load_config_from_yaml',
    'crossovers',
    'crossover_signals',
    'make_signal',
    'ParamSpec',
    'StrategyInfo',
    'STRATEGIES',
    'get_strategy',
    'run_strategy',
]
