"""
Stock technical analysis and strategy backtesting.

Provides unified interfaces for:
- Data loading (daily OHLCV CSV files)
- Indicator calculations (MA, EMA, MACD, RSI, Bollinger Bands, KDJ)
- Signal generation (six named strategies)
- Backtest evaluation (trades, win rate, drawdown, Sharpe ratio)
"""
from .shared.types import Candle, CandleSeries, Signal, SignalType
from .indicators import IndicatorKind, compute_indicator
from .signals import StrategyKind, STRATEGIES, run_strategy
from .evaluation import BacktestResult, Trade, run_backtest

__all__ = [
    'Candle',
    'CandleSeries',
    'Signal',
    'SignalType',
    'IndicatorKind',
    'compute_indicator',
    'StrategyKind',
    'STRATEGIES',
    'run_strategy',
    'BacktestResult',
    'Trade',
    'run_backtest',
]
