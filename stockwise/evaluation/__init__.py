"""
Backtest evaluation module.

Pairs strategy signals into trades and computes win rate, compounded
return, max drawdown, holding period and Sharpe ratio.
"""
from .backtest import run_backtest, pair_signals, make_trade, has_enough_history
from .backtest_types import Trade, EquityPoint, BacktestResult
from .metrics import (
    summarize_trades,
    build_equity_curve,
    calculate_max_drawdown,
    calculate_sharpe_ratio,
)

__all__ = [
    'run_backtest',
    'pair_signals',
    'make_trade',
    'has_enough_history',
    'Trade',
    'EquityPoint',
    'BacktestResult',
    'summarize_trades',
    'build_equity_curve',
    'calculate_max_drawdown',
    'calculate_sharpe_ratio',
]
