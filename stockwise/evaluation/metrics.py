"""
Performance metrics over closed trades: win/loss summary, equity curve,
max drawdown and a per-trade Sharpe ratio.
"""
import math
from typing import Any, Dict, List, Sequence

import numpy as np

from .backtest_types import Trade, EquityPoint
from ..shared.defaults import INITIAL_EQUITY, TRADING_DAYS_PER_YEAR

# Return stddev below this counts as zero
_MIN_STDDEV = 1e-12


def summarize_trades(trades: Sequence[Trade]) -> Dict[str, Any]:
    """
    Count and average closed trades.

    Returns a dict with total_trades, profitable_trades, losing_trades,
    win_rate_pct, avg_win_pct, avg_loss_pct and avg_hold_days. Break-even
    trades count as losing.
    """
    n = len(trades)
    if n == 0:
        return {
            "total_trades": 0,
            "profitable_trades": 0,
            "losing_trades": 0,
            "win_rate_pct": 0.0,
            "avg_win_pct": 0.0,
            "avg_loss_pct": 0.0,
            "avg_hold_days": 0.0,
        }
    winners = [t.return_pct for t in trades if t.profitable]
    losers = [t.return_pct for t in trades if not t.profitable]
    return {
        "total_trades": n,
        "profitable_trades": len(winners),
        "losing_trades": len(losers),
        "win_rate_pct": len(winners) / n * 100,
        "avg_win_pct": (sum(winners) / len(winners)) if winners else 0.0,
        "avg_loss_pct": (sum(losers) / len(losers)) if losers else 0.0,
        "avg_hold_days": sum(t.hold_days for t in trades) / n,
    }


def build_equity_curve(
    trades: Sequence[Trade],
    start_time: int,
    initial_equity: float = INITIAL_EQUITY,
) -> List[EquityPoint]:
    """
    Compound trade returns into an equity curve.

    The curve starts with (start_time, initial_equity) and gains one point
    per trade at its sell time.
    """
    equity = initial_equity
    curve = [EquityPoint(int(start_time), equity)]
    for trade in trades:
        equity *= 1 + trade.return_pct / 100
        curve.append(EquityPoint(trade.sell_time, equity))
    return curve


def calculate_max_drawdown(curve: Sequence[EquityPoint]) -> float:
    """Calculate maximum drawdown percentage from the running peak."""
    if not curve:
        return 0.0

    peak = curve[0].value
    max_drawdown = 0.0

    for point in curve:
        if point.value > peak:
            peak = point.value

        if peak <= 0:
            continue
        drawdown = ((peak - point.value) / peak) * 100
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    return max_drawdown


def calculate_sharpe_ratio(trades: Sequence[Trade]) -> float:
    """
    Sharpe ratio over per-trade returns.

    sharpe = mean / stddev * sqrt(252 / avg_hold_days), with population
    stddev of the return fractions. One average holding period annualizes
    every trade. Returns 0 with no trades, no dispersion, or a zero average
    holding period.
    """
    if not trades:
        return 0.0
    returns = np.array([t.return_pct / 100 for t in trades], dtype=float)
    std = float(returns.std())
    avg_hold_days = sum(t.hold_days for t in trades) / len(trades)
    if std < _MIN_STDDEV or avg_hold_days <= 0:
        return 0.0
    return float(returns.mean()) / std * math.sqrt(TRADING_DAYS_PER_YEAR / avg_hold_days)
