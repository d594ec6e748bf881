"""
Backtest engine.

Pairs a strategy's BUY/SELL signals into closed trades (one position at a
time, all-in) and reduces them to performance statistics:

- Each BUY opens a position only while flat; extra BUYs are ignored
- Each SELL closes the open position; SELLs while flat are ignored
- A trailing unmatched BUY is reported but never counted
- Equity starts at 100 and compounds trade by trade
"""
import logging
import math
from typing import Iterable, List, Optional, Tuple

from .backtest_types import Trade, BacktestResult
from .metrics import (
    summarize_trades,
    build_equity_curve,
    calculate_max_drawdown,
    calculate_sharpe_ratio,
)
from ..shared.defaults import MIN_BACKTEST_CANDLES, SECONDS_PER_DAY
from ..shared.types import CandleSeries, Signal


logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def make_trade(buy: Signal, sell: Signal) -> Trade:
    """Close `buy` against `sell`: return %, whole hold days, profitability."""
    return_pct = (sell.price - buy.price) / buy.price * 100
    hold_days = _round_half_up((sell.time - buy.time) / SECONDS_PER_DAY)
    return Trade(
        buy_time=buy.time,
        buy_price=buy.price,
        sell_time=sell.time,
        sell_price=sell.price,
        return_pct=return_pct,
        hold_days=hold_days,
        profitable=return_pct > 0,
    )


def pair_signals(signals: Iterable[Signal]) -> Tuple[List[Trade], Optional[Signal]]:
    """
    Pair signals into trades in time order.

    Returns:
        (trades, open_buy) where open_buy is the BUY still waiting for a
        SELL at the end of the stream, or None
    """
    # Stable: same-time signals keep their emission order
    ordered = sorted(signals, key=lambda s: s.time)

    trades: List[Trade] = []
    open_buy: Optional[Signal] = None
    for signal in ordered:
        if signal.is_buy:
            if open_buy is None:
                open_buy = signal
            else:
                logger.debug(f"Ignoring BUY at {signal.time}: position already open since {open_buy.time}")
        elif open_buy is not None:
            trades.append(make_trade(open_buy, signal))
            open_buy = None
        else:
            logger.debug(f"Ignoring SELL at {signal.time}: no open position")
    return trades, open_buy


def run_backtest(series: CandleSeries, signals: Iterable[Signal]) -> BacktestResult:
    """
    Simulate trading `signals` and compute performance statistics.

    Args:
        series: Candles the signals were generated from; its first candle
            dates the starting equity point
        signals: BUY/SELL signals, any order

    Returns:
        BacktestResult. With no closed trades every statistic is zero and
        the equity curve is empty.
    """
    signals = tuple(signals)
    trades, open_buy = pair_signals(signals)
    if open_buy is not None:
        logger.debug(f"Position opened at {open_buy.time} is still open; not counted")

    if not trades:
        logger.debug(f"No closed trades from {len(signals)} signal(s)")
        return BacktestResult(
            signals=signals,
            trades=(),
            win_rate_pct=0.0,
            total_return_pct=0.0,
            max_drawdown_pct=0.0,
            avg_hold_days=0.0,
            sharpe_ratio=0.0,
            equity_curve=(),
            total_trades=0,
            profitable_trades=0,
            losing_trades=0,
            avg_win_pct=0.0,
            avg_loss_pct=0.0,
            open_buy=open_buy,
        )

    start_time = series[0].time if len(series) else trades[0].buy_time
    curve = build_equity_curve(trades, start_time)
    summary = summarize_trades(trades)
    total_return = curve[-1].value - curve[0].value

    logger.debug(
        f"{summary['total_trades']} trade(s), win rate {summary['win_rate_pct']:.1f}%, "
        f"total return {total_return:.2f}%"
    )

    return BacktestResult(
        signals=signals,
        trades=tuple(trades),
        win_rate_pct=summary["win_rate_pct"],
        total_return_pct=total_return,
        max_drawdown_pct=calculate_max_drawdown(curve),
        avg_hold_days=summary["avg_hold_days"],
        sharpe_ratio=calculate_sharpe_ratio(trades),
        equity_curve=tuple(curve),
        total_trades=summary["total_trades"],
        profitable_trades=summary["profitable_trades"],
        losing_trades=summary["losing_trades"],
        avg_win_pct=summary["avg_win_pct"],
        avg_loss_pct=summary["avg_loss_pct"],
        open_buy=open_buy,
    )


def has_enough_history(series: CandleSeries, minimum: int = MIN_BACKTEST_CANDLES) -> bool:
    """True when the series is long enough for a meaningful backtest."""
    return len(series) >= minimum
