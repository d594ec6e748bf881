"""
Backtest types: trades, equity points, and the aggregate result.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..shared.types import Signal


@dataclass(frozen=True)
class Trade:
    """One round trip: a BUY paired with the next SELL."""
    buy_time: int
    buy_price: float
    sell_time: int
    sell_price: float
    return_pct: float
    hold_days: int
    profitable: bool  # return_pct > 0; break-even counts as a loss


@dataclass(frozen=True)
class EquityPoint:
    time: int
    value: float


@dataclass(frozen=True)
class BacktestResult:
    """Results from one backtest run."""
    signals: Tuple[Signal, ...]
    trades: Tuple[Trade, ...]
    win_rate_pct: float
    total_return_pct: float
    max_drawdown_pct: float
    avg_hold_days: float
    sharpe_ratio: float
    equity_curve: Tuple[EquityPoint, ...]
    total_trades: int
    profitable_trades: int
    losing_trades: int
    avg_win_pct: float
    avg_loss_pct: float

    # Trailing BUY never closed by a SELL; excluded from every statistic
    open_buy: Optional[Signal] = None

    def trades_frame(self) -> pd.DataFrame:
        """Trades as a DataFrame, one row per trade."""
        columns = [f.name for f in fields(Trade)]
        return pd.DataFrame([asdict(t) for t in self.trades], columns=columns)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        data = asdict(self)
        data["signals"] = [s.to_dict() for s in self.signals]
        data["open_buy"] = self.open_buy.to_dict() if self.open_buy else None
        return data
