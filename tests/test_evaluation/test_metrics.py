"""
Tests for performance metrics.
"""
import math

import pytest

from stockwise.evaluation.backtest_types import Trade, EquityPoint
from stockwise.evaluation.metrics import (
    summarize_trades,
    build_equity_curve,
    calculate_max_drawdown,
    calculate_sharpe_ratio,
)


def _trade(return_pct, hold_days=5, sell_time=0):
    return Trade(
        buy_time=sell_time - hold_days * 86400,
        buy_price=100.0,
        sell_time=sell_time,
        sell_price=100.0 * (1 + return_pct / 100),
        return_pct=return_pct,
        hold_days=hold_days,
        profitable=return_pct > 0,
    )


class TestSummarizeTrades:

    def test_empty(self):
        summary = summarize_trades([])
        assert summary["total_trades"] == 0
        assert summary["win_rate_pct"] == 0.0

    def test_win_loss_split(self):
        summary = summarize_trades([_trade(10), _trade(-4), _trade(0), _trade(6, hold_days=3)])
        assert summary["total_trades"] == 4
        assert summary["profitable_trades"] == 2
        assert summary["losing_trades"] == 2
        assert summary["win_rate_pct"] == pytest.approx(50.0)
        assert summary["avg_win_pct"] == pytest.approx(8.0)
        assert summary["avg_loss_pct"] == pytest.approx(-2.0)
        assert summary["avg_hold_days"] == pytest.approx(4.5)


class TestEquityCurve:

    def test_compounds(self):
        curve = build_equity_curve([_trade(10, sell_time=10), _trade(-50, sell_time=20)], start_time=0)
        assert [p.time for p in curve] == [0, 10, 20]
        assert [p.value for p in curve] == pytest.approx([100.0, 110.0, 55.0])

    def test_no_trades(self):
        assert build_equity_curve([], start_time=5) == [EquityPoint(5, 100.0)]


class TestMaxDrawdown:

    def test_monotonic_curve(self):
        curve = [EquityPoint(i, v) for i, v in enumerate([100, 105, 110])]
        assert calculate_max_drawdown(curve) == 0.0

    def test_largest_peak_to_trough(self):
        curve = [EquityPoint(i, v) for i, v in enumerate([100, 120, 90, 130, 117])]
        assert calculate_max_drawdown(curve) == pytest.approx(25.0)

    def test_empty(self):
        assert calculate_max_drawdown([]) == 0.0


class TestSharpeRatio:

    def test_known_value(self):
        trades = [_trade(10), _trade(-5)]
        # mean 0.025, population std 0.075, hold 5 days
        expected = 0.025 / 0.075 * math.sqrt(252 / 5)
        assert calculate_sharpe_ratio(trades) == pytest.approx(expected)

    def test_no_trades(self):
        assert calculate_sharpe_ratio([]) == 0.0

    def test_single_trade(self):
        assert calculate_sharpe_ratio([_trade(10)]) == 0.0

    def test_identical_returns(self):
        assert calculate_sharpe_ratio([_trade(0.1)] * 3) == 0.0

    def test_zero_hold_days(self):
        assert calculate_sharpe_ratio([_trade(10, hold_days=0), _trade(-5, hold_days=0)]) == 0.0

    def test_sign_follows_mean(self):
        assert calculate_sharpe_ratio([_trade(-10), _trade(2)]) < 0
