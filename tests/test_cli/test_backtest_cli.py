"""
Tests for the backtest, indicators and params CLIs.

Verifies exit codes, config/CLI precedence and output formats.
"""
import argparse
import json
import logging
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from cli import backtest as backtest_cli
from cli import indicators as indicators_cli
from cli import params as params_cli
from cli.common import parse_param_pairs
from stockwise.signals.config import StrategyKind


CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


@pytest.fixture(autouse=True)
def restore_logging():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write_csv(path, n, start="2023-01-02"):
    dates = pd.date_range(start, periods=n, freq="D")
    closes = 100 + 10 * np.sin(2 * np.pi * np.arange(n) / 30)
    pd.DataFrame(
        {"Open": closes, "High": closes + 1, "Low": closes - 1, "Close": closes, "Volume": 1000},
        index=pd.Index(dates, name="Date"),
    ).to_csv(path)
    return path


@pytest.fixture
def csv_path(tmp_path):
    return _write_csv(tmp_path / "prices.csv", 120)


class TestParseParamPairs:

    def test_types(self):
        assert parse_param_pairs(["fast=10", "std_dev=1.5"]) == {"fast": 10, "std_dev": 1.5}

    def test_none(self):
        assert parse_param_pairs(None) == {}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="key=value"):
            parse_param_pairs(["fast"])


class TestBacktestCli:

    def test_json_output(self, csv_path, capsys):
        code = backtest_cli.main(["--data", str(csv_path), "--strategy", "ma_cross", "--json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total_trades"] > 0
        assert data["total_trades"] == len(data["trades"])

    def test_summary_with_trades(self, csv_path, capsys):
        code = backtest_cli.main(["--data", str(csv_path), "--param", "fast=5", "--trades"])
        assert code == 0
        out = capsys.readouterr().out
        assert "macd_cross" in out
        assert "Win rate" in out
        assert "TRADES" in out

    def test_too_few_candles(self, tmp_path):
        path = _write_csv(tmp_path / "short.csv", 59)
        assert backtest_cli.main(["--data", str(path)]) == 1

    def test_date_window_can_cut_below_minimum(self, csv_path):
        assert backtest_cli.main(
            ["--data", str(csv_path), "--start-date", "2023-01-02", "--end-date", "2023-01-31"]
        ) == 1

    def test_missing_data_file(self, tmp_path):
        assert backtest_cli.main(["--data", str(tmp_path / "none.csv")]) == 1

    def test_no_data_given(self):
        assert backtest_cli.main([]) == 1

    def test_bad_param(self, csv_path):
        assert backtest_cli.main(["--data", str(csv_path), "--param", "fast=0"]) == 1

    def test_empty_param_value(self, csv_path):
        assert backtest_cli.main(["--data", str(csv_path), "--param", "fast="]) == 1

    def test_unknown_strategy_rejected_by_parser(self, csv_path):
        with pytest.raises(SystemExit):
            backtest_cli.main(["--data", str(csv_path), "--strategy", "turtle"])

    def test_config_file(self, tmp_path, csv_path, capsys):
        config = tmp_path / "cfg.yaml"
        config.write_text(
            "name: cfg\nstrategy:\n  id: rsi_oversold\n  params:\n    period: 7\n"
            f"data:\n  path: {csv_path}\n"
        )
        assert backtest_cli.main(["--config", str(config), "--json"]) == 0
        assert "total_return_pct" in json.loads(capsys.readouterr().out)

    def test_shipped_config_with_own_data(self, tmp_path, capsys):
        # macd_default.yaml windows 2022-2024; the CSV has to cover it
        path = _write_csv(tmp_path / "prices.csv", 1200, start="2022-01-01")
        code = backtest_cli.main(
            ["--config", str(CONFIGS_DIR / "macd_default.yaml"), "--data", str(path), "--json"]
        )
        assert code == 0
        assert json.loads(capsys.readouterr().out)["total_trades"] > 0


class TestBuildConfig:
    """Precedence: CLI > config file > defaults."""

    def test_cli_overrides_config(self, tmp_path):
        config = tmp_path / "cfg.yaml"
        config.write_text(
            "strategy:\n  id: macd_cross\n  params:\n    fast: 8\n    slow: 30\n"
            "data:\n  path: a.csv\n  start_date: 2020-01-01\n  end_date: 2021-01-01\n"
        )
        args = argparse.Namespace(
            config=str(config),
            strategy=None,
            param=["slow=40"],
            data="b.csv",
            start_date="2020-06-01",
            end_date=None,
        )

        resolved = backtest_cli.build_config(args)
        assert resolved.params == {"fast": 8, "slow": 40}
        assert resolved.data_path == "b.csv"
        assert resolved.start_date == "2020-06-01"
        assert resolved.end_date == "2021-01-01"

    def test_switching_strategy_drops_config_params(self, tmp_path):
        config = tmp_path / "cfg.yaml"
        config.write_text("strategy:\n  id: macd_cross\n  params:\n    fast: 8\n")
        args = argparse.Namespace(
            config=str(config),
            strategy="ema_trend",
            param=None,
            data=None,
            start_date=None,
            end_date=None,
        )

        resolved = backtest_cli.build_config(args)
        assert resolved.strategy is StrategyKind.EMA_TREND
        assert resolved.params == {}

    def test_defaults_without_config(self):
        args = argparse.Namespace(
            config=None, strategy=None, param=None, data="x.csv", start_date=None, end_date=None,
        )
        resolved = backtest_cli.build_config(args)
        assert resolved.strategy is StrategyKind.MACD_CROSS
        assert resolved.data_path == "x.csv"


class TestIndicatorsCli:

    def test_prints_tail(self, csv_path, capsys):
        code = indicators_cli.main(["--data", str(csv_path), "--kind", "rsi", "--tail", "3"])
        assert code == 0
        lines = capsys.readouterr().out.strip().splitlines()
        # header + 3 rows
        assert len(lines) == 4
        assert "value" in lines[0]

    def test_writes_csv(self, csv_path, tmp_path):
        out = tmp_path / "macd.csv"
        code = indicators_cli.main(["--data", str(csv_path), "--kind", "MACD", "--csv", str(out)])
        assert code == 0
        df = pd.read_csv(out)
        assert {"date", "macd", "signal", "histogram"} <= set(df.columns)
        assert len(df) == 120 - 25 - 8

    def test_bad_param(self, csv_path):
        assert indicators_cli.main(["--data", str(csv_path), "--param", "window=3"]) == 1


class TestParamsCli:

    def test_lists_every_strategy(self, capsys):
        assert params_cli.main() == 0
        out = capsys.readouterr().out
        for strategy_id in ("macd_cross", "ma_cross", "rsi_oversold", "boll_breakout", "kdj_cross", "ema_trend"):
            assert strategy_id in out
