#!/usr/bin/env python3
"""
Strategy backtest CLI.

Runs one catalog strategy over a daily OHLCV CSV and prints the backtest
statistics.
"""
import argparse
import json
import logging
import sys

from stockwise.data.loader import DataLoader
from stockwise.evaluation.backtest import run_backtest, has_enough_history
from stockwise.evaluation.backtest_types import BacktestResult
from stockwise.shared.defaults import MIN_BACKTEST_CANDLES
from stockwise.signals.config import BacktestConfig, StrategyKind
from stockwise.signals.config_loader import load_config_from_yaml
from stockwise.signals.strategies import get_strategy, run_strategy

from .common import setup_logging, parse_param_pairs, format_time


logger = logging.getLogger(__name__)


def print_summary(config: BacktestConfig, result: BacktestResult, candles: int):
    info = get_strategy(config.strategy)
    print("=" * 60)
    print(f"BACKTEST: {info.name} ({config.strategy.value})")
    print("=" * 60)
    if config.description:
        print(config.description)
    print(f"Parameters:        {config.strategy_params.to_dict()}")
    print(f"Candles:           {candles}")
    print(f"Signals:           {len(result.signals)}")
    print()
    print(f"Total trades:      {result.total_trades}")
    print(f"Profitable:        {result.profitable_trades}")
    print(f"Losing:            {result.losing_trades}")
    print(f"Win rate:          {result.win_rate_pct:.2f}%")
    print(f"Total return:      {result.total_return_pct:.2f}%")
    print(f"Max drawdown:      {result.max_drawdown_pct:.2f}%")
    print(f"Avg hold (days):   {result.avg_hold_days:.1f}")
    print(f"Avg win:           {result.avg_win_pct:.2f}%")
    print(f"Avg loss:          {result.avg_loss_pct:.2f}%")
    print(f"Sharpe ratio:      {result.sharpe_ratio:.2f}")
    if result.open_buy is not None:
        print(
            f"Open position:     bought {result.open_buy.price:.2f} "
            f"on {format_time(result.open_buy.time)} (not counted)"
        )


def print_trades(result: BacktestResult):
    print()
    print("TRADES")
    print("-" * 60)
    if not result.trades:
        print("No closed trades.")
        return
    df = result.trades_frame()
    df['buy_time'] = df['buy_time'].map(format_time)
    df['sell_time'] = df['sell_time'].map(format_time)
    df['return_pct'] = df['return_pct'].round(2)
    print(df.to_string(index=False))


def build_config(args) -> BacktestConfig:
    """Merge YAML config (if any) with command-line overrides."""
    cli_params = parse_param_pairs(args.param)

    if args.config:
        base = load_config_from_yaml(args.config)
        strategy = args.strategy or base.strategy
        # Params from the file only apply to the strategy they were written for
        params = dict(base.params) if StrategyKind.parse(strategy) is base.strategy else {}
        params.update(cli_params)
        return BacktestConfig(
            strategy=strategy,
            params=params,
            name=base.name,
            description=base.description,
            data_path=args.data or base.data_path,
            start_date=args.start_date or base.start_date,
            end_date=args.end_date or base.end_date,
        )

    return BacktestConfig(
        strategy=args.strategy or StrategyKind.MACD_CROSS,
        params=cli_params,
        data_path=args.data,
        start_date=args.start_date,
        end_date=args.end_date,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Backtest a trading strategy on a daily OHLCV CSV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # MACD cross with default parameters
    python -m cli.backtest --data data/600519.csv

    # RSI strategy with custom thresholds
    python -m cli.backtest --data data/600519.csv --strategy rsi_oversold --param oversold=25 --param overbought=75

    # Strategy and date window from YAML, candles from your own CSV
    python -m cli.backtest --config configs/macd_default.yaml --data data/600519.csv --trades
        """
    )

    parser.add_argument(
        "--data", "-d",
        type=str,
        help="CSV file with daily candles (overrides data.path from --config)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Load strategy, parameters and data window from YAML file",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[k.value for k in StrategyKind],
        help="Strategy id (default: macd_cross, or strategy.id from --config)",
    )
    parser.add_argument(
        "--param", "-p",
        action="append",
        metavar="KEY=VALUE",
        help="Strategy parameter override, repeatable (e.g. --param fast=10)",
    )
    parser.add_argument(
        "--start-date", "-s",
        type=str,
        help="Start date for backtest (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end-date", "-e",
        type=str,
        help="End date for backtest (YYYY-MM-DD)",
    )
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--trades", action="store_true", help="Also list every closed trade")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if not config.data_path:
        logger.error("No data file given (use --data or data.path in --config)")
        return 1

    try:
        series = DataLoader(config.data_path).load(
            start_date=config.start_date,
            end_date=config.end_date,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load data: {e}")
        return 1

    if not has_enough_history(series):
        logger.error(
            f"Need at least {MIN_BACKTEST_CANDLES} candles to backtest, got {len(series)}"
        )
        return 1

    signals = run_strategy(config.strategy, series, config.params)
    result = run_backtest(series, signals)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print_summary(config, result, len(series))
    if args.trades:
        print_trades(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
