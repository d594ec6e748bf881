#!/usr/bin/env python3
"""
Indicator CLI.

Computes one technical indicator over a daily OHLCV CSV and prints the
latest values or writes them all to CSV.
"""
import argparse
import logging
import sys

import pandas as pd

from stockwise.data.loader import DataLoader
from stockwise.indicators.base import IndicatorKind
from stockwise.indicators.implementations import INDICATORS

from .common import setup_logging, parse_param_pairs, format_time


logger = logging.getLogger(__name__)


def indicator_frame(values) -> pd.DataFrame:
    """Indicator output as a frame with a leading date column."""
    df = values.to_frame(name='value') if isinstance(values, pd.Series) else values.copy()
    df.insert(0, 'date', [format_time(t) for t in df.index])
    return df


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compute a technical indicator over a daily OHLCV CSV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Last 10 values of the 14-day RSI
    python -m cli.indicators --data data/600519.csv --kind RSI --param period=14

    # Full MACD history to CSV
    python -m cli.indicators --data data/600519.csv --kind MACD --csv macd.csv
        """
    )
    parser.add_argument("--data", "-d", required=True, help="CSV file with daily candles")
    parser.add_argument(
        "--kind", "-k",
        default=IndicatorKind.MA.value,
        type=str.upper,
        choices=[k.value for k in IndicatorKind],
        help="Indicator to compute (default: MA)",
    )
    parser.add_argument(
        "--param", "-p",
        action="append",
        metavar="KEY=VALUE",
        help="Indicator parameter, repeatable (e.g. --param period=10)",
    )
    parser.add_argument("--start-date", "-s", type=str, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", "-e", type=str, help="End date (YYYY-MM-DD)")
    parser.add_argument("--tail", "-n", type=int, default=10, help="Rows to print (default: 10)")
    parser.add_argument("--csv", type=str, help="Write every value to this CSV file instead of printing")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        indicator = INDICATORS[IndicatorKind.parse(args.kind)].from_params(parse_param_pairs(args.param))
        series = DataLoader(args.data).load(start_date=args.start_date, end_date=args.end_date)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    df = indicator_frame(indicator.calculate(series))
    if df.empty:
        logger.warning(f"Not enough candles ({len(series)}) for {args.kind}")

    if args.csv:
        df.to_csv(args.csv, index=False)
        logger.info(f"Wrote {len(df)} rows to {args.csv}")
        return 0

    print(df.tail(args.tail).to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
