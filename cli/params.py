#!/usr/bin/env python3
"""
Parameter reference CLI.

Shows every strategy, its theory, and its parameters with suggested ranges
and defaults.
"""
import sys

from stockwise.shared.defaults import MIN_BACKTEST_CANDLES
from stockwise.signals.strategies import STRATEGIES


def _fmt(value) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def main():
    """Print all strategies with their parameter ranges and defaults."""

    print("=" * 80)
    print("STRATEGY PARAMETER REFERENCE")
    print("=" * 80)
    print()

    for info in STRATEGIES.values():
        defaults = info.defaults()
        print(f"{info.name} ({info.kind.value}):")
        print(f"  Theory: {info.theory}")
        print(f"  {info.description}")
        for spec in info.param_specs:
            print(f"  --param {spec.key:<14} {spec.label}: {_fmt(defaults[spec.key])} (default)")
            print(f"  {'':<22} Range: {_fmt(spec.min)}-{_fmt(spec.max)}, step {_fmt(spec.step)}")
        print()

    print("NOTES:")
    print("-" * 80)
    print(f"  Backtests need at least {MIN_BACKTEST_CANDLES} candles.")
    print("  Ranges are suggestions; any whole-number period >= 1 is accepted.")
    print("  RSI: oversold must be below overbought.")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
