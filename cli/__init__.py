"""
Unified CLI entry points.

Provides command-line interfaces for:
- Strategy backtests
- Indicator calculation
- Strategy parameter reference
"""
