"""
Data loading module.

Reads daily OHLCV CSV files into CandleSeries, filtered by date range.
"""
from .loader import DataLoader

__all__ = [
    'DataLoader',
]
