"""
Shared types, defaults and errors for the engine.

This module provides:
- Candle / CandleSeries input model
- Indicator point types and the Signal type
- Centralized default values for all indicator and strategy parameters
- Caller-facing error types
"""
from .types import (
    Candle,
    CandleSeries,
    IndicatorPoint,
    MACDPoint,
    BollingerPoint,
    KDJPoint,
    SignalType,
    Signal,
)
from .errors import UnknownIndicatorError, UnknownStrategyError

__all__ = [
    'Candle',
    'CandleSeries',
    'IndicatorPoint',
    'MACDPoint',
    'BollingerPoint',
    'KDJPoint',
    'SignalType',
    'Signal',
    'UnknownIndicatorError',
    'UnknownStrategyError',
]
