"""
Indicator calculation module.

Provides all technical indicators:
- Moving averages (MA, EMA)
- MACD, RSI, Bollinger Bands, KDJ
- A-share board helpers (price limits, turnover)

All indicators follow a unified interface; compute_indicator() is the
entry point for callers that select an indicator by kind.
"""
from .base import Indicator, IndicatorKind
from .technical import (
    calculate_ma,
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_bollinger,
    calculate_kdj,
)
from .implementations import (
    MAIndicator,
    EMAIndicator,
    MACDIndicator,
    RSIIndicator,
    BollingerIndicator,
    KDJIndicator,
    INDICATORS,
    compute_indicator,
)
from .ashare import (
    BoardType,
    LimitStatus,
    TurnoverLevel,
    LimitInfo,
    TurnoverInfo,
    board_type,
    limit_info,
    turnover_info,
)

__all__ = [
    'Indicator',
    'IndicatorKind',
    'calculate_ma',
    'calculate_ema',
    'calculate_macd',
    'calculate_rsi',
    'calculate_bollinger',
    'calculate_kdj',
    'MAIndicator',
    'EMAIndicator',
    'MACDIndicator',
    'RSIIndicator',
    'BollingerIndicator',
    'KDJIndicator',
    'INDICATORS',
    'compute_indicator',
    'BoardType',
    'LimitStatus',
    'TurnoverLevel',
    'LimitInfo',
    'TurnoverInfo',
    'board_type',
    'limit_info',
    'turnover_info',
]
