"""
Centralized default values for indicator and strategy parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.

Strategy defaults:
- MACD cross: classic 12/26/9
- MA cross: MA5 vs MA20
- RSI: 14-period, 30/70 bands
- Bollinger: 20-period, 2 standard deviations
- KDJ: 9-period, J filter bands 20/80
- EMA trend: EMA8 vs EMA21
"""

# MA (Simple Moving Average) defaults
MA_PERIOD = 20
MA_SHORT_PERIOD = 5
MA_LONG_PERIOD = 20

# EMA (Exponential Moving Average) defaults
EMA_PERIOD = 12
EMA_SHORT_PERIOD = 8
EMA_LONG_PERIOD = 21

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70

# Bollinger Bands defaults
BOLL_PERIOD = 20
BOLL_STD_DEV = 2.0

# KDJ (stochastic) defaults
KDJ_PERIOD = 9
KDJ_SEED = 50.0  # Starting value for both K and D smoothing
KDJ_SMOOTHING = 1.0 / 3.0
KDJ_J_OVERSOLD = 20
KDJ_J_OVERBOUGHT = 80
KDJ_J_FILTER_OFFSET = 30  # Buy needs J < oversold + 30, sell needs J > overbought - 30

# Backtest defaults
INITIAL_EQUITY = 100.0  # Equity curve starts here; total return is final - 100
SECONDS_PER_DAY = 86400
TRADING_DAYS_PER_YEAR = 252  # Sharpe annualization: sqrt(252 / avg hold days)
MIN_BACKTEST_CANDLES = 60  # Fewer candles than this is not worth backtesting

# A-share board limits (percent move allowed per session)
MAIN_BOARD_LIMIT_PCT = 10.0
GROWTH_BOARD_LIMIT_PCT = 20.0  # STAR market (688) and ChiNext (300/301)
LIMIT_TOLERANCE_PCT = 0.05  # Within this of the limit counts as at-limit
NEAR_LIMIT_RATIO = 0.8  # 80% of the limit counts as near-limit
TURNOVER_WINDOW = 20
TURNOVER_SHORT_WINDOW = 5
TURNOVER_BASELINE_PCT = 2.0  # Assumed average turnover when float shares are unknown
