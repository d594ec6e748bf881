"""
A-share board helpers: daily price-limit bands and relative turnover.

Mainland boards cap the daily move at +/-10% (main board) or +/-20% (STAR
market and ChiNext). Turnover is estimated from volume relative to its
20-day average when the float share count is not known.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..shared.types import CandleSeries
from ..shared.defaults import (
    MAIN_BOARD_LIMIT_PCT, GROWTH_BOARD_LIMIT_PCT,
    LIMIT_TOLERANCE_PCT, NEAR_LIMIT_RATIO,
    TURNOVER_WINDOW, TURNOVER_SHORT_WINDOW, TURNOVER_BASELINE_PCT,
)


class BoardType(Enum):
    MAIN = "main"
    STAR = "star"  # Shanghai STAR market, 688xxx
    GEM = "gem"  # Shenzhen ChiNext, 300xxx / 301xxx


class LimitStatus(Enum):
    LIMIT_UP = "limit_up"
    NEAR_LIMIT_UP = "near_limit_up"
    NORMAL = "normal"
    NEAR_LIMIT_DOWN = "near_limit_down"
    LIMIT_DOWN = "limit_down"


class TurnoverLevel(Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    VERY_HIGH = "very_high"


@dataclass(frozen=True)
class LimitInfo:
    board_type: BoardType
    limit_pct: float
    limit_up_price: float
    limit_down_price: float
    is_limit_up: bool
    is_limit_down: bool
    is_near_limit_up: bool
    is_near_limit_down: bool
    status: LimitStatus


@dataclass(frozen=True)
class TurnoverInfo:
    turnover_rate: float  # Percent of float traded today (estimated without float shares)
    avg_turnover_5d: float
    avg_turnover_20d: float
    level: TurnoverLevel


def board_type(symbol: str) -> BoardType:
    """Board of a mainland symbol such as 600519.SS or 300750.SZ."""
    code = symbol.upper()
    for suffix in (".SS", ".SZ"):
        if code.endswith(suffix):
            code = code[: -len(suffix)]
    if code.startswith("688"):
        return BoardType.STAR
    if code.startswith(("300", "301")):
        return BoardType.GEM
    return BoardType.MAIN


def limit_info(symbol: str, previous_close: float, change_pct: float) -> LimitInfo:
    """
    Price-limit band for today's session and where the current move sits in it.

    Args:
        symbol: Ticker symbol (board is derived from its code)
        previous_close: Previous session's close
        change_pct: Today's change in percent (e.g. 9.98)
    """
    board = board_type(symbol)
    limit_pct = MAIN_BOARD_LIMIT_PCT if board is BoardType.MAIN else GROWTH_BOARD_LIMIT_PCT

    is_limit_up = change_pct >= limit_pct - LIMIT_TOLERANCE_PCT
    is_limit_down = change_pct <= -(limit_pct - LIMIT_TOLERANCE_PCT)
    is_near_limit_up = not is_limit_up and change_pct >= limit_pct * NEAR_LIMIT_RATIO
    is_near_limit_down = not is_limit_down and change_pct <= -(limit_pct * NEAR_LIMIT_RATIO)

    if is_limit_up:
        status = LimitStatus.LIMIT_UP
    elif is_near_limit_up:
        status = LimitStatus.NEAR_LIMIT_UP
    elif is_limit_down:
        status = LimitStatus.LIMIT_DOWN
    elif is_near_limit_down:
        status = LimitStatus.NEAR_LIMIT_DOWN
    else:
        status = LimitStatus.NORMAL

    return LimitInfo(
        board_type=board,
        limit_pct=limit_pct,
        limit_up_price=round(previous_close * (1 + limit_pct / 100), 2),
        limit_down_price=round(previous_close * (1 - limit_pct / 100), 2),
        is_limit_up=is_limit_up,
        is_limit_down=is_limit_down,
        is_near_limit_up=is_near_limit_up,
        is_near_limit_down=is_near_limit_down,
        status=status,
    )


def _turnover_level(rate: float) -> TurnoverLevel:
    if rate < 0.5:
        return TurnoverLevel.VERY_LOW
    if rate < 1.5:
        return TurnoverLevel.LOW
    if rate < 5:
        return TurnoverLevel.NORMAL
    if rate < 10:
        return TurnoverLevel.HIGH
    return TurnoverLevel.VERY_HIGH


def turnover_info(series: CandleSeries, float_shares: Optional[float] = None) -> TurnoverInfo:
    """
    Estimate turnover for the last candle.

    With float_shares the rate is volume / float_shares * 100. Without it,
    volume relative to the trailing 20-day average is scaled to a 2% baseline.
    The 5- and 20-day averages always use the relative estimate and are 0
    when the window has no volume.
    """
    empty = TurnoverInfo(0.0, 0.0, 0.0, TurnoverLevel.NORMAL)
    if len(series) == 0:
        return empty

    volumes = series.frame["volume"]
    last_volume = float(volumes.iloc[-1])
    avg_volume = volumes.tail(TURNOVER_WINDOW).mean()

    if float_shares and float_shares > 0:
        rate = last_volume / float_shares * 100
    elif avg_volume > 0:
        rate = last_volume / avg_volume * TURNOVER_BASELINE_PCT
    else:
        return empty

    if avg_volume > 0:
        relative = volumes / avg_volume * TURNOVER_BASELINE_PCT
        avg_5d = float(relative.tail(TURNOVER_SHORT_WINDOW).mean())
        avg_20d = float(relative.tail(TURNOVER_WINDOW).mean())
    else:
        avg_5d = avg_20d = 0.0

    return TurnoverInfo(
        turnover_rate=round(rate, 2),
        avg_turnover_5d=round(avg_5d, 2),
        avg_turnover_20d=round(avg_20d, 2),
        level=_turnover_level(rate),
    )
