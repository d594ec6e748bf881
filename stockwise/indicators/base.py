"""
Base indicator interface.

All indicators should follow this pattern:
1. Calculate values from a CandleSeries (pandas, indexed by candle time)
2. Convert those values into point objects for callers outside pandas
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, List, Mapping, Optional, Tuple, Union

import pandas as pd

from ..shared.errors import UnknownIndicatorError
from ..shared.types import CandleSeries


class IndicatorKind(Enum):
    """Supported indicator kinds."""
    MA = "MA"
    EMA = "EMA"
    MACD = "MACD"
    RSI = "RSI"
    BOLL = "BOLL"
    KDJ = "KDJ"

    @classmethod
    def parse(cls, kind: Union["IndicatorKind", str]) -> "IndicatorKind":
        """Accept an IndicatorKind or its name in any case."""
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind.strip().upper())
            except ValueError:
                pass
        raise UnknownIndicatorError(kind)


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from price data that strategies use for
    signal generation. They do not generate signals directly.
    """

    kind: ClassVar[IndicatorKind]
    param_names: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]] = None) -> "Indicator":
        """
        Build an indicator from a loose parameter mapping.

        Missing keys fall back to defaults; unknown keys raise ValueError.
        """
        params = dict(params or {})
        unknown = sorted(set(params) - set(cls.param_names))
        if unknown:
            raise ValueError(
                f"Unknown {cls.kind.value} parameter(s): {', '.join(unknown)} "
                f"(expected: {', '.join(cls.param_names)})"
            )
        return cls(**params)

    @abstractmethod
    def calculate(self, series: CandleSeries) -> Union[pd.Series, pd.DataFrame]:
        """
        Calculate indicator values from price data.

        Args:
            series: Candle series to compute over

        Returns:
            Series or DataFrame indexed by candle time, warm-up rows dropped
        """
        pass

    @abstractmethod
    def to_points(self, values: Union[pd.Series, pd.DataFrame]) -> List[Any]:
        """Convert calculated values into point objects, in time order."""
        pass

    def points(self, series: CandleSeries) -> List[Any]:
        """Calculate and convert in one step."""
        return self.to_points(self.calculate(series))

    def get_value_at(self, series: CandleSeries, time: int) -> Optional[Any]:
        """
        Get the indicator point at a specific candle time.

        Args:
            series: Candle series (must include data before time)
            time: Candle time (unix seconds)

        Returns:
            Point at time, or None if time is inside the warm-up window or absent
        """
        values = self.calculate(series)
        if time not in values.index:
            return None
        return self.to_points(values.loc[[time]])[0]
