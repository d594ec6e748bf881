"""
Tests for the shared data model: Candle, CandleSeries, Signal.
"""
import pytest
import pandas as pd

from stockwise.shared.types import Candle, CandleSeries, Signal, SignalType
from stockwise.shared.errors import UnknownIndicatorError, UnknownStrategyError


class TestCandleSeries:
    """CandleSeries construction and lookups."""

    def test_times_must_increase(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            CandleSeries((Candle(2, 1, 1, 1, 1), Candle(1, 1, 1, 1, 1)))

    def test_duplicate_times_rejected(self):
        with pytest.raises(ValueError):
            CandleSeries((Candle(1, 1, 1, 1, 1), Candle(1, 2, 2, 2, 2)))

    def test_empty_series(self):
        series = CandleSeries()
        assert len(series) == 0
        assert series.closes.empty

    def test_from_records_defaults(self):
        series = CandleSeries.from_records([{"time": 100, "close": 5}])
        candle = series[0]
        assert candle.open == candle.high == candle.low == 5.0
        assert candle.volume == 0.0

    def test_from_records_accepts_candles(self):
        candle = Candle(100, 1, 2, 0.5, 1.5, 10)
        assert CandleSeries.from_records([candle])[0] is candle

    def test_from_frame_datetime_index(self):
        df = pd.DataFrame(
            {"Close": [10.0, 11.0], "Volume": [5, 6]},
            index=pd.to_datetime(["2024-01-02", "2024-01-03"]),
        )
        series = CandleSeries.from_frame(df)
        assert series.times == [1704153600, 1704240000]
        assert series[1].close == 11.0
        assert series[1].open == 11.0
        assert series[0].volume == 5.0

    def test_from_frame_time_column(self):
        df = pd.DataFrame({"time": [100, 200], "close": [1.0, 2.0], "high": [1.5, 2.5]})
        series = CandleSeries.from_frame(df)
        assert series.times == [100, 200]
        assert series[0].high == 1.5
        assert series[0].low == 1.0

    def test_from_frame_requires_close(self):
        with pytest.raises(ValueError, match="close"):
            CandleSeries.from_frame(pd.DataFrame({"open": [1.0]}))

    def test_slice_returns_series(self, make_series):
        series = make_series([1, 2, 3, 4])
        head = series[:2]
        assert isinstance(head, CandleSeries)
        assert [c.close for c in head] == [1.0, 2.0]

    def test_index_of(self, make_series):
        series = make_series([1, 2, 3])
        assert series.index_of(series[2].time) == 2
        assert series.index_of(series[2].time + 1) is None

    def test_frame_indexed_by_time(self, make_series):
        series = make_series([1, 2, 3])
        frame = series.frame
        assert list(frame.columns) == ["open", "high", "low", "close", "volume"]
        assert list(frame.index) == series.times
        assert frame.index.name == "time"

    def test_series_is_immutable(self, make_series):
        series = make_series([1, 2])
        with pytest.raises(AttributeError):
            series.candles = ()


class TestSignal:

    def test_is_buy(self):
        assert Signal(1, SignalType.BUY, 10.0).is_buy
        assert not Signal(1, SignalType.SELL, 10.0).is_buy

    def test_to_dict_uses_plain_values(self):
        data = Signal(1, SignalType.SELL, 10.0, "why", 3).to_dict()
        assert data == {
            "time": 1,
            "signal_type": "sell",
            "price": 10.0,
            "reason": "why",
            "source_index": 3,
        }


class TestErrors:

    def test_errors_are_value_errors(self):
        assert issubclass(UnknownIndicatorError, ValueError)
        assert issubclass(UnknownStrategyError, ValueError)

    def test_error_carries_offending_value(self):
        err = UnknownStrategyError("nope")
        assert err.strategy_id == "nope"
        assert "nope" in str(err)
