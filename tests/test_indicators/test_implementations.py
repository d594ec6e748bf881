"""
Tests for indicator classes and the compute_indicator entry point.
"""
import pytest

from stockwise.indicators import (
    IndicatorKind,
    MAIndicator,
    MACDIndicator,
    BollingerIndicator,
    INDICATORS,
    compute_indicator,
)
from stockwise.shared.errors import UnknownIndicatorError
from stockwise.shared.types import (
    CandleSeries,
    IndicatorPoint,
    MACDPoint,
    BollingerPoint,
    KDJPoint,
)


class TestComputeIndicator:

    def test_ma_points(self, make_series):
        series = make_series([10, 11, 12, 11, 13])
        points = compute_indicator("MA", series, {"period": 3})
        assert [p.time for p in points] == series.times[2:]
        assert points[0] == IndicatorPoint(series.times[2], 11.0)
        assert points[1].value == pytest.approx(11.333, abs=1e-3)

    def test_kind_is_case_insensitive(self, make_series):
        series = make_series([10, 11, 12, 11, 13])
        assert compute_indicator("ma", series, {"period": 3}) == compute_indicator(
            IndicatorKind.MA, series, {"period": 3}
        )

    @pytest.mark.parametrize("kind,point_type", [
        ("MA", IndicatorPoint),
        ("EMA", IndicatorPoint),
        ("RSI", IndicatorPoint),
        ("MACD", MACDPoint),
        ("BOLL", BollingerPoint),
        ("KDJ", KDJPoint),
    ])
    def test_defaults_produce_typed_points(self, random_walk_series, kind, point_type):
        points = compute_indicator(kind, random_walk_series)
        assert points
        assert all(isinstance(p, point_type) for p in points)
        times = [p.time for p in points]
        assert times == sorted(times)
        assert set(times) <= set(random_walk_series.times)

    def test_macd_default_count(self, random_walk_series):
        assert len(compute_indicator("MACD", random_walk_series[:60])) == 27

    def test_unknown_kind(self, make_series):
        with pytest.raises(UnknownIndicatorError):
            compute_indicator("VWAP", make_series([1, 2, 3]))

    def test_unknown_param(self, make_series):
        with pytest.raises(ValueError, match="Unknown MA parameter"):
            compute_indicator("MA", make_series([1, 2, 3]), {"length": 3})

    def test_invalid_period(self, make_series):
        with pytest.raises(ValueError):
            compute_indicator("RSI", make_series([1, 2, 3]), {"period": 0})

    def test_short_series_is_empty(self, make_series):
        for kind in IndicatorKind:
            assert compute_indicator(kind, make_series([1, 2])) == []

    def test_empty_series(self):
        for kind in IndicatorKind:
            assert compute_indicator(kind, CandleSeries()) == []


class TestIndicatorClasses:

    def test_registry_covers_every_kind(self):
        assert set(INDICATORS) == set(IndicatorKind)
        for kind, cls in INDICATORS.items():
            assert cls.kind is kind

    def test_from_params_uses_defaults(self):
        macd = MACDIndicator.from_params({"fast": 5})
        assert (macd.fast, macd.slow, macd.signal) == (5, 26, 9)

    def test_bollinger_rejects_negative_std(self):
        with pytest.raises(ValueError, match="std_dev"):
            BollingerIndicator(std_dev=-0.5)

    def test_get_value_at(self, make_series):
        series = make_series([10, 11, 12, 11, 13])
        indicator = MAIndicator(period=3)
        assert indicator.get_value_at(series, series.times[4]) == IndicatorPoint(series.times[4], 12.0)

    def test_get_value_at_warmup_is_none(self, make_series):
        series = make_series([10, 11, 12, 11, 13])
        assert MAIndicator(period=3).get_value_at(series, series.times[1]) is None
