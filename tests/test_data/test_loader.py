"""
Tests for the CSV data loader.
"""
import pytest

from stockwise.data.loader import DataLoader


CSV = """Date,Open,High,Low,Close,Volume
2024-01-04,12,13,11,12.5,300
2024-01-02,10,11,9,10.5,100
2024-01-03,11,12,10,11.5,200
2024-01-05,13,14,12,13.5,400
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "600519.csv"
    path.write_text(CSV)
    return path


class TestDataLoader:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataLoader(tmp_path / "nope.csv")

    def test_load_sorts_by_date(self, csv_path):
        series = DataLoader(csv_path).load()
        assert len(series) == 4
        assert [c.close for c in series] == [10.5, 11.5, 12.5, 13.5]
        assert series.times[0] == 1704153600
        assert series[0].volume == 100.0

    def test_date_filter_is_inclusive(self, csv_path):
        series = DataLoader(csv_path).load(start_date="2024-01-03", end_date="2024-01-04")
        assert [c.close for c in series] == [11.5, 12.5]

    def test_duplicate_dates_keep_last(self, tmp_path):
        path = tmp_path / "dup.csv"
        path.write_text("date,close\n2024-01-02,1\n2024-01-03,2\n2024-01-02,3\n")
        series = DataLoader(path).load()
        assert [c.close for c in series] == [3.0, 2.0]

    def test_close_only(self, tmp_path):
        path = tmp_path / "close.csv"
        path.write_text("date,close\n2024-01-02,5\n2024-01-03,6\n")
        candle = DataLoader(path).load()[1]
        assert (candle.open, candle.high, candle.low, candle.close, candle.volume) == (6, 6, 6, 6, 0)

    def test_unix_time_column(self, tmp_path):
        path = tmp_path / "unix.csv"
        path.write_text("time,open,high,low,close\n1704240000,2,2,2,2\n1704153600,1,1,1,1\n")
        series = DataLoader(path).load(start_date="2024-01-03")
        assert series.times == [1704240000]

    def test_missing_close_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("date,open\n2024-01-02,5\n")
        with pytest.raises(ValueError, match="close"):
            DataLoader(path).load()

    def test_rows_without_close_dropped(self, tmp_path):
        path = tmp_path / "gap.csv"
        path.write_text("date,close\n2024-01-02,5\n2024-01-03,\n2024-01-04,7\n")
        assert [c.close for c in DataLoader(path).load()] == [5.0, 7.0]
