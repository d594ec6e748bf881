"""
CSV data loader for daily candles.

Loads OHLCV CSV files into a CandleSeries with support for:
- A date column or a unix-seconds `time` column as the first column
- Case-insensitive column names (Close, close, CLOSE)
- Date range filtering
"""
import logging
import pandas as pd
from pathlib import Path
from typing import Optional, Union
from datetime import datetime

from ..shared.types import CandleSeries


logger = logging.getLogger(__name__)


class DataLoader:
    """
    Loads candles from a CSV file.

    Rows are sorted by date; duplicate dates keep the last row. Missing
    open/high/low fall back to close and missing volume to 0.
    """

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize the data loader.

        Args:
            data_path: Path to the CSV file containing the data
        """
        self.data_path = Path(data_path)
        if not self.data_path.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_path}")

    def load_frame(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    ) -> pd.DataFrame:
        """
        Load the CSV as a DataFrame with a DatetimeIndex, filtered and de-duplicated.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.
        """
        df = pd.read_csv(self.data_path, index_col=0)

        columns = {str(c).lower(): c for c in df.columns}
        if "close" not in columns:
            raise ValueError(
                f"No close column in {self.data_path} (columns: {list(df.columns)})"
            )

        # Unix-seconds first column
        if str(df.index.name).lower() == "time" and pd.api.types.is_numeric_dtype(df.index):
            df.index = pd.to_datetime(df.index, unit="s")
        elif not isinstance(df.index, pd.DatetimeIndex):
            df.index = pd.to_datetime(df.index)

        df = df.sort_index(kind="stable")
        duplicated = df.index.duplicated(keep="last")
        if duplicated.any():
            logger.debug(f"Dropping {int(duplicated.sum())} duplicate date(s) from {self.data_path}")
            df = df[~duplicated]

        missing_close = df[columns["close"]].isna()
        if missing_close.any():
            logger.warning(f"Dropping {int(missing_close.sum())} row(s) without close from {self.data_path}")
            df = df[~missing_close]

        if start_date is not None:
            df = df[df.index >= pd.to_datetime(start_date)]
        if end_date is not None:
            df = df[df.index <= pd.to_datetime(end_date)]

        return df

    def load(
        self,
        start_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
        end_date: Optional[Union[str, datetime, pd.Timestamp]] = None,
    ) -> CandleSeries:
        """
        Load candles from the CSV file with optional filtering.

        Args:
            start_date: Start date for filtering (inclusive). If None, no start filter.
            end_date: End date for filtering (inclusive). If None, no end filter.

        Returns:
            CandleSeries in ascending time order
        """
        df = self.load_frame(start_date=start_date, end_date=end_date)
        series = CandleSeries.from_frame(df)
        logger.debug(f"Loaded {len(series)} candles from {self.data_path}")
        return series
