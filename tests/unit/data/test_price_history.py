"""
Unit tests for price history conversion and validation.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from signal_engine.data.price_history import (
    bars_from_dataframe,
    bars_to_dataframe,
    closes,
    validate_bars,
)
from signal_engine.exceptions import PriceHistoryError, SignalEngineError
from signal_engine.signal_generation.core import PriceBar


@pytest.mark.unit
class TestBarsFromDataFrame:

    def test_converts_indexed_frame(self, sample_ohlc_data):
        bars = bars_from_dataframe(sample_ohlc_data)

        assert len(bars) == len(sample_ohlc_data)
        assert bars[0].date == date(2023, 1, 1)
        assert bars[-1].close == pytest.approx(sample_ohlc_data["close"].iloc[-1])

    def test_accepts_capitalised_columns_and_date_column(self):
        frame = pd.DataFrame({
            "Date": ["2024-01-03", "2024-01-02"],
            "Open": [10.0, 9.0],
            "High": [11.0, 10.0],
            "Low": [9.5, 8.5],
            "Close": [10.5, 9.5],
            "Volume": [1000, 900],
        })

        bars = bars_from_dataframe(frame)

        assert [b.date for b in bars] == [date(2024, 1, 2), date(2024, 1, 3)]
        assert closes(bars) == [9.5, 10.5]

    def test_missing_columns_raise(self):
        frame = pd.DataFrame({"close": [1.0]}, index=pd.date_range("2024-01-01", periods=1))

        with pytest.raises(PriceHistoryError, match="open"):
            bars_from_dataframe(frame)

    def test_duplicate_dates_raise(self, sample_ohlc_data):
        frame = pd.concat([sample_ohlc_data.iloc[:3], sample_ohlc_data.iloc[2:3]])

        with pytest.raises(PriceHistoryError, match="strictly increasing"):
            bars_from_dataframe(frame)

    def test_nan_close_raises(self, sample_ohlc_data):
        frame = sample_ohlc_data.copy()
        frame.iloc[5, frame.columns.get_loc("close")] = np.nan

        with pytest.raises(PriceHistoryError, match="Non-finite close"):
            bars_from_dataframe(frame)

    def test_empty_frame(self):
        assert bars_from_dataframe(pd.DataFrame()) == []

    def test_to_dataframe_preserves_closes(self, make_bars):
        bars = make_bars([1.0, 2.0, 3.0])
        frame = bars_to_dataframe(bars)

        assert frame["close"].tolist() == [1.0, 2.0, 3.0]
        assert bars_from_dataframe(frame) == bars


@pytest.mark.unit
class TestValidateBars:

    def test_out_of_order_raises(self, make_bars):
        bars = make_bars([1.0, 2.0, 3.0])

        with pytest.raises(PriceHistoryError):
            validate_bars([bars[1], bars[0], bars[2]])

    def test_errors_share_base_class(self):
        bar = PriceBar(date(2024, 1, 1), 1.0, 1.0, 1.0, float("inf"), 0.0)

        with pytest.raises(SignalEngineError):
            validate_bars([bar])

    def test_valid_bars_pass(self, make_bars):
        validate_bars(make_bars([1.0, 2.0]))
