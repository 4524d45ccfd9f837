"""
Price history helpers.

Converts OHLCV DataFrames, as returned by data providers, into the ordered
``PriceBar`` sequences the signal generators consume, and validates the
ordering contract at that boundary so the scoring path never has to.
"""
from datetime import date, datetime
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..exceptions import PriceHistoryError
from ..signal_generation.core import PriceBar, closes

OHLCV_COLUMNS = ("open", "high", "low", "close", "volume")


def _to_date(value) -> date:
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def bars_from_dataframe(df: pd.DataFrame) -> List[PriceBar]:
    """
    Convert an OHLCV DataFrame into validated price bars.

    The frame may carry dates either in a ``date`` column or in its index.
    Column names are matched case-insensitively, so provider frames with
    ``Open``/``Close`` headers are accepted as-is.

    Args:
        df: DataFrame with open, high, low, close and volume columns.

    Returns:
        Bars sorted oldest first.

    Raises:
        PriceHistoryError: If columns are missing, dates repeat or a close is not finite.
    """
    if df.empty:
        return []

    frame = df.rename(columns={c: str(c).lower() for c in df.columns})
    missing = [c for c in OHLCV_COLUMNS if c not in frame.columns]
    if missing:
        raise PriceHistoryError(f"Price data is missing columns: {', '.join(missing)}")

    if "date" in frame.columns:
        frame = frame.set_index("date")
    frame = frame.sort_index()

    bars = [
        PriceBar(
            date=_to_date(idx),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(row["volume"]),
        )
        for idx, row in frame[list(OHLCV_COLUMNS)].iterrows()
    ]
    validate_bars(bars)
    return bars


def bars_to_dataframe(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """Convert price bars into a DataFrame indexed by date."""
    records = [
        {"date": pd.Timestamp(b.date), "open": b.open, "high": b.high, "low": b.low,
         "close": b.close, "volume": b.volume}
        for b in bars
    ]
    if not records:
        return pd.DataFrame(columns=list(OHLCV_COLUMNS))
    return pd.DataFrame.from_records(records).set_index("date")


def validate_bars(bars: Sequence[PriceBar]) -> None:
    """
    Check that bars are strictly increasing by date and every close is finite.

    Raises:
        PriceHistoryError: On the first violation found.
    """
    if not bars:
        return

    closes_arr = np.asarray(closes(bars), dtype=float)
    bad = np.flatnonzero(~np.isfinite(closes_arr))
    if bad.size:
        raise PriceHistoryError(f"Non-finite close on {bars[int(bad[0])].date.isoformat()}")

    for previous, current in zip(bars, bars[1:]):
        if current.date <= previous.date:
            raise PriceHistoryError(
                f"Bars must be strictly increasing by date: {current.date.isoformat()} "
                f"follows {previous.date.isoformat()}"
            )
