"""
File-backed and in-memory data providers.

``CsvPriceHistoryProvider`` reads ``<SYMBOL>.csv`` files with a date column
and OHLCV columns, the layout produced by most market data exports. The
static providers serve sentiment and fundamentals that were fetched
elsewhere, which is how the backtest and the command-line tool supply them.
"""
import asyncio
from datetime import date
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd

from ...exceptions import DataProviderError, PriceHistoryError
from ...signal_generation.core import FundamentalData, PriceBar, SentimentData
from ...utils.logging import get_logger
from ..price_history import bars_from_dataframe
from .base_provider import BaseFundamentalProvider, BasePriceHistoryProvider, BaseSentimentProvider

logger = get_logger(__name__)


class CsvPriceHistoryProvider(BasePriceHistoryProvider):
    """
    A price provider that reads daily bars from CSV files in a directory.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, symbol: str) -> Path:
        return self.directory / f"{symbol.upper()}.csv"

    def _load(self, symbol: str) -> pd.DataFrame:
        path = self.path_for(symbol)
        if not path.exists():
            raise DataProviderError(symbol, f"price file not found: {path}")
        try:
            return pd.read_csv(path, parse_dates=[0], index_col=0)
        except (ValueError, pd.errors.ParserError) as e:
            raise DataProviderError(symbol, f"could not parse {path}: {e}") from e

    async def fetch_bars(
        self, symbol: str, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[PriceBar]:
        """
        Reads, validates and date-filters the bars for a symbol.
        """
        frame = await asyncio.to_thread(self._load, symbol)
        try:
            bars = bars_from_dataframe(frame)
        except PriceHistoryError as e:
            logger.warning("invalid_price_file", symbol=symbol, error=str(e))
            raise DataProviderError(symbol, str(e)) from e

        if start_date is not None:
            bars = [b for b in bars if b.date >= start_date]
        if end_date is not None:
            bars = [b for b in bars if b.date <= end_date]

        if not bars:
            raise DataProviderError(symbol, "no bars in the requested range")

        logger.debug("bars_loaded", symbol=symbol, count=len(bars))
        return bars


class StaticSentimentProvider(BaseSentimentProvider):
    """Serves pre-fetched sentiment aggregates keyed by symbol."""

    def __init__(self, data: Optional[Mapping[str, SentimentData]] = None):
        self._data: Dict[str, SentimentData] = {k.upper(): v for k, v in (data or {}).items()}

    async def fetch_sentiment(self, symbol: str) -> Optional[SentimentData]:
        return self._data.get(symbol.upper())


class StaticFundamentalProvider(BaseFundamentalProvider):
    """Serves pre-fetched fundamental metrics keyed by symbol."""

    def __init__(self, data: Optional[Mapping[str, FundamentalData]] = None):
        self._data: Dict[str, FundamentalData] = {k.upper(): v for k, v in (data or {}).items()}

    async def fetch_fundamentals(self, symbol: str) -> Optional[FundamentalData]:
        return self._data.get(symbol.upper())
