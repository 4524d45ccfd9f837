"""
Abstract base classes for the data providers the signal engine consumes.

Fetching is the only asynchronous concern in the system. Providers hand back
already-validated values; the signal generators never perform I/O.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from ...signal_generation.core import FundamentalData, PriceBar, SentimentData


class BasePriceHistoryProvider(ABC):
    """
    Abstract base class for price history providers.

    Implementations must return bars sorted ascending by date with no
    duplicate dates.
    """

    @abstractmethod
    async def fetch_bars(
        self, symbol: str, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[PriceBar]:
        """
        Fetches daily OHLCV bars for a symbol.

        Args:
            symbol: The ticker to fetch.
            start_date: First date to include, or None for the full history.
            end_date: Last date to include, or None for the full history.

        Returns:
            Bars oldest first.

        Raises:
            DataProviderError: If no data can be loaded for the symbol.
        """
        pass


class BaseSentimentProvider(ABC):
    """Abstract base class for aggregate news sentiment providers."""

    @abstractmethod
    async def fetch_sentiment(self, symbol: str) -> Optional[SentimentData]:
        """
        Fetches the current sentiment aggregate for a symbol.

        Returns:
            The aggregate, or None when the symbol has no coverage.
        """
        pass


class BaseFundamentalProvider(ABC):
    """Abstract base class for fundamental data providers."""

    @abstractmethod
    async def fetch_fundamentals(self, symbol: str) -> Optional[FundamentalData]:
        """
        Fetches the latest fundamental metrics for a symbol.

        Returns:
            The metrics, or None when none are available.
        """
        pass
