from .base_provider import BaseFundamentalProvider, BasePriceHistoryProvider, BaseSentimentProvider
from .csv_provider import CsvPriceHistoryProvider, StaticFundamentalProvider, StaticSentimentProvider

__all__ = [
    "BaseFundamentalProvider",
    "BasePriceHistoryProvider",
    "BaseSentimentProvider",
    "CsvPriceHistoryProvider",
    "StaticFundamentalProvider",
    "StaticSentimentProvider",
]
