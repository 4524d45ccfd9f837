"""
Exception hierarchy for the signal engine.

The scoring path itself never raises for insufficient history or missing
coverage; those outcomes are returned as ``hold`` results. The exceptions
below are raised at the boundaries: when price history handed to the engine
is malformed, or when a data provider cannot load data.
"""


class SignalEngineError(Exception):
    """Base class for all signal engine errors."""


class PriceHistoryError(SignalEngineError):
    """Raised when a price series is not strictly ordered or holds invalid closes."""


class DataProviderError(SignalEngineError):
    """Raised when an external data provider fails to load data for a symbol."""

    def __init__(self, symbol: str, message: str):
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol
