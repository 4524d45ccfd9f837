"""
Core analysis logic for CLI.
"""
from datetime import date
from typing import Any, Dict, Optional

from ..config.strategy import StrategyConfig
from ..data.providers.base_provider import (
    BaseFundamentalProvider,
    BasePriceHistoryProvider,
    BaseSentimentProvider,
)
from ..exceptions import DataProviderError
from ..signal_generation.signal_generator import StrategySignalGenerator
from ..utils.logging import get_logger

logger = get_logger(__name__)


class SymbolAnalyzer:
    """Fetches data through the providers and scores it against a strategy."""

    def __init__(
        self,
        strategy: StrategyConfig,
        price_provider: BasePriceHistoryProvider,
        sentiment_provider: Optional[BaseSentimentProvider] = None,
        fundamental_provider: Optional[BaseFundamentalProvider] = None,
    ):
        self.strategy = strategy
        self.generator = StrategySignalGenerator(strategy)
        self.price_provider = price_provider
        self.sentiment_provider = sentiment_provider
        self.fundamental_provider = fundamental_provider

    async def _fetch_context(self, symbol: str):
        sentiment = None
        if self.sentiment_provider is not None and self.strategy.sentiment.enabled:
            sentiment = await self.sentiment_provider.fetch_sentiment(symbol)

        fundamentals = None
        if self.fundamental_provider is not None and self.strategy.fundamental is not None:
            fundamentals = await self.fundamental_provider.fetch_fundamentals(symbol)

        return sentiment, fundamentals

    async def analyze_symbol(self, symbol: str) -> Dict[str, Any]:
        """
        Evaluate the latest bar for a symbol.

        Args:
            symbol: Stock symbol to analyze

        Returns:
            Analysis results dictionary, with an ``error`` key when data could not be loaded
        """
        try:
            bars = await self.price_provider.fetch_bars(symbol)
        except DataProviderError as e:
            logger.warning("price_fetch_failed", symbol=symbol, error=str(e))
            return {"symbol": symbol, "error": str(e)}

        sentiment, fundamentals = await self._fetch_context(symbol)
        evaluation = self.generator.evaluate(bars, sentiment, fundamentals)

        logger.info(
            "symbol_evaluated",
            symbol=symbol,
            action=evaluation.combined.action.value,
            score=evaluation.combined.score,
        )
        return {"symbol": symbol, "evaluation": evaluation.to_dict()}

    async def replay_symbol(self, symbol: str, start: Optional[date] = None) -> Dict[str, Any]:
        """
        Evaluate every bar of a symbol's history from ``start`` onwards.

        The current sentiment aggregate is not replayed; historical sentiment
        has to be supplied per date through ``StrategySignalGenerator.replay``.
        """
        try:
            bars = await self.price_provider.fetch_bars(symbol)
        except DataProviderError as e:
            logger.warning("price_fetch_failed", symbol=symbol, error=str(e))
            return {"symbol": symbol, "error": str(e)}

        _, fundamentals = await self._fetch_context(symbol)
        evaluations = self.generator.replay(bars, fundamentals=fundamentals, start=start)
        return {"symbol": symbol, "evaluations": [e.to_dict() for e in evaluations]}
