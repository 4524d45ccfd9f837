"""
Trade signal engine.

Scores price history and news sentiment into ``buy``/``sell``/``hold``
decisions shared by the backtester and the live trading bot.
"""

from .config.strategy import (
    CombinerConfig,
    FundamentalConfig,
    SentimentConfig,
    SignalWeights,
    StrategyConfig,
    TechnicalConfig,
)
from .exceptions import DataProviderError, PriceHistoryError, SignalEngineError
from .signal_generation import (
    CombinedSignal,
    Evaluation,
    FundamentalData,
    PriceBar,
    SentimentData,
    SignalAction,
    StrategySignalGenerator,
    combine_signals,
    evaluate,
    generate_fundamental_signal,
    generate_sentiment_signal,
    generate_technical_signal,
    replay,
)

__all__ = [
    "CombinerConfig",
    "FundamentalConfig",
    "SentimentConfig",
    "SignalWeights",
    "StrategyConfig",
    "TechnicalConfig",
    "DataProviderError",
    "PriceHistoryError",
    "SignalEngineError",
    "CombinedSignal",
    "Evaluation",
    "FundamentalData",
    "PriceBar",
    "SentimentData",
    "SignalAction",
    "StrategySignalGenerator",
    "combine_signals",
    "evaluate",
    "generate_fundamental_signal",
    "generate_sentiment_signal",
    "generate_technical_signal",
    "replay",
]

__version__ = "1.0.0"
