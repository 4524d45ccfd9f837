"""
Signal scoring engine.

Deterministic, side-effect free functions that turn OHLCV history, news
sentiment and fundamental metrics into 0-100 scores, ordered reasons and a
``buy``/``sell``/``hold`` action. Identical inputs always produce identical
results, so a backtest replay reproduces the decisions a live bot made.
"""

from .core import (
    CombinedSignal,
    FundamentalData,
    FundamentalSignal,
    IndicatorPoint,
    PriceBar,
    SentimentData,
    SentimentSignal,
    SignalAction,
    SignalCategory,
    SignalResult,
    TechnicalSignal,
    decide_action,
)
from .indicators import rsi, rsi_series, sma, sma_series
from .technical import generate_technical_signal
from .sentiment import MIN_ARTICLES_FOR_SIGNAL, generate_sentiment_signal
from .fundamental import generate_fundamental_signal
from .combiner import SignalCombiner, combine_signals
from .signal_generator import Evaluation, StrategySignalGenerator, evaluate, replay

__all__ = [
    # Core types
    "CombinedSignal",
    "FundamentalData",
    "FundamentalSignal",
    "IndicatorPoint",
    "PriceBar",
    "SentimentData",
    "SentimentSignal",
    "SignalAction",
    "SignalCategory",
    "SignalResult",
    "TechnicalSignal",
    "decide_action",
    # Indicators
    "rsi",
    "rsi_series",
    "sma",
    "sma_series",
    # Generators
    "generate_technical_signal",
    "generate_sentiment_signal",
    "generate_fundamental_signal",
    "MIN_ARTICLES_FOR_SIGNAL",
    # Combination
    "SignalCombiner",
    "combine_signals",
    "Evaluation",
    "StrategySignalGenerator",
    "evaluate",
    "replay",
]
