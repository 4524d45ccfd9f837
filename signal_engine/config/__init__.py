"""
Configuration for the signal engine: process settings and strategy definitions.
"""

from .strategy import (
    CombinerConfig,
    FundamentalConfig,
    SentimentConfig,
    SignalWeights,
    StrategyConfig,
    TechnicalConfig,
)

__all__ = [
    "CombinerConfig",
    "FundamentalConfig",
    "SentimentConfig",
    "SignalWeights",
    "StrategyConfig",
    "TechnicalConfig",
]
