"""
Pytest configuration and shared fixtures for the signal engine test suite.

This module provides common fixtures and configuration for all test categories,
ensuring consistent price series and strategies across the suite.
"""

from datetime import date, timedelta
from typing import Callable, List, Sequence

import numpy as np
import pandas as pd
import pytest

from signal_engine.config.strategy import StrategyConfig, TechnicalConfig
from signal_engine.signal_generation.core import PriceBar, SentimentData


# ==============================
# Pytest Configuration
# ==============================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for component interactions"
    )


# ==============================
# Price Series
# ==============================

START_DATE = date(2024, 1, 1)

# Fifteen falling closes then a five-bar rebound: RSI(14) ~21.3, SMA5 106.2 > SMA10 106.1.
RECOVERY_CLOSES = [130.0 - 2 * i for i in range(15)] + [106.0, 105.0, 107.0, 106.0, 107.0]

# Rising zigzag: RSI(14) ~69.4 (neutral), SMA5 109.4 > SMA10 108.
ZIGZAG_CLOSES = [float(100 + i // 2 if i % 2 == 0 else 102 + i // 2) for i in range(20)]

# Straight decline from 120 to 101: RSI 0, death cross and deep value.
DECLINE_CLOSES = [float(120 - i) for i in range(20)]


def build_bars(closes: Sequence[float], start: date = START_DATE) -> List[PriceBar]:
    """Build consecutive daily bars from closing prices."""
    return [
        PriceBar(
            date=start + timedelta(days=i),
            open=close,
            high=close + 1.0,
            low=close - 1.0,
            close=close,
            volume=1_000_000.0,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_bars() -> Callable[..., List[PriceBar]]:
    """Factory turning a list of closes into daily price bars."""
    return build_bars


@pytest.fixture
def recovery_bars() -> List[PriceBar]:
    return build_bars(RECOVERY_CLOSES)


@pytest.fixture
def zigzag_bars() -> List[PriceBar]:
    return build_bars(ZIGZAG_CLOSES)


@pytest.fixture
def decline_bars() -> List[PriceBar]:
    return build_bars(DECLINE_CLOSES)


@pytest.fixture
def sample_ohlc_data() -> pd.DataFrame:
    """Create sample OHLCV data for testing."""
    np.random.seed(42)  # For reproducible tests

    dates = pd.date_range(start='2023-01-01', periods=260, freq='D')

    base_price = 100
    trend = np.linspace(0, 20, 260)
    noise = np.random.normal(0, 2, 260)
    close_prices = base_price + trend + noise

    high = close_prices + np.random.uniform(0, 2, 260)
    low = close_prices - np.random.uniform(0, 2, 260)
    open_prices = low + np.random.uniform(0, high - low)
    volume = np.random.uniform(1000000, 5000000, 260)

    return pd.DataFrame({
        'open': open_prices,
        'high': high,
        'low': low,
        'close': close_prices,
        'volume': volume
    }, index=dates)


# ==============================
# Strategy Fixtures
# ==============================

@pytest.fixture
def short_technical_config() -> TechnicalConfig:
    """RSI(14) with SMA 5/10 crossovers and no trend rule, so 20 bars are enough."""
    return TechnicalConfig(
        rsi_period=14,
        rsi_oversold=30,
        rsi_overbought=70,
        sma_short_period=5,
        sma_long_period=10,
        sma_trend_period=None,
    )


@pytest.fixture
def technical_only_strategy(short_technical_config) -> StrategyConfig:
    return StrategyConfig(name="Technical only", technical=short_technical_config, fundamental=None)


@pytest.fixture
def sentiment_strategy(short_technical_config) -> StrategyConfig:
    return StrategyConfig(
        name="Technical + sentiment",
        technical=short_technical_config,
        fundamental=None,
        sentiment={"enabled": True, "news_score_threshold": 65},
    )


@pytest.fixture
def bullish_sentiment() -> SentimentData:
    return SentimentData(score=80.0, label="bullish", article_count=10)
