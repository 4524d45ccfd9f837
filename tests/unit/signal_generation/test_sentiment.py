"""
Unit tests for the news sentiment signal generator.
"""

import pytest

from signal_engine.config.strategy import SentimentConfig
from signal_engine.signal_generation.core import SentimentData, SignalAction
from signal_engine.signal_generation.sentiment import (
    MIN_ARTICLES_FOR_SIGNAL,
    NO_DATA_REASON,
    generate_sentiment_signal,
)


@pytest.fixture
def config() -> SentimentConfig:
    return SentimentConfig(enabled=True, news_score_threshold=65)


@pytest.mark.unit
class TestSentimentSignal:
    """Test sentiment thresholds and the article-count gate."""

    def test_bullish_above_threshold(self, config, bullish_sentiment):
        signal = generate_sentiment_signal(bullish_sentiment, config)

        assert signal.action == SignalAction.BUY
        assert signal.score == 80.0
        assert signal.reasons == (
            "Bullish sentiment (80.0 >= 65)",
            "Based on 10 articles, label: bullish",
        )
        assert signal.sentiment_label == "bullish"
        assert signal.article_count == 10
        assert signal.has_data is True

    def test_bearish_at_sell_threshold(self, config):
        signal = generate_sentiment_signal(SentimentData(35.0, "bearish", 5), config)

        assert signal.action == SignalAction.SELL
        assert signal.reasons[0] == "Bearish sentiment (35.0 <= 35)"

    def test_buy_threshold_is_inclusive(self, config):
        signal = generate_sentiment_signal(SentimentData(65.0, "bullish", 4), config)
        assert signal.action == SignalAction.BUY

    def test_between_thresholds_holds(self, config):
        signal = generate_sentiment_signal(SentimentData(50.0, "neutral", 8), config)

        assert signal.action == SignalAction.HOLD
        assert signal.reasons[0] == "Neutral sentiment (50.0)"

    @pytest.mark.parametrize("count", [0, 1, MIN_ARTICLES_FOR_SIGNAL - 1])
    def test_too_few_articles_hold_regardless_of_score(self, config, count):
        signal = generate_sentiment_signal(SentimentData(99.0, "bullish", count), config)

        assert signal.action == SignalAction.HOLD
        assert signal.score == 50.0
        assert signal.reasons == (f"Insufficient articles ({count} < 3 required)",)
        assert signal.sentiment_label == "neutral"
        assert signal.has_data is False

    def test_no_data_holds(self, config):
        signal = generate_sentiment_signal(None, config)

        assert signal.action == SignalAction.HOLD
        assert signal.score == 50.0
        assert signal.reasons == (NO_DATA_REASON,)
        assert signal.article_count == 0
        assert signal.has_data is False

    def test_out_of_range_score_is_clamped(self, config):
        signal = generate_sentiment_signal(SentimentData(130.0, "bullish", 6), config)

        assert signal.score == 100.0
        assert signal.action == SignalAction.BUY

    def test_default_threshold_splits_at_50(self):
        """With T=50 both thresholds are 50; there is no hold band."""
        config = SentimentConfig()
        assert config.sell_threshold == 50.0
        assert generate_sentiment_signal(SentimentData(50.1, "neutral", 3), config).action == SignalAction.BUY
        assert generate_sentiment_signal(SentimentData(49.9, "neutral", 3), config).action == SignalAction.SELL

    def test_buy_wins_the_tie_at_50(self):
        signal = generate_sentiment_signal(SentimentData(50.0, "neutral", 3), SentimentConfig())

        assert signal.action == SignalAction.BUY
        assert signal.reasons[0] == "Bullish sentiment (50.0 >= 50)"
