"""
Sentiment signal generator: maps aggregate news sentiment to an action.
"""

import logging
from typing import TYPE_CHECKING, Optional

from .core import NEUTRAL_SCORE, SentimentData, SentimentSignal, SignalAction, clamp_score, format_number

if TYPE_CHECKING:
    from ..config.strategy import SentimentConfig

logger = logging.getLogger(__name__)

# Fewer articles than this is too small a sample to move a decision.
MIN_ARTICLES_FOR_SIGNAL = 3

NO_DATA_REASON = "No sentiment data available"


def generate_sentiment_signal(data: Optional[SentimentData], config: "SentimentConfig") -> SentimentSignal:
    """
    Classify aggregate news sentiment.

    Buy at or above ``news_score_threshold``, sell at or below
    ``100 - news_score_threshold``, hold in between. Absent data and samples
    under the minimum article count hold at 50 and are flagged as having no
    data, so the combiner leaves them out.
    """
    if data is None:
        return SentimentSignal(
            action=SignalAction.HOLD,
            score=NEUTRAL_SCORE,
            reasons=(NO_DATA_REASON,),
            sentiment_label="neutral",
            article_count=0,
            has_data=False,
        )

    if data.article_count < MIN_ARTICLES_FOR_SIGNAL:
        logger.debug("Ignoring sentiment based on %d articles", data.article_count)
        return SentimentSignal(
            action=SignalAction.HOLD,
            score=NEUTRAL_SCORE,
            reasons=(f"Insufficient articles ({data.article_count} < {MIN_ARTICLES_FOR_SIGNAL} required)",),
            sentiment_label="neutral",
            article_count=data.article_count,
            has_data=False,
        )

    score = clamp_score(float(data.score))
    buy_threshold = config.news_score_threshold
    sell_threshold = config.sell_threshold

    if score >= buy_threshold:
        action = SignalAction.BUY
        rationale = f"Bullish sentiment ({score:.1f} >= {format_number(buy_threshold)})"
    elif score <= sell_threshold:
        action = SignalAction.SELL
        rationale = f"Bearish sentiment ({score:.1f} <= {format_number(sell_threshold)})"
    else:
        action = SignalAction.HOLD
        rationale = f"Neutral sentiment ({score:.1f})"

    return SentimentSignal(
        action=action,
        score=score,
        reasons=(rationale, f"Based on {data.article_count} articles, label: {data.label}"),
        sentiment_label=data.label,
        article_count=data.article_count,
    )
