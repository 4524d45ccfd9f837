"""
Technical signal generator: RSI + SMA analysis of a price series.
"""

import logging
from typing import TYPE_CHECKING, List, Sequence

from .core import (
    NEUTRAL_SCORE,
    PriceBar,
    SignalAction,
    TechnicalSignal,
    clamp_score,
    closes,
    decide_action,
    format_number,
)
from .indicators import rsi, sma

if TYPE_CHECKING:
    from ..config.strategy import TechnicalConfig

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_REASON = "Insufficient data for technical analysis"

# RSI below this (but not oversold) nudges the score up without casting a vote.
RSI_NEUTRAL_LOW = 45.0
# Deep value requires price under the long SMA and RSI below this.
RSI_DEEP_VALUE = 40.0


def generate_technical_signal(prices: Sequence[PriceBar], config: "TechnicalConfig") -> TechnicalSignal:
    """
    Score a price series with RSI and simple moving averages.

    Rules are applied in a fixed order starting from a score of 50:

    1. RSI oversold: +20, buy vote.
    2. else RSI overbought: -20, sell vote.
    3. else RSI below 45: +5.
    4. Short SMA above long SMA (golden cross): +15, buy vote;
       otherwise (death cross): -15, sell vote.
    5. Price below the long SMA with RSI below 40 (deep value): +10, buy vote.
    6. Price above the trend SMA, when one is available: +5.

    Args:
        prices: OHLCV bars, oldest first. Only closes are read.
        config: Technical thresholds.

    Returns:
        TechnicalSignal. When RSI or either crossover SMA cannot be computed
        the result is a ``hold`` at 50 with ``has_data`` False.
    """
    close_prices = closes(prices)
    current_price = close_prices[-1] if close_prices else 0.0

    rsi_value = rsi(close_prices, config.rsi_period)
    sma_short = sma(close_prices, config.sma_short_period)
    sma_long = sma(close_prices, config.sma_long_period)
    sma_trend = sma(close_prices, config.sma_trend_period) if config.sma_trend_period else None

    if rsi_value is None or sma_short is None or sma_long is None:
        logger.debug("Insufficient history for technical signal (%d bars)", len(close_prices))
        return TechnicalSignal(
            action=SignalAction.HOLD,
            score=NEUTRAL_SCORE,
            reasons=(INSUFFICIENT_DATA_REASON,),
            rsi_value=rsi_value if rsi_value is not None else NEUTRAL_SCORE,
            sma_short=sma_short if sma_short is not None else current_price,
            sma_long=sma_long if sma_long is not None else current_price,
            sma_trend=sma_trend if sma_trend is not None else current_price,
            current_price=current_price,
            has_data=False,
        )

    score = NEUTRAL_SCORE
    reasons: List[str] = []
    buy_signals = 0
    sell_signals = 0

    if rsi_value < config.rsi_oversold:
        score += 20
        buy_signals += 1
        reasons.append(f"RSI oversold ({rsi_value:.1f} < {format_number(config.rsi_oversold)})")
    elif rsi_value > config.rsi_overbought:
        score -= 20
        sell_signals += 1
        reasons.append(f"RSI overbought ({rsi_value:.1f} > {format_number(config.rsi_overbought)})")
    elif rsi_value < RSI_NEUTRAL_LOW:
        score += 5
        reasons.append(f"RSI neutral-low ({rsi_value:.1f})")

    if sma_short > sma_long:
        score += 15
        buy_signals += 1
        reasons.append(f"Golden cross (SMA{config.sma_short_period} > SMA{config.sma_long_period})")
    else:
        score -= 15
        sell_signals += 1
        reasons.append(f"Death cross (SMA{config.sma_short_period} < SMA{config.sma_long_period})")

    if current_price < sma_long and rsi_value < RSI_DEEP_VALUE:
        score += 10
        buy_signals += 1
        reasons.append(f"Deep value: price below SMA{config.sma_long_period} with low RSI")

    if sma_trend is not None and current_price > sma_trend:
        score += 5
        reasons.append(f"Price above SMA{config.sma_trend_period} trend")

    score = clamp_score(score)
    action = decide_action(score, buy_signals, sell_signals)

    logger.debug(
        "Technical signal %s (score=%.1f, buy=%d, sell=%d)",
        action.value, score, buy_signals, sell_signals,
    )

    return TechnicalSignal(
        action=action,
        score=score,
        reasons=tuple(reasons),
        rsi_value=rsi_value,
        sma_short=sma_short,
        sma_long=sma_long,
        sma_trend=sma_trend if sma_trend is not None else current_price,
        current_price=current_price,
        buy_signals=buy_signals,
        sell_signals=sell_signals,
    )
