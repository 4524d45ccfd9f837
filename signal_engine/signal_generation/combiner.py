"""
Signal combiner: merges per-category results into one trading decision.

The combiner applies the same policy as the technical generator, one level
up: each contributing category casts a buy or sell vote through its action,
and the weighted average of the category scores takes the place of the
single score.
"""

from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from ..utils.logging import get_logger
from .core import (
    NEUTRAL_SCORE,
    CombinedSignal,
    FundamentalSignal,
    SentimentSignal,
    SignalAction,
    SignalCategory,
    SignalResult,
    TechnicalSignal,
    clamp_score,
    decide_action,
)

if TYPE_CHECKING:
    from ..config.strategy import CombinerConfig, SignalWeights

logger = get_logger(__name__)

NO_DATA_REASON = "No signal data available"

# Categories are always visited in this order, whatever the input mapping order.
CATEGORY_ORDER = (SignalCategory.TECHNICAL, SignalCategory.FUNDAMENTAL, SignalCategory.SENTIMENT)


class SignalCombiner:
    """
    Combines category signals using weighted scoring and vote counting.

    A category contributes only when its result is present, reports
    ``has_data`` and has a positive weight. Non-contributing categories are
    left out of both the weighted average and the vote tallies, and the
    remaining weights are renormalised to sum to 100.
    """

    def __init__(self, weights: "SignalWeights", config: Optional["CombinerConfig"] = None):
        """
        Initialize the signal combiner.

        Args:
            weights: Relative weight of each category.
            config: Veto settings; vetoes are off when omitted.
        """
        self.weights = weights
        self.config = config

    def combine(self, signals: Mapping[SignalCategory, Optional[SignalResult]]) -> CombinedSignal:
        """
        Combine category results into a single decision.

        Args:
            signals: Result per category; a missing key or None means the
                category was not evaluated.

        Returns:
            CombinedSignal with reasons prefixed by category.
        """
        contributing = self._contributing(signals)
        if not contributing:
            # Keep each evaluated category's own explanation, e.g. insufficient history.
            excluded = [
                f"{category.reason_prefix} {reason}"
                for category in CATEGORY_ORDER
                if signals.get(category) is not None
                for reason in signals[category].reasons
            ]
            return CombinedSignal(
                action=SignalAction.HOLD,
                score=NEUTRAL_SCORE,
                reasons=(NO_DATA_REASON, *excluded),
            )

        normalised = self._normalise_weights(contributing)

        total_score = 0.0
        buy_signals = 0
        sell_signals = 0
        reasons: List[str] = []
        for category, result in contributing:
            total_score += result.score * normalised[category.value] / 100
            if result.action == SignalAction.BUY:
                buy_signals += 1
            elif result.action == SignalAction.SELL:
                sell_signals += 1
            reasons.extend(f"{category.reason_prefix} {reason}" for reason in result.reasons)

        total_score = clamp_score(total_score)
        action = decide_action(total_score, buy_signals, sell_signals)

        veto_reason = None
        if action == SignalAction.BUY:
            veto_reason = self._veto_reason(dict(contributing))
            if veto_reason:
                logger.info("combined_buy_vetoed", reason=veto_reason, score=total_score)
                action = SignalAction.HOLD
                reasons.append(f"[Veto] {veto_reason}")

        return CombinedSignal(
            action=action,
            score=total_score,
            reasons=tuple(reasons),
            category_scores={category.value: result.score for category, result in contributing},
            category_actions={category.value: result.action.value for category, result in contributing},
            category_weights=normalised,
            buy_signals=buy_signals,
            sell_signals=sell_signals,
            vetoed=veto_reason is not None,
            veto_reason=veto_reason,
        )

    def _contributing(
        self, signals: Mapping[SignalCategory, Optional[SignalResult]]
    ) -> List[Tuple[SignalCategory, SignalResult]]:
        contributing = []
        for category in CATEGORY_ORDER:
            result = signals.get(category)
            if result is None or not getattr(result, "has_data", True):
                continue
            if self.weights.for_category(category) <= 0:
                continue
            contributing.append((category, result))
        return contributing

    def _normalise_weights(self, contributing: List[Tuple[SignalCategory, SignalResult]]) -> Dict[str, float]:
        total = sum(self.weights.for_category(category) for category, _ in contributing)
        return {
            category.value: self.weights.for_category(category) / total * 100
            for category, _ in contributing
        }

    def _veto_reason(self, contributing: Dict[SignalCategory, SignalResult]) -> Optional[str]:
        """Return the first veto that blocks a buy, or None."""
        if self.config is None or not self.config.vetoes_enabled:
            return None

        fundamental = contributing.get(SignalCategory.FUNDAMENTAL)
        if isinstance(fundamental, FundamentalSignal) and fundamental.score <= self.config.fundamental_veto_score:
            return "Fundamental score critically low - veto buy"

        technical = contributing.get(SignalCategory.TECHNICAL)
        if isinstance(technical, TechnicalSignal) and technical.rsi_value > self.config.rsi_veto_level:
            return "RSI overbought - veto buy"

        sentiment = contributing.get(SignalCategory.SENTIMENT)
        if isinstance(sentiment, SentimentSignal) and sentiment.sentiment_label == "bearish":
            return "Bearish sentiment - veto buy"

        return None


def combine_signals(
    signals: Mapping[SignalCategory, Optional[SignalResult]],
    weights: "SignalWeights",
    config: Optional["CombinerConfig"] = None,
) -> CombinedSignal:
    """Combine category results with the given weights; see ``SignalCombiner``."""
    return SignalCombiner(weights, config).combine(signals)
