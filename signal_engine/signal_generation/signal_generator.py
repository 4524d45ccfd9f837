"""
Strategy-level signal generation.

Runs the category generators configured by a strategy and combines their
results. The same entry points serve both call sites: ``evaluate`` scores the
latest snapshot for a live bot, and ``replay`` walks a price history bar by
bar for a backtest, seeing only data dated on or before each bar.
"""

from bisect import bisect_right
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Union

from ..utils.logging import get_logger
from .combiner import SignalCombiner
from .core import (
    CombinedSignal,
    FundamentalData,
    FundamentalSignal,
    PriceBar,
    SentimentData,
    SentimentSignal,
    SignalCategory,
    TechnicalSignal,
)
from .fundamental import generate_fundamental_signal
from .sentiment import generate_sentiment_signal
from .technical import generate_technical_signal

if TYPE_CHECKING:
    from ..config.strategy import StrategyConfig

logger = get_logger(__name__)

FundamentalsInput = Union[FundamentalData, Mapping[date, FundamentalData], None]


@dataclass(frozen=True)
class Evaluation:
    """
    All signals produced for one price snapshot.

    Attributes:
        date: Date of the latest bar evaluated, if any.
        technical: Technical result.
        fundamental: Fundamental result, or None when the strategy has no fundamental config.
        sentiment: Sentiment result, or None when sentiment is disabled.
        combined: The combined decision.
    """
    date: Optional[date]
    technical: TechnicalSignal
    fundamental: Optional[FundamentalSignal]
    sentiment: Optional[SentimentSignal]
    combined: CombinedSignal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat() if self.date else None,
            "technical": self.technical.to_dict(),
            "fundamental": self.fundamental.to_dict() if self.fundamental else None,
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
            "combined": self.combined.to_dict(),
        }


def _fundamentals_as_of(fundamentals: FundamentalsInput, as_of: Optional[date]) -> Optional[FundamentalData]:
    """Latest fundamentals reported on or before ``as_of``; static data applies to every date."""
    if fundamentals is None or isinstance(fundamentals, FundamentalData):
        return fundamentals
    if as_of is None:
        return None
    report_dates = sorted(fundamentals)
    position = bisect_right(report_dates, as_of)
    if position == 0:
        return None
    return fundamentals[report_dates[position - 1]]


class StrategySignalGenerator:
    """
    Evaluates price, sentiment and fundamental data against one strategy.

    Instances hold only the frozen strategy configuration, so a single
    generator can score any number of symbols, in any order or concurrently.
    """

    def __init__(self, strategy: "StrategyConfig"):
        self.strategy = strategy
        self.combiner = SignalCombiner(strategy.weights, strategy.combiner)

    def evaluate(
        self,
        bars: Sequence[PriceBar],
        sentiment: Optional[SentimentData] = None,
        fundamentals: FundamentalsInput = None,
    ) -> Evaluation:
        """
        Score the latest bar of a price history.

        Args:
            bars: Bars oldest first; the last bar is the one being decided on.
            sentiment: Sentiment aggregate, used only when the strategy enables sentiment.
            fundamentals: Static fundamentals, or report date -> fundamentals.

        Returns:
            Evaluation with every category result and the combined decision.
        """
        as_of = bars[-1].date if bars else None
        technical = generate_technical_signal(bars, self.strategy.technical)

        fundamental = None
        if self.strategy.fundamental is not None:
            fundamental = generate_fundamental_signal(
                _fundamentals_as_of(fundamentals, as_of), self.strategy.fundamental
            )

        sentiment_signal = None
        if self.strategy.sentiment.enabled:
            sentiment_signal = generate_sentiment_signal(sentiment, self.strategy.sentiment)

        combined = self.combiner.combine({
            SignalCategory.TECHNICAL: technical,
            SignalCategory.FUNDAMENTAL: fundamental,
            SignalCategory.SENTIMENT: sentiment_signal,
        })

        return Evaluation(
            date=as_of,
            technical=technical,
            fundamental=fundamental,
            sentiment=sentiment_signal,
            combined=combined,
        )

    def replay(
        self,
        bars: Sequence[PriceBar],
        sentiment_by_date: Optional[Mapping[date, SentimentData]] = None,
        fundamentals: FundamentalsInput = None,
        start: Optional[date] = None,
        min_history: int = 1,
    ) -> List[Evaluation]:
        """
        Evaluate every bar of a history in date order, as a backtest would.

        Each evaluation sees only the bars up to and including its own date,
        the sentiment recorded for that date, and the fundamentals reported
        on or before it.

        Args:
            bars: Full history, oldest first.
            sentiment_by_date: Sentiment aggregate per date, if any.
            fundamentals: Static fundamentals, or report date -> fundamentals.
            start: First date to emit an evaluation for; earlier bars are warmup only.
            min_history: Minimum number of visible bars before evaluating.

        Returns:
            One Evaluation per emitted bar.
        """
        sentiment_by_date = sentiment_by_date or {}
        evaluations = []
        for i, bar in enumerate(bars):
            if start is not None and bar.date < start:
                continue
            if i + 1 < min_history:
                continue
            evaluations.append(
                self.evaluate(bars[: i + 1], sentiment_by_date.get(bar.date), fundamentals)
            )

        logger.debug("replay_complete", bars=len(bars), evaluations=len(evaluations))
        return evaluations


def evaluate(
    bars: Sequence[PriceBar],
    strategy: "StrategyConfig",
    sentiment: Optional[SentimentData] = None,
    fundamentals: FundamentalsInput = None,
) -> Evaluation:
    """Score the latest bar of ``bars`` against ``strategy``."""
    return StrategySignalGenerator(strategy).evaluate(bars, sentiment, fundamentals)


def replay(
    bars: Sequence[PriceBar],
    strategy: "StrategyConfig",
    sentiment_by_date: Optional[Mapping[date, SentimentData]] = None,
    fundamentals: FundamentalsInput = None,
    start: Optional[date] = None,
    min_history: int = 1,
) -> List[Evaluation]:
    """Evaluate every bar of ``bars`` against ``strategy``; see ``StrategySignalGenerator.replay``."""
    return StrategySignalGenerator(strategy).replay(bars, sentiment_by_date, fundamentals, start, min_history)
