"""
Core data structures for signal generation.

This module defines the value types shared by every signal generator, the
combiner and both call sites (backtest replay and live evaluation): price
bars, sentiment and fundamental snapshots, and the immutable per-category
signal results.
"""

from dataclasses import dataclass, field, fields
from datetime import date as Date
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class SignalAction(str, Enum):
    """Discrete trading action produced by a signal generator."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class SignalCategory(str, Enum):
    """Category of a signal result, used for weighting and reason prefixes."""
    TECHNICAL = "technical"
    FUNDAMENTAL = "fundamental"
    SENTIMENT = "sentiment"

    @property
    def reason_prefix(self) -> str:
        return _REASON_PREFIXES[self]


_REASON_PREFIXES = {
    SignalCategory.TECHNICAL: "[Tech]",
    SignalCategory.FUNDAMENTAL: "[Fund]",
    SignalCategory.SENTIMENT: "[Sent]",
}

# Buy/sell tally and score cutoffs shared by the technical generator and the combiner.
MIN_AGREEING_SIGNALS = 2
BUY_SCORE_THRESHOLD = 70.0
SELL_SCORE_THRESHOLD = 30.0
NEUTRAL_SCORE = 50.0


def clamp_score(score: float) -> float:
    """Clamp a score to the closed range [0, 100]."""
    return max(0.0, min(100.0, score))


def decide_action(score: float, buy_signals: int, sell_signals: int) -> SignalAction:
    """
    Classify a score and its buy/sell tallies into an action.

    The buy side is checked first; on each side the tally route and the
    score route are independently sufficient.
    """
    if buy_signals >= MIN_AGREEING_SIGNALS or score >= BUY_SCORE_THRESHOLD:
        return SignalAction.BUY
    if sell_signals >= MIN_AGREEING_SIGNALS or score <= SELL_SCORE_THRESHOLD:
        return SignalAction.SELL
    return SignalAction.HOLD


def format_number(value: float) -> str:
    """Render a configured threshold without a trailing ``.0``."""
    return f"{value:g}"


@dataclass(frozen=True)
class PriceBar:
    """
    A single OHLCV bar.

    Attributes:
        date: Calendar date of the bar.
        open: Opening price.
        high: Highest price.
        low: Lowest price.
        close: Closing price, the only field read by the indicators.
        volume: Traded volume.
    """
    date: Date
    open: float
    high: float
    low: float
    close: float
    volume: float


def closes(bars: Sequence[PriceBar]) -> List[float]:
    """Closing prices of the bars, oldest first."""
    return [bar.close for bar in bars]


@dataclass(frozen=True)
class SentimentData:
    """
    Aggregate news sentiment for a symbol.

    Attributes:
        score: Normalised sentiment score, 0 (bearish) to 100 (bullish).
        label: Provider label such as ``bullish``, ``neutral`` or ``bearish``.
        article_count: Number of articles the aggregate is based on.
    """
    score: float
    label: str
    article_count: int


@dataclass(frozen=True)
class FundamentalData:
    """Fundamental metrics for a symbol; any metric may be unknown."""
    pe_ratio: Optional[float] = None
    eps: Optional[float] = None
    eps_growth: Optional[float] = None
    beta: Optional[float] = None
    dividend_yield: Optional[float] = None
    market_cap: Optional[float] = None


@dataclass(frozen=True)
class IndicatorPoint:
    """An indicator value at a given index of the input series."""
    index: int
    value: float


@dataclass(frozen=True)
class SignalResult:
    """
    Base class for per-category signal results.

    Attributes:
        action: The classified action.
        score: Score in [0, 100]; 50 is neutral.
        reasons: Human-readable reasons in rule-evaluation order.
    """
    action: SignalAction
    score: float
    reasons: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-serialisable dictionary."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            result[f.name] = value
        return result


@dataclass(frozen=True)
class TechnicalSignal(SignalResult):
    """Technical analysis result; indicator fields never hold an unavailable value."""
    rsi_value: float
    sma_short: float
    sma_long: float
    sma_trend: float
    current_price: float
    buy_signals: int = 0
    sell_signals: int = 0
    has_data: bool = True


@dataclass(frozen=True)
class SentimentSignal(SignalResult):
    """News sentiment result."""
    sentiment_label: str
    article_count: int
    has_data: bool = True


@dataclass(frozen=True)
class FundamentalSignal(SignalResult):
    """Fundamental analysis result."""
    pe_ratio: Optional[float]
    eps: Optional[float]
    eps_growth: Optional[float]
    beta: Optional[float]
    has_data: bool = True


@dataclass(frozen=True)
class CombinedSignal(SignalResult):
    """
    Combined decision across categories.

    Attributes:
        category_scores: Score of each contributing category.
        category_actions: Action of each contributing category.
        category_weights: Normalised weight (percent) of each contributing category.
        buy_signals: Number of contributing categories voting buy.
        sell_signals: Number of contributing categories voting sell.
        vetoed: Whether a veto downgraded a buy to hold.
        veto_reason: Reason for the veto, if any.
    """
    category_scores: Dict[str, float] = field(default_factory=dict)
    category_actions: Dict[str, str] = field(default_factory=dict)
    category_weights: Dict[str, float] = field(default_factory=dict)
    buy_signals: int = 0
    sell_signals: int = 0
    vetoed: bool = False
    veto_reason: Optional[str] = None
