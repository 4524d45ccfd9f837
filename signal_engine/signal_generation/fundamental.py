"""
Fundamental signal generator: PE, EPS, EPS growth, beta, dividend and size checks.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from .core import NEUTRAL_SCORE, FundamentalData, FundamentalSignal, SignalAction, clamp_score, format_number

if TYPE_CHECKING:
    from ..config.strategy import FundamentalConfig

logger = logging.getLogger(__name__)

NO_DATA_REASON = "No fundamental data available"

BASE_SCORE = 30.0
BUY_SCORE = 50.0
SELL_SCORE = 25.0


def _pe_is_favorable(pe_ratio: Optional[float], config: "FundamentalConfig") -> bool:
    return pe_ratio is not None and pe_ratio > 0 and config.pe_ratio_min <= pe_ratio <= config.pe_ratio_max


def generate_fundamental_signal(data: Optional[FundamentalData], config: "FundamentalConfig") -> FundamentalSignal:
    """
    Score fundamental metrics.

    Starts from 30 and applies one adjustment per known metric. A buy needs a
    score of at least 50 together with positive EPS and a PE inside the
    configured range; a score of 25 or less is a sell.
    """
    if data is None:
        return FundamentalSignal(
            action=SignalAction.HOLD,
            score=NEUTRAL_SCORE,
            reasons=(NO_DATA_REASON,),
            pe_ratio=None,
            eps=None,
            eps_growth=None,
            beta=None,
            has_data=False,
        )

    score = BASE_SCORE
    reasons: List[str] = []
    pe_min = format_number(config.pe_ratio_min)
    pe_max = format_number(config.pe_ratio_max)

    pe = data.pe_ratio
    if pe is not None:
        if _pe_is_favorable(pe, config):
            score += 20
            reasons.append(f"PE favorable ({pe:.1f} in {pe_min}-{pe_max})")
        elif pe < 0:
            score -= 10
            reasons.append(f"Negative PE ({pe:.1f})")
        elif pe > config.pe_ratio_max:
            score -= 5
            reasons.append(f"PE too high ({pe:.1f} > {pe_max})")
        elif 0 < pe < config.pe_ratio_min:
            score -= 5
            reasons.append(f"PE suspiciously low ({pe:.1f} < {pe_min})")

    if data.eps is not None:
        if data.eps > 0:
            score += 15
            reasons.append(f"Positive EPS (${data.eps:.2f})")
        else:
            score -= 10
            reasons.append(f"Negative EPS (${data.eps:.2f})")

    if data.eps_growth is not None:
        if data.eps_growth >= config.eps_growth_min:
            score += 15
            reasons.append(f"EPS growth positive ({data.eps_growth * 100:.1f}%)")
        else:
            score -= 5
            reasons.append(f"EPS growth negative ({data.eps_growth * 100:.1f}%)")

    if data.beta is not None:
        if 0 < data.beta <= config.beta_max:
            score += 10
            reasons.append(f"Beta in range ({data.beta:.2f} <= {format_number(config.beta_max)})")
        elif data.beta > config.beta_max:
            score -= 5
            reasons.append(f"Beta too high ({data.beta:.2f} > {format_number(config.beta_max)})")

    if data.dividend_yield is not None and data.dividend_yield >= config.dividend_yield_min:
        score += 5
        reasons.append(f"Dividend yield favorable ({data.dividend_yield * 100:.2f}%)")

    if data.market_cap is not None and data.market_cap >= config.market_cap_min:
        score += 5
        reasons.append(f"Market cap sufficient (${data.market_cap / 1e9:.1f}B)")

    score = clamp_score(score)

    has_positive_eps = data.eps is not None and data.eps > 0
    if score >= BUY_SCORE and has_positive_eps and _pe_is_favorable(pe, config):
        action = SignalAction.BUY
    elif score <= SELL_SCORE:
        action = SignalAction.SELL
    else:
        action = SignalAction.HOLD

    logger.debug("Fundamental signal %s (score=%.1f)", action.value, score)

    return FundamentalSignal(
        action=action,
        score=score,
        reasons=tuple(reasons),
        pe_ratio=data.pe_ratio,
        eps=data.eps,
        eps_growth=data.eps_growth,
        beta=data.beta,
    )
