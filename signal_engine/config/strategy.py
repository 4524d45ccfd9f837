"""
Strategy configuration for the signal engine.

A strategy definition is built and validated once, then passed unchanged to
every evaluation call. The models are frozen so a configuration can be shared
between concurrent evaluations. Field names are snake_case; the camelCase
names used by stored strategy JSON are accepted as aliases.
"""
import json
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from ..signal_generation.core import SignalCategory


class _StrategyModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TechnicalConfig(_StrategyModel):
    """Thresholds for the RSI + SMA technical signal."""

    rsi_period: int = Field(default=14, ge=2)
    rsi_oversold: float = Field(default=30.0, ge=0.0, le=100.0)
    rsi_overbought: float = Field(default=70.0, ge=0.0, le=100.0)
    sma_short_period: int = Field(default=50, ge=1)
    sma_long_period: int = Field(default=200, ge=1)
    # None disables the trend rule.
    sma_trend_period: Optional[int] = Field(default=20, ge=1)

    @model_validator(mode="after")
    def _check_ordering(self) -> "TechnicalConfig":
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError("rsi_oversold must be below rsi_overbought")
        if self.sma_short_period >= self.sma_long_period:
            raise ValueError("sma_short_period must be shorter than sma_long_period")
        return self


class SentimentConfig(_StrategyModel):
    """
    Thresholds for the news sentiment signal.

    The sell threshold is always ``100 - news_score_threshold``; requiring the
    buy threshold to be at least 50 keeps the two bands from overlapping.
    """

    enabled: bool = False
    news_score_threshold: float = Field(default=50.0, ge=50.0, le=100.0)

    @property
    def sell_threshold(self) -> float:
        return 100.0 - self.news_score_threshold


class FundamentalConfig(_StrategyModel):
    """Acceptance ranges for the fundamental signal."""

    pe_ratio_min: float = 5.0
    pe_ratio_max: float = 35.0
    eps_growth_min: float = 0.0
    beta_max: float = Field(default=2.0, gt=0.0)
    dividend_yield_min: float = Field(default=0.0, ge=0.0)
    market_cap_min: float = Field(default=1_000_000_000, ge=0.0)

    @model_validator(mode="after")
    def _check_pe_range(self) -> "FundamentalConfig":
        if self.pe_ratio_min > self.pe_ratio_max:
            raise ValueError("pe_ratio_min must not exceed pe_ratio_max")
        return self


class SignalWeights(_StrategyModel):
    """Relative category weights; renormalised over the categories that have data."""

    technical: float = Field(default=40.0, ge=0.0)
    fundamental: float = Field(default=35.0, ge=0.0)
    sentiment: float = Field(default=25.0, ge=0.0)

    @model_validator(mode="after")
    def _check_not_all_zero(self) -> "SignalWeights":
        if self.technical + self.fundamental + self.sentiment <= 0:
            raise ValueError("at least one signal weight must be positive")
        return self

    def for_category(self, category: "SignalCategory") -> float:
        return getattr(self, category.value)


class CombinerConfig(_StrategyModel):
    """Optional buy vetoes applied after the combined action is decided."""

    vetoes_enabled: bool = False
    fundamental_veto_score: float = Field(default=20.0, ge=0.0, le=100.0)
    rsi_veto_level: float = Field(default=75.0, ge=0.0, le=100.0)


class StrategyConfig(_StrategyModel):
    """Complete strategy definition passed to every evaluation."""

    name: str = "My Strategy"
    description: str = ""
    symbols: Tuple[str, ...] = ()
    technical: TechnicalConfig = TechnicalConfig()
    fundamental: Optional[FundamentalConfig] = FundamentalConfig()
    sentiment: SentimentConfig = SentimentConfig()
    weights: SignalWeights = SignalWeights()
    combiner: CombinerConfig = CombinerConfig()

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "StrategyConfig":
        """
        Load and validate a strategy definition from a JSON file.

        Keys not modelled here (risk settings, initial capital and the like)
        belong to the order-execution side and are ignored.

        Raises:
            pydantic.ValidationError: If the definition is invalid.
        """
        with open(path, "r") as f:
            raw = json.load(f)
        return cls.model_validate(raw)
