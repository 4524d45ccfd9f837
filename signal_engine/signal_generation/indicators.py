"""
Stateless technical indicators over a series of closing prices.

Every function takes closes ordered oldest first. When the series is too
short for the requested window the scalar functions return ``None`` and the
series functions return an empty list; callers must treat ``None`` as
"cannot evaluate" rather than as a number.
"""

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
import talib

from .core import IndicatorPoint

DEFAULT_RSI_PERIOD = 14
# TA-Lib rejects RSI periods below 2.
MIN_RSI_PERIOD = 2


def _check_period(period: int, minimum: int = 1) -> None:
    if period < minimum:
        raise ValueError(f"Indicator period must be at least {minimum}, got {period}")


def _as_array(prices: Sequence[float]) -> np.ndarray:
    return np.asarray(prices, dtype=np.float64)


def _no_losses_so_far(close: np.ndarray) -> np.ndarray:
    """
    For each index, whether no price change up to that index was negative.

    Wilder smoothing keeps the average loss positive once any loss is seen,
    so this marks exactly the points where the smoothed average loss is zero.
    TA-Lib reports 0 when both averages are zero; those points are 100 here.
    """
    losses = np.concatenate(([0], np.cumsum(np.diff(close) < 0)))
    return losses == 0


def rsi(prices: Sequence[float], period: int = DEFAULT_RSI_PERIOD) -> Optional[float]:
    """
    Relative Strength Index using Wilder's smoothing (``talib.RSI``).

    The first average gain/loss is the simple mean over the first ``period``
    price changes; every later change is folded in with
    ``avg = (avg * (period - 1) + value) / period``.

    Args:
        prices: Closing prices, oldest first.
        period: Lookback period.

    Returns:
        RSI in [0, 100], exactly 100 when the smoothed average loss is zero,
        or None when fewer than ``period + 1`` prices are available.
    """
    _check_period(period, MIN_RSI_PERIOD)
    if len(prices) < period + 1:
        return None

    close = _as_array(prices)
    if _no_losses_so_far(close)[-1]:
        return 100.0
    return float(talib.RSI(close, timeperiod=period)[-1])


def rsi_series(prices: Sequence[float], period: int = DEFAULT_RSI_PERIOD) -> List[IndicatorPoint]:
    """
    RSI at every index where it can be computed.

    The first point sits at index ``period``; the last point equals
    ``rsi(prices, period)``.
    """
    _check_period(period, MIN_RSI_PERIOD)
    if len(prices) < period + 1:
        return []

    close = _as_array(prices)
    values = talib.RSI(close, timeperiod=period)
    no_losses = _no_losses_so_far(close)
    return [
        IndicatorPoint(index=i, value=100.0 if no_losses[i] else float(values[i]))
        for i in range(period, len(close))
    ]


def _rolling_mean(prices: Sequence[float], period: int) -> pd.Series:
    return pd.Series(_as_array(prices)).rolling(window=period).mean()


def sma(prices: Sequence[float], period: int) -> Optional[float]:
    """
    Simple moving average of the most recent ``period`` prices.

    Returns:
        The arithmetic mean, or None when fewer than ``period`` prices are available.
    """
    _check_period(period)
    if len(prices) < period:
        return None
    return float(_rolling_mean(prices, period).iloc[-1])


def sma_series(prices: Sequence[float], period: int) -> List[IndicatorPoint]:
    """SMA at every window end, starting at index ``period - 1``."""
    _check_period(period)
    if len(prices) < period:
        return []

    means = _rolling_mean(prices, period)
    return [IndicatorPoint(index=end, value=float(means.iloc[end])) for end in range(period - 1, len(prices))]
