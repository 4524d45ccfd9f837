"""
Unit tests for the RSI and SMA indicators.
"""

import pytest

from signal_engine.signal_generation.indicators import rsi, rsi_series, sma, sma_series


def wilder_rsi(prices, period):
    """Reference Wilder RSI: seed with simple means, then smooth each later change."""
    changes = [b - a for a, b in zip(prices, prices[1:])]
    avg_gain = sum(c for c in changes[:period] if c > 0) / period
    avg_loss = sum(-c for c in changes[:period] if c < 0) / period
    for change in changes[period:]:
        avg_gain = (avg_gain * (period - 1) + max(change, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-change, 0.0)) / period
    if avg_loss == 0:
        return 100.0
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


@pytest.mark.unit
class TestRSI:
    """Test the Wilder-smoothed RSI."""

    def test_all_gains_is_100(self):
        assert rsi([float(p) for p in range(100, 120)], 14) == 100.0

    def test_all_losses_is_0(self):
        assert rsi([float(p) for p in range(120, 100, -1)], 14) == 0.0

    def test_flat_series_is_100(self):
        """No losses at all means the average loss is zero."""
        assert rsi([50.0] * 20, 14) == 100.0

    def test_insufficient_data_returns_none(self):
        assert rsi([float(p) for p in range(14)], 14) is None
        assert rsi([], 14) is None

    def test_minimum_length_is_period_plus_one(self):
        assert rsi([float(p) for p in range(15)], 14) is not None

    def test_oscillating_series_is_near_50(self):
        prices = [100.0 if i % 2 == 0 else 101.0 for i in range(30)]
        value = rsi(prices, 14)
        assert 40.0 < value < 60.0

    def test_matches_wilder_reference(self, sample_ohlc_data):
        closes = sample_ohlc_data["close"].tolist()
        for length in (15, 16, 30, 120, len(closes)):
            assert rsi(closes[:length], 14) == pytest.approx(wilder_rsi(closes[:length], 14), abs=1e-9)

    def test_gains_after_flat_start_is_100(self):
        assert rsi([50.0] * 10 + [51.0, 52.0, 52.0, 53.0, 54.0, 55.0], 14) == 100.0

    def test_wilder_smoothing(self):
        """Seed averages over the first period, then smooth each later change."""
        # Changes: +1, -1 seed (period 2) -> gain 0.5, loss 0.5; then +2 -> gain 1.25, loss 0.25.
        value = rsi([10.0, 11.0, 10.0, 12.0], 2)
        assert value == pytest.approx(100 - 100 / (1 + 1.25 / 0.25))

    def test_recovery_series_is_oversold(self):
        closes = [130.0 - 2 * i for i in range(15)] + [106.0, 105.0, 107.0, 106.0, 107.0]
        assert rsi(closes, 14) == pytest.approx(21.3, abs=0.1)

    def test_result_is_bounded(self, sample_ohlc_data):
        value = rsi(sample_ohlc_data["close"].tolist(), 14)
        assert 0.0 <= value <= 100.0

    @pytest.mark.parametrize("period", [1, 0, -3])
    def test_period_below_two_raises(self, period):
        with pytest.raises(ValueError, match="period"):
            rsi([1.0, 2.0, 3.0], period)


@pytest.mark.unit
class TestRSISeries:
    """Test the RSI series variant."""

    def test_first_point_at_period(self):
        points = rsi_series([float(p) for p in range(20)], 14)
        assert points[0].index == 14
        assert points[-1].index == 19
        assert len(points) == 6

    def test_last_point_matches_scalar(self, sample_ohlc_data):
        closes = sample_ohlc_data["close"].tolist()
        assert rsi_series(closes, 14)[-1].value == pytest.approx(rsi(closes, 14))

    def test_every_prefix_matches_scalar(self, sample_ohlc_data):
        closes = sample_ohlc_data["close"].tolist()[:40]
        for point in rsi_series(closes, 14):
            assert point.value == pytest.approx(rsi(closes[: point.index + 1], 14))

    def test_insufficient_data_is_empty(self):
        assert rsi_series([1.0, 2.0], 14) == []

    def test_flat_series_points_are_100(self):
        points = rsi_series([50.0] * 18, 14)
        assert [p.value for p in points] == [100.0] * 4

    def test_first_loss_ends_the_100_run(self):
        points = rsi_series([float(p) for p in range(16)] + [10.0], 14)
        assert [p.value for p in points[:2]] == [100.0, 100.0]
        assert points[-1].value < 100.0


@pytest.mark.unit
class TestSMA:
    """Test the simple moving average."""

    def test_mean_of_last_window(self):
        assert sma([1.0, 2.0, 3.0, 4.0, 5.0], 3) == pytest.approx(4.0)

    @pytest.mark.parametrize("period", [1, 3, 7])
    def test_constant_series_equals_constant(self, period):
        assert sma([42.5] * 7, period) == pytest.approx(42.5)

    def test_window_equal_to_length(self):
        assert sma([2.0, 4.0], 2) == pytest.approx(3.0)

    def test_insufficient_data_returns_none(self):
        assert sma([1.0, 2.0], 3) is None

    def test_series_starts_at_period_minus_one(self):
        points = sma_series([1.0, 2.0, 3.0, 4.0], 2)
        assert [p.index for p in points] == [1, 2, 3]
        assert [p.value for p in points] == pytest.approx([1.5, 2.5, 3.5])

    def test_series_too_short_is_empty(self):
        assert sma_series([1.0], 2) == []

    def test_non_positive_period_raises(self):
        with pytest.raises(ValueError):
            sma([1.0, 2.0], 0)
        with pytest.raises(ValueError):
            sma_series([1.0, 2.0], 0)
