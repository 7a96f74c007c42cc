"""Tests for the three forecasters and the forecaster registry."""

from datetime import date, timedelta

import numpy as np
import pytest

from stocktrend.forecast.base import ForecastPoint, ForecasterProtocol
from stocktrend.forecast.linear_regression import LinearRegressionForecaster, fit_line
from stocktrend.forecast.moving_average import MovingAverageForecaster
from stocktrend.forecast.registry import (
    FORECASTER_REGISTRY,
    average_confidence,
    get_forecaster,
    run_forecasts,
)
from stocktrend.forecast.trend_blend import TrendBlendForecaster, mean_change
from stocktrend.market.models import PriceBar


# ── Fixtures ─────────────────────────────────────────────────────────────


def _bars(closes: list[float], start: date = date(2025, 1, 1)) -> list[PriceBar]:
    return [
        PriceBar(
            date=(start + timedelta(days=i)).isoformat(),
            open=c, high=c + 1, low=c - 1, close=c, volume=1000, adj_close=c,
        )
        for i, c in enumerate(closes)
    ]


def _oscillating(n: int = 60) -> list[float]:
    return [100.0 + (5.0 if i % 3 == 0 else -3.0 if i % 3 == 1 else 1.0) for i in range(n)]


# ── Shared contract ──────────────────────────────────────────────────────


@pytest.mark.parametrize("forecaster_cls", list(FORECASTER_REGISTRY.values()))
class TestForecasterContract:
    def test_satisfies_protocol(self, forecaster_cls):
        assert isinstance(forecaster_cls(), ForecasterProtocol)

    def test_one_point_per_day_after_last_bar(self, forecaster_cls):
        bars = _bars(_oscillating(40))
        preds = forecaster_cls().predict(bars, days=10, rng=np.random.default_rng(0))
        assert len(preds) == 10
        assert all(isinstance(p, ForecastPoint) for p in preds)
        last = date.fromisoformat(bars[-1].date)
        assert [p.date for p in preds] == [
            (last + timedelta(days=i + 1)).isoformat() for i in range(10)
        ]

    def test_confidence_within_floor_and_one(self, forecaster_cls):
        forecaster = forecaster_cls()
        preds = forecaster.predict(_bars(_oscillating()), days=200, rng=np.random.default_rng(1))
        for p in preds:
            assert forecaster.confidence_floor <= p.confidence < 1.0
            assert p.algorithm == forecaster.label

    def test_empty_history_raises(self, forecaster_cls):
        with pytest.raises(ValueError):
            forecaster_cls().predict([], days=5)

    def test_zero_days_yields_nothing(self, forecaster_cls):
        assert forecaster_cls().predict(_bars([1.0, 2.0]), days=0) == []


# ── Moving average ───────────────────────────────────────────────────────


class TestMovingAverage:
    def test_constant_series_continues_constant(self):
        preds = MovingAverageForecaster().predict(_bars([75.0] * 30), days=15)
        assert all(p.predicted == 75.0 for p in preds)

    def test_first_prediction_is_trailing_mean(self):
        closes = [float(i) for i in range(1, 41)]
        preds = MovingAverageForecaster(window=20).predict(_bars(closes), days=1)
        assert preds[0].predicted == pytest.approx(sum(range(21, 41)) / 20)

    def test_predictions_feed_back(self):
        closes = [10.0, 20.0]
        preds = MovingAverageForecaster(window=2).predict(_bars(closes), days=2)
        assert preds[0].predicted == 15.0
        assert preds[1].predicted == 17.5  # mean(20, 15)

    def test_short_history_averages_everything(self):
        preds = MovingAverageForecaster(window=20).predict(_bars([10.0, 20.0, 30.0]), days=1)
        assert preds[0].predicted == 20.0

    def test_bounded_by_history(self):
        closes = _oscillating(60)
        preds = MovingAverageForecaster().predict(_bars(closes), days=120)
        for p in preds:
            assert min(closes) <= p.predicted <= max(closes)

    def test_rejects_non_positive_window(self):
        with pytest.raises(ValueError, match="Window"):
            MovingAverageForecaster(window=0)


# ── Linear regression ────────────────────────────────────────────────────


class TestLinearRegression:
    def test_fit_line_exact(self):
        slope, intercept = fit_line([3.0 + 2.0 * i for i in range(10)])
        assert slope == pytest.approx(2.0)
        assert intercept == pytest.approx(3.0)

    def test_linear_series_continues_line(self):
        closes = [50.0 + 1.5 * i for i in range(30)]
        preds = LinearRegressionForecaster().predict(_bars(closes), days=10)
        for i, p in enumerate(preds):
            assert p.predicted == pytest.approx(50.0 + 1.5 * (30 + i))

    def test_single_price_is_flat(self):
        preds = LinearRegressionForecaster().predict(_bars([42.0]), days=3)
        assert [p.predicted for p in preds] == [42.0, 42.0, 42.0]


# ── Trend blend ──────────────────────────────────────────────────────────


class TestTrendBlend:
    def test_mean_change(self):
        assert mean_change([100.0, 110.0, 99.0]) == pytest.approx(0.0)
        assert mean_change([100.0]) == 0.0

    def test_flat_series_stays_within_noise(self):
        preds = TrendBlendForecaster().predict(
            _bars([100.0] * 40), days=1, rng=np.random.default_rng(2),
        )
        assert 99.0 <= preds[0].predicted <= 101.0

    def test_rising_series_drifts_up(self):
        closes = [100.0 * 1.02 ** i for i in range(40)]
        preds = TrendBlendForecaster().predict(_bars(closes), days=30, rng=np.random.default_rng(3))
        # 2% trend with at most ±1% noise compounds upward every day
        assert preds[-1].predicted > preds[0].predicted > closes[-1]

    def test_seeded_rng_is_reproducible(self):
        bars = _bars(_oscillating())
        a = TrendBlendForecaster().predict(bars, days=5, rng=np.random.default_rng(9))
        b = TrendBlendForecaster().predict(bars, days=5, rng=np.random.default_rng(9))
        assert a == b


# ── Registry ─────────────────────────────────────────────────────────────


class TestRegistry:
    def test_get_known(self):
        assert isinstance(get_forecaster("ma"), MovingAverageForecaster)
        assert isinstance(get_forecaster("lr"), LinearRegressionForecaster)
        assert isinstance(get_forecaster("trend"), TrendBlendForecaster)

    def test_get_unknown(self):
        with pytest.raises(KeyError, match="Available"):
            get_forecaster("lstm")

    def test_run_all(self):
        results = run_forecasts(_bars(_oscillating()), days=7)
        assert list(results) == ["ma", "lr", "trend"]
        assert all(len(v) == 7 for v in results.values())

    def test_run_single(self):
        results = run_forecasts(_bars(_oscillating()), days=4, algorithm="lr")
        assert list(results) == ["lr"]

    def test_average_confidence(self):
        pts = [
            ForecastPoint("2025-01-01", 1.0, 0.5, "a"),
            ForecastPoint("2025-01-02", 1.0, 1.0, "a"),
        ]
        assert average_confidence({"a": pts}) == pytest.approx(75.0)
        assert average_confidence({}) == 0.0
