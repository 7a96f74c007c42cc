"""Blended short/medium trend forecaster with injected noise."""

from typing import Optional

import numpy as np

from stocktrend.forecast.base import (
    ForecastPoint,
    future_date,
    require_bars,
    sample_confidence,
)
from stocktrend.market.models import PriceBar

_SHORT_WINDOW = 10
_MEDIUM_WINDOW = 30
_SHORT_WEIGHT = 0.7
_MEDIUM_WEIGHT = 0.3
_NOISE = 0.02  # ±1% uniform noise per step


def mean_change(prices: list[float]) -> float:
    """Mean fractional change between consecutive prices (0.0 if < 2)."""
    if len(prices) < 2:
        return 0.0
    changes = [
        (prices[i] - prices[i - 1]) / prices[i - 1]
        for i in range(1, len(prices))
    ]
    return sum(changes) / len(changes)


class TrendBlendForecaster:
    """Compound a weighted blend of short and medium trends, plus noise.

    ``trend = 0.7 * short + 0.3 * medium`` where each term is the mean
    daily change over the last 10 and 30 closes.  Every day's prediction
    seeds the next, so the trend compounds over the horizon.
    """

    label = "Trend Blend"
    confidence_floor = 0.7

    def predict(
        self,
        bars: list[PriceBar],
        days: int = 30,
        rng: Optional[np.random.Generator] = None,
    ) -> list[ForecastPoint]:
        require_bars(bars)
        rng = rng if rng is not None else np.random.default_rng()
        prices = [b.close for b in bars]

        short_trend = mean_change(prices[-_SHORT_WINDOW:])
        medium_trend = mean_change(prices[-_MEDIUM_WINDOW:])
        trend = _SHORT_WEIGHT * short_trend + _MEDIUM_WEIGHT * medium_trend

        last_price = prices[-1]
        predictions: list[ForecastPoint] = []
        for i in range(days):
            noise = (rng.random() - 0.5) * _NOISE
            predicted = last_price * (1 + trend + noise)
            predictions.append(ForecastPoint(
                date=future_date(bars, i + 1),
                predicted=round(predicted, 2),
                confidence=sample_confidence(rng, self.confidence_floor),
                algorithm=self.label,
            ))
            last_price = predicted
        return predictions
