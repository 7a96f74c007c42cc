"""Ordinary least-squares trend-line forecaster."""

from typing import Optional

import numpy as np

from stocktrend.forecast.base import (
    ForecastPoint,
    future_date,
    require_bars,
    sample_confidence,
)
from stocktrend.market.models import PriceBar


def fit_line(prices: list[float]) -> tuple[float, float]:
    """Closed-form OLS fit of *prices* against their index ``0..n-1``.

    Returns ``(slope, intercept)``.  A single price gives a flat line
    through it.
    """
    y = np.asarray(prices, dtype=float)
    n = len(y)
    x = np.arange(n, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0, float(sum_y / n)
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


class LinearRegressionForecaster:
    """Extrapolate the least-squares line through the closing prices."""

    label = "Linear Regression"
    confidence_floor = 0.5

    def predict(
        self,
        bars: list[PriceBar],
        days: int = 30,
        rng: Optional[np.random.Generator] = None,
    ) -> list[ForecastPoint]:
        require_bars(bars)
        rng = rng if rng is not None else np.random.default_rng()
        slope, intercept = fit_line([b.close for b in bars])
        n = len(bars)

        return [
            ForecastPoint(
                date=future_date(bars, i + 1),
                predicted=round(slope * (n + i) + intercept, 2),
                confidence=sample_confidence(rng, self.confidence_floor),
                algorithm=self.label,
            )
            for i in range(days)
        ]
