"""Moving-average continuation forecaster."""

from typing import Optional

import numpy as np

from stocktrend.forecast.base import (
    ForecastPoint,
    future_date,
    require_bars,
    sample_confidence,
)
from stocktrend.market.models import PriceBar


class MovingAverageForecaster:
    """Predict each day as the mean of the trailing *window* prices.

    Every prediction is appended to the price history before the next day
    is computed, so later predictions average over earlier ones.  When the
    history is shorter than *window* the mean covers all of it.

    Args:
        window: Trailing window length.
    """

    label = "Moving Average"
    confidence_floor = 0.6

    def __init__(self, window: int = 20) -> None:
        if window < 1:
            raise ValueError(f"Window must be positive, got {window}")
        self.window = window

    def predict(
        self,
        bars: list[PriceBar],
        days: int = 30,
        rng: Optional[np.random.Generator] = None,
    ) -> list[ForecastPoint]:
        require_bars(bars)
        rng = rng if rng is not None else np.random.default_rng()
        prices = [b.close for b in bars]

        predictions: list[ForecastPoint] = []
        for i in range(days):
            recent = prices[-self.window:]
            ma = sum(recent) / len(recent)
            predictions.append(ForecastPoint(
                date=future_date(bars, i + 1),
                predicted=round(ma, 2),
                confidence=sample_confidence(rng, self.confidence_floor),
                algorithm=self.label,
            ))
            prices.append(ma)
        return predictions
