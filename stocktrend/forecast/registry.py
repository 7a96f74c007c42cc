"""Forecaster registry — maps algorithm ids to classes.

Used by the API and the CLI report to run one or all forecasters.
"""

from typing import Optional

import numpy as np

from stocktrend.forecast.base import ForecastPoint, ForecasterProtocol
from stocktrend.forecast.linear_regression import LinearRegressionForecaster
from stocktrend.forecast.moving_average import MovingAverageForecaster
from stocktrend.forecast.trend_blend import TrendBlendForecaster
from stocktrend.market.models import PriceBar


FORECASTER_REGISTRY: dict[str, type] = {
    "ma": MovingAverageForecaster,
    "lr": LinearRegressionForecaster,
    "trend": TrendBlendForecaster,
}


def get_forecaster(name: str) -> ForecasterProtocol:
    """Look up and instantiate a forecaster by registry key.

    Raises ``KeyError`` if the algorithm id is not registered.
    """
    if name not in FORECASTER_REGISTRY:
        raise KeyError(
            f"Unknown algorithm '{name}'. "
            f"Available: {', '.join(FORECASTER_REGISTRY.keys())}"
        )
    return FORECASTER_REGISTRY[name]()


def run_forecasts(
    bars: list[PriceBar],
    days: int = 30,
    algorithm: str = "all",
    rng: Optional[np.random.Generator] = None,
) -> dict[str, list[ForecastPoint]]:
    """Run one forecaster (by id) or every registered one (``"all"``).

    Returns a dict keyed by algorithm id, in registry order.
    """
    names = list(FORECASTER_REGISTRY) if algorithm == "all" else [algorithm]
    forecasters = {name: get_forecaster(name) for name in names}
    return {
        name: forecaster.predict(bars, days, rng=rng)
        for name, forecaster in forecasters.items()
    }


def average_confidence(results: dict[str, list[ForecastPoint]]) -> float:
    """Mean confidence across every point, as a percentage (0.0 if none)."""
    points = [p for preds in results.values() for p in preds]
    if not points:
        return 0.0
    return sum(p.confidence for p in points) / len(points) * 100
