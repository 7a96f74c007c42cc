"""Forecaster protocol and shared forecast point type.

Defines the interface that all forecasters must implement.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Protocol, runtime_checkable

import numpy as np

from stocktrend.market.models import PriceBar


@dataclass(frozen=True)
class ForecastPoint:
    """A single predicted close produced by a forecaster."""

    date: str  # YYYY-MM-DD
    predicted: float
    confidence: float  # in [0, 1]
    algorithm: str  # display label


@runtime_checkable
class ForecasterProtocol(Protocol):
    """Interface that all forecasters must satisfy."""

    label: str

    def predict(
        self,
        bars: list[PriceBar],
        days: int = 30,
        rng: Optional[np.random.Generator] = None,
    ) -> list[ForecastPoint]:
        """Return one ``ForecastPoint`` per day after the last bar."""
        ...


def require_bars(bars: list[PriceBar]) -> None:
    """Raise ``ValueError`` when there is no history to extrapolate from."""
    if not bars:
        raise ValueError("Need at least 1 bar to forecast, got 0")


def future_date(bars: list[PriceBar], offset: int) -> str:
    """Calendar date *offset* days after the last bar, as ``YYYY-MM-DD``."""
    last = date.fromisoformat(bars[-1].date)
    return (last + timedelta(days=offset)).isoformat()


def sample_confidence(rng: np.random.Generator, floor: float) -> float:
    """Uniform confidence in ``[floor, 1.0)``.

    Not derived from any fit quality.
    """
    return floor + rng.random() * (1.0 - floor)
