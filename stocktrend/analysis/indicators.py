"""Technical indicators — SMA, RSI, volatility, price range. Pure functions, no I/O."""

import math
from dataclasses import dataclass
from typing import Optional

from stocktrend.market.models import PriceBar

TRADING_DAYS_PER_YEAR = 252


@dataclass(frozen=True)
class IndicatorSummary:
    """Latest indicator values for a price series, as shown on the dashboard."""

    sma20: Optional[float]
    sma50: Optional[float]
    rsi: Optional[float]
    volatility: float  # annualized, percent
    price_change: float
    price_change_pct: float
    avg_volume: float
    highest_price: float
    lowest_price: float


# ── Moving averages ──────────────────────────────────────────────────────


def calculate_sma(prices: list[float], period: int) -> list[float]:
    """Calculate a Simple Moving Average series.

    Returns one value per complete trailing window, i.e.
    ``len(prices) - period + 1`` values.  Returns ``[]`` when there are
    fewer than *period* prices.
    """
    if period < 1:
        raise ValueError(f"SMA period must be positive, got {period}")

    sma: list[float] = []
    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1 : i + 1]
        sma.append(sum(window) / period)
    return sma


# ── RSI ──────────────────────────────────────────────────────────────────


def calculate_rsi(prices: list[float], period: int = 14) -> list[float]:
    """Calculate the Relative Strength Index with simple window averages.

    Algorithm:
        1. delta = price[i] - price[i-1]
        2. Separate gains (positive) and losses (|negative|).
        3. For each trailing window of *period* deltas, average gain and
           average loss are plain means (no Wilder smoothing).
        4. RS = avg_gain / avg_loss
        5. RSI = 100 - 100 / (1 + RS)

    A window with no losses reads 100; a window with neither gains nor
    losses reads 50.

    Returns one value per complete window; ``[]`` with fewer than
    ``period + 1`` prices.
    """
    if period < 1:
        raise ValueError(f"RSI period must be positive, got {period}")

    deltas = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
    gains = [max(d, 0.0) for d in deltas]
    losses = [abs(min(d, 0.0)) for d in deltas]

    rsi: list[float] = []
    for i in range(period - 1, len(deltas)):
        avg_gain = sum(gains[i - period + 1 : i + 1]) / period
        avg_loss = sum(losses[i - period + 1 : i + 1]) / period
        rsi.append(_rsi_from_avgs(avg_gain, avg_loss))
    return rsi


def _rsi_from_avgs(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


# ── Returns & volatility ─────────────────────────────────────────────────


def calculate_daily_returns(prices: list[float]) -> list[float]:
    """Fractional day-over-day returns (``len(prices) - 1`` values)."""
    return [
        (prices[i] - prices[i - 1]) / prices[i - 1]
        for i in range(1, len(prices))
    ]


def calculate_volatility(prices: list[float]) -> float:
    """Annualized volatility in percent.

    Population standard deviation of daily returns, scaled by
    ``sqrt(252)``.  Returns 0.0 with fewer than two prices.
    """
    returns = calculate_daily_returns(prices)
    if not returns:
        return 0.0
    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    return math.sqrt(variance) * math.sqrt(TRADING_DAYS_PER_YEAR) * 100


def volatility_label(volatility: float) -> str:
    if volatility > 30:
        return "High"
    if volatility > 15:
        return "Moderate"
    return "Low"


def rsi_zone(rsi: Optional[float]) -> str:
    if rsi is None:
        return "neutral"
    if rsi > 70:
        return "overbought"
    if rsi < 30:
        return "oversold"
    return "neutral"


# ── Summaries ────────────────────────────────────────────────────────────


def price_range(bars: list[PriceBar]) -> dict:
    """Header statistics for a series: latest close, extremes, latest volume."""
    if not bars:
        raise ValueError("Need at least 1 bar for price range, got 0")
    return {
        "latest_close": bars[-1].close,
        "highest_high": max(b.high for b in bars),
        "lowest_low": min(b.low for b in bars),
        "latest_volume": bars[-1].volume,
    }


def summarize(bars: list[PriceBar]) -> IndicatorSummary:
    """Compute every dashboard indicator from scratch for *bars*.

    SMA and RSI values are ``None`` when the series is shorter than their
    window.  Raises ``ValueError`` on an empty series.
    """
    if not bars:
        raise ValueError("Need at least 1 bar to summarize, got 0")

    prices = [b.close for b in bars]
    volumes = [b.volume for b in bars]

    sma20 = calculate_sma(prices, 20)
    sma50 = calculate_sma(prices, 50)
    rsi = calculate_rsi(prices, 14)

    price_change = prices[-1] - prices[0]
    price_change_pct = price_change / prices[0] * 100 if prices[0] else 0.0

    return IndicatorSummary(
        sma20=sma20[-1] if sma20 else None,
        sma50=sma50[-1] if sma50 else None,
        rsi=rsi[-1] if rsi else None,
        volatility=calculate_volatility(prices),
        price_change=price_change,
        price_change_pct=price_change_pct,
        avg_volume=sum(volumes) / len(volumes),
        highest_price=max(prices),
        lowest_price=min(prices),
    )
