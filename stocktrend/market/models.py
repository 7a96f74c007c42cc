"""Market data models — typed representations of daily price bars."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceBar:
    """A single daily OHLCV bar."""

    date: str  # YYYY-MM-DD
    open: float
    high: float
    low: float
    close: float
    volume: int
    adj_close: float


# ── Symbol metadata ──────────────────────────────────────────────────────

POPULAR_SYMBOLS: list[str] = [
    "AAPL",
    "GOOGL",
    "MSFT",
    "AMZN",
    "TSLA",
    "NVDA",
    "META",
    "NFLX",
]
