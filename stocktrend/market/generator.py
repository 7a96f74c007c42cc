"""Synthetic market data — random-walk OHLCV generator and memo cache.

There is no real data source: every "fetch" produces a fresh random walk
over the weekdays of the requested range, memoized for a few minutes per
(symbol, start, end) key.
"""

import asyncio
import logging
import math
import time
from datetime import date, timedelta
from typing import Callable, Optional

import numpy as np

from stocktrend.market.models import PriceBar

logger = logging.getLogger("stocktrend.market")

# Random-walk parameters
_BASE_PRICE_MIN = 150.0
_BASE_PRICE_SPAN = 100.0
_DAILY_VOLATILITY = 0.02  # 2% of price per day
_WICK_MARGIN = 0.01  # high/low extend up to 1% beyond the body
_VOLUME_MIN = 1_000_000
_VOLUME_SPAN = 10_000_000

DEFAULT_CACHE_TTL_SECONDS = 300.0


class DataFetchError(RuntimeError):
    """Raised when a price series cannot be produced."""


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def generate_price_series(
    symbol: str,
    start,
    end,
    rng: Optional[np.random.Generator] = None,
) -> list[PriceBar]:
    """Generate one bar per weekday between *start* and *end* inclusive.

    Each close is the previous close plus a uniform shock of up to ±1% (a
    2% band), and high/low extend the open/close body by an independent
    margin of up to 1%.  Prices are rounded to cents; the unrounded close
    seeds the next day.

    *symbol* is not used beyond logging.  *start* and *end* accept
    ``datetime.date`` objects or ``YYYY-MM-DD`` strings.  Raises
    ``ValueError`` for unparseable dates.
    """
    start_date = _as_date(start)
    end_date = _as_date(end)
    rng = rng if rng is not None else np.random.default_rng()

    bars: list[PriceBar] = []
    base_price = _BASE_PRICE_MIN + rng.random() * _BASE_PRICE_SPAN

    day = start_date
    while day <= end_date:
        if day.weekday() < 5:
            change = (rng.random() - 0.5) * _DAILY_VOLATILITY * base_price
            open_ = base_price
            close = base_price + change
            high = max(open_, close) + rng.random() * _WICK_MARGIN * base_price
            low = min(open_, close) - rng.random() * _WICK_MARGIN * base_price
            volume = math.floor(rng.random() * _VOLUME_SPAN) + _VOLUME_MIN

            bars.append(PriceBar(
                date=day.isoformat(),
                open=round(open_, 2),
                high=round(high, 2),
                low=round(low, 2),
                close=round(close, 2),
                volume=volume,
                adj_close=round(close, 2),
            ))
            base_price = close
        day += timedelta(days=1)

    logger.debug("Generated %d bars for %s", len(bars), symbol)
    return bars


class PriceCache:
    """Time-bounded key → value map.

    Entries expire *ttl_seconds* after they were stored.  Expiry is only
    checked on read; there is no other eviction.

    Args:
        ttl_seconds: Freshness window.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, list[PriceBar]]] = {}

    def get(self, key: str) -> Optional[list[PriceBar]]:
        """Return the cached value if still fresh, else ``None``."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at < self._ttl:
            return value
        del self._entries[key]
        return None

    def set(self, key: str, value: list[PriceBar]) -> None:
        self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class StockDataService:
    """Async facade over the generator that mimics a market-data API.

    Args:
        cache: ``PriceCache`` shared across requests.
        latency_seconds: Simulated network latency on a cache miss.
        rng: Optional numpy ``Generator`` (seed it for reproducible series).
    """

    def __init__(
        self,
        cache: Optional[PriceCache] = None,
        latency_seconds: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._cache = cache if cache is not None else PriceCache()
        self._latency = latency_seconds
        self._rng = rng if rng is not None else np.random.default_rng()

    @property
    def cache(self) -> PriceCache:
        return self._cache

    async def fetch(self, symbol: str, start, end) -> list[PriceBar]:
        """Return the daily bars for *symbol* between *start* and *end*.

        Serves from the cache while the entry is fresh.  Any failure while
        producing the series is logged and re-raised as ``DataFetchError``.
        """
        cache_key = f"{symbol}-{start}-{end}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return cached

        try:
            if self._latency > 0:
                await asyncio.sleep(self._latency)
            bars = generate_price_series(symbol, start, end, rng=self._rng)
        except Exception as exc:
            logger.error("Error fetching stock data for %s: %s", symbol, exc)
            raise DataFetchError("Failed to fetch stock data") from exc

        self._cache.set(cache_key, bars)
        logger.info(
            "Fetched %d bars for %s (%s → %s)", len(bars), symbol, start, end,
        )
        return bars
