"""Daily percentage returns shared by the heatmap and histogram."""

from stocktrend.market.models import PriceBar


def percent_returns(bars: list[PriceBar]) -> list[tuple[str, float]]:
    """``(date, return %)`` for every bar after the first."""
    return [
        (bars[i].date, (bars[i].close - bars[i - 1].close) / bars[i - 1].close * 100)
        for i in range(1, len(bars))
    ]
