"""Returns-distribution histogram with descriptive statistics."""

import math

from stocktrend.charts.primitives import (
    AXIS,
    GREEN,
    GREY,
    RED,
    Chart,
    Line,
    Rect,
    empty_chart,
)
from stocktrend.charts.returns import percent_returns
from stocktrend.market.models import PriceBar

DEFAULT_BINS = 20
WIDTH = 600
HEIGHT = 300
PLOT_LEFT = 10
PLOT_WIDTH = 580
BASELINE = 280
MAX_BAR_HEIGHT = 250


def bin_returns(returns: list[float], bins: int = DEFAULT_BINS) -> list[dict]:
    """Count *returns* into *bins* equal-width bins over ``[min, max]``.

    The maximum lands in the last bin.  When every return is identical the
    whole sample goes into the first bin.
    """
    low = min(returns)
    high = max(returns)
    bin_width = (high - low) / bins

    result = [
        {"range": (low + i * bin_width, low + (i + 1) * bin_width), "count": 0}
        for i in range(bins)
    ]
    for value in returns:
        index = 0 if bin_width == 0 else min(int((value - low) // bin_width), bins - 1)
        result[index]["count"] += 1
    for b in result:
        b["percentage"] = b["count"] / len(returns) * 100
    return result


def describe(returns: list[float]) -> dict:
    """Mean, population standard deviation and sample size."""
    n = len(returns)
    mean = sum(returns) / n
    std = math.sqrt(sum((r - mean) ** 2 for r in returns) / n)
    return {"mean": mean, "std": std, "count": n}


def _bin_color(lo: float, hi: float) -> str:
    if lo < 0 and hi < 0:
        return RED
    if lo > 0 and hi > 0:
        return GREEN
    return GREY


def render_histogram(bars: list[PriceBar], symbol: str, bins: int = DEFAULT_BINS) -> Chart:
    title = f"{symbol} - Returns Distribution"
    returns = [value for _, value in percent_returns(bars)]
    if not returns:
        return empty_chart(title, "No data available for histogram", WIDTH, HEIGHT)

    binned = bin_returns(returns, bins)
    max_count = max(b["count"] for b in binned)
    bar_width = PLOT_WIDTH / bins - 2

    shapes = []
    for i, b in enumerate(binned):
        lo, hi = b["range"]
        height = b["count"] / max_count * MAX_BAR_HEIGHT
        shapes.append(Rect(
            x=i / bins * PLOT_WIDTH + PLOT_LEFT,
            y=BASELINE - height,
            width=bar_width,
            height=height,
            fill=_bin_color(lo, hi),
            opacity=0.7,
            title=(
                f"Range: {lo:.2f}% to {hi:.2f}%\n"
                f"Count: {b['count']}\nPercentage: {b['percentage']:.1f}%"
            ),
        ))
    shapes.append(Line(PLOT_LEFT, BASELINE, PLOT_LEFT + PLOT_WIDTH, BASELINE, AXIS))
    shapes.append(Line(PLOT_LEFT, 30, PLOT_LEFT, BASELINE, AXIS))

    return Chart(
        title=title,
        width=WIDTH,
        height=HEIGHT,
        shapes=shapes,
        stats={**describe(returns), "bins": binned},
    )
