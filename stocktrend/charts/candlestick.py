"""Candlestick renderer — open/close body and high/low wick per bar."""

from stocktrend.charts.primitives import (
    GREEN,
    RED,
    Chart,
    Line,
    Rect,
    empty_chart,
    price_scale,
)
from stocktrend.market.models import PriceBar

CHART_HEIGHT = 350
MIN_CHART_WIDTH = 800
PX_PER_BAR = 8


def render_candlestick(bars: list[PriceBar], symbol: str) -> Chart:
    """Map *bars* to one wick line and one body rect each.

    Bars that closed above their open are green, all others red.  The
    canvas widens beyond 800px at 8px per bar.
    """
    title = f"{symbol} - Candlestick Chart"
    if not bars:
        return empty_chart(title, "No data available for visualization")

    n = len(bars)
    width = max(MIN_CHART_WIDTH, n * PX_PER_BAR)
    to_y = price_scale(min(b.low for b in bars), max(b.high for b in bars), CHART_HEIGHT)
    slot = max(2.0, width / n - 2)

    shapes = []
    for i, bar in enumerate(bars):
        x = i / n * width
        color = GREEN if bar.close > bar.open else RED
        open_y = to_y(bar.open)
        close_y = to_y(bar.close)

        shapes.append(Line(
            x1=x + slot / 2,
            y1=to_y(bar.high),
            x2=x + slot / 2,
            y2=to_y(bar.low),
            stroke=color,
        ))
        shapes.append(Rect(
            x=x + 1,
            y=min(open_y, close_y),
            width=slot - 2,
            height=max(1.0, abs(close_y - open_y)),
            fill=color,
            opacity=0.8,
            title=(
                f"{bar.date}\nO {bar.open:.2f}  H {bar.high:.2f}\n"
                f"L {bar.low:.2f}  C {bar.close:.2f}"
            ),
        ))

    return Chart(title=title, width=width, height=CHART_HEIGHT, shapes=shapes)
