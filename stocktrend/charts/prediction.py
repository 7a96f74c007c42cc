"""History-plus-forecast line chart."""

from stocktrend.charts.primitives import (
    AXIS,
    GREY,
    RED,
    Chart,
    Circle,
    Line,
    Path,
    empty_chart,
    price_scale,
)
from stocktrend.forecast.base import ForecastPoint
from stocktrend.market.models import PriceBar

WIDTH = 800
HEIGHT = 400

ALGORITHM_COLORS: dict[str, str] = {
    "Moving Average": "#3B82F6",
    "Linear Regression": "#10B981",
    "Trend Blend": "#8B5CF6",
}


def render_prediction_chart(
    bars: list[PriceBar],
    forecasts: list[ForecastPoint],
    symbol: str,
) -> Chart:
    """Draw closes, then one dashed path per algorithm continuing from them.

    *forecasts* may mix algorithms; points are grouped by label in order of
    first appearance.  All series share one x scale spanning history plus
    the longest forecast run, and a dashed red separator marks the last
    known close.
    """
    title = f"{symbol} - Price Prediction Visualization"
    if not bars:
        return empty_chart(title, "No data available for predictions", WIDTH, HEIGHT)

    by_algorithm: dict[str, list[ForecastPoint]] = {}
    for point in forecasts:
        by_algorithm.setdefault(point.algorithm, []).append(point)

    all_prices = [b.close for b in bars] + [p.predicted for p in forecasts]
    to_y = price_scale(min(all_prices), max(all_prices), HEIGHT)

    horizon = max((len(p) for p in by_algorithm.values()), default=0)
    total = len(bars) + horizon

    def to_x(index: int) -> float:
        return index / total * WIDTH

    shapes = []
    history = tuple((to_x(i), to_y(b.close)) for i, b in enumerate(bars))
    if len(history) > 1:
        shapes.append(Path(points=history, stroke=AXIS))
    for (x, y), bar in zip(history, bars):
        shapes.append(Circle(cx=x, cy=y, r=3, fill=AXIS, title=f"{bar.date}: ${bar.close:.2f}"))

    anchor = history[-1]
    for label, points in by_algorithm.items():
        color = ALGORITHM_COLORS.get(label, GREY)
        coords = tuple(
            (to_x(len(bars) + i), to_y(p.predicted)) for i, p in enumerate(points)
        )
        shapes.append(Path(
            points=(anchor,) + coords,
            stroke=color,
            dash="dash",
            opacity=0.8,
        ))
        for (x, y), p in zip(coords, points):
            shapes.append(Circle(
                cx=x, cy=y, r=3, fill=color, opacity=0.8,
                title=f"{label} {p.date}: ${p.predicted:.2f} ({p.confidence * 100:.0f}%)",
            ))

    shapes.append(Line(
        x1=anchor[0], y1=0, x2=anchor[0], y2=HEIGHT,
        stroke=RED, stroke_width=2, dash="dot", opacity=0.6,
    ))

    return Chart(
        title=title,
        width=WIDTH,
        height=HEIGHT,
        shapes=shapes,
        stats={"algorithms": list(by_algorithm), "history": len(bars), "horizon": horizon},
    )
