"""Daily-returns heatmap — one row per calendar week, one cell per weekday."""

from datetime import date, timedelta

from stocktrend.charts.primitives import Chart, Rect, empty_chart
from stocktrend.charts.returns import percent_returns
from stocktrend.market.models import PriceBar

MAX_WEEKS = 20
CELL_SIZE = 32
CELL_GAP = 4


def week_start(day: str) -> str:
    """The Sunday on or before *day*, as ``YYYY-MM-DD``."""
    d = date.fromisoformat(day)
    return (d - timedelta(days=(d.weekday() + 1) % 7)).isoformat()


def group_by_week(returns: list[tuple[str, float]]) -> list[tuple[str, list[tuple[str, float]]]]:
    """Group consecutive returns by the Sunday that starts their week."""
    weeks: list[tuple[str, list[tuple[str, float]]]] = []
    for day, value in returns:
        key = week_start(day)
        if weeks and weeks[-1][0] == key:
            weeks[-1][1].append((day, value))
        else:
            weeks.append((key, [(day, value)]))
    return weeks


def cell_color(value: float, max_abs: float) -> str:
    """Green for gains, red otherwise; alpha scales with magnitude."""
    intensity = abs(value) / max_abs if max_abs > 0 else 0.0
    alpha = round(intensity * 0.8 + 0.2, 3)
    if value > 0:
        return f"rgba(34, 197, 94, {alpha})"
    return f"rgba(239, 68, 68, {alpha})"


def render_heatmap(bars: list[PriceBar], symbol: str) -> Chart:
    """Map day-over-day % returns to coloured cells, first 20 weeks only."""
    title = f"{symbol} - Daily Returns Heatmap"
    returns = percent_returns(bars)
    if not returns:
        return empty_chart(title, "No data available for heatmap")

    max_abs = max(abs(v) for _, v in returns)
    weeks = group_by_week(returns)[:MAX_WEEKS]
    pitch = CELL_SIZE + CELL_GAP

    shapes = []
    for row, (_, days) in enumerate(weeks):
        for day, value in days:
            col = date.fromisoformat(day).weekday()
            shapes.append(Rect(
                x=col * pitch,
                y=row * pitch,
                width=CELL_SIZE,
                height=CELL_SIZE,
                fill=cell_color(value, max_abs),
                title=f"{day}: {value:.2f}%",
            ))

    return Chart(
        title=title,
        width=5 * pitch,
        height=len(weeks) * pitch,
        shapes=shapes,
        stats={"weeks": len(weeks), "max_abs_return": max_abs},
    )
