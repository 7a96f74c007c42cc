"""Vector-graphic primitives produced by the chart renderers.

Coordinates are in pixels with the origin at the top-left corner, as in
SVG.  Primitives are plain frozen records; ``figure.to_figure`` turns a
``Chart`` into an interactive plotly figure.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    opacity: float = 1.0
    title: Optional[str] = None  # hover tooltip


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    dash: Optional[str] = None  # plotly dash style, e.g. "dash", "dot"
    opacity: float = 1.0


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: str
    opacity: float = 1.0
    title: Optional[str] = None


@dataclass(frozen=True)
class Path:
    points: tuple[tuple[float, float], ...]
    stroke: str
    stroke_width: float = 2.0
    dash: Optional[str] = None
    opacity: float = 1.0

    @property
    def d(self) -> str:
        """SVG path data (``M x,y L x,y ...``)."""
        return "M " + " L ".join(f"{x},{y}" for x, y in self.points)


Shape = Union[Rect, Line, Circle, Path]


@dataclass(frozen=True)
class Chart:
    """Renderer output: a titled canvas of primitives plus summary stats.

    ``message`` is set (and ``shapes`` empty) when there was nothing to draw.
    """

    title: str
    width: float
    height: float
    shapes: list[Shape] = field(default_factory=list)
    stats: dict = field(default_factory=dict)
    message: Optional[str] = None


# ── Palette ──────────────────────────────────────────────────────────────

GREEN = "#10B981"
RED = "#EF4444"
GREY = "#6B7280"
AXIS = "#374151"


def empty_chart(title: str, message: str, width: float = 800, height: float = 350) -> Chart:
    return Chart(title=title, width=width, height=height, message=message)


def price_scale(low: float, high: float, height: float):
    """Return a function mapping a price to a y pixel, with 10% padding.

    A zero-width range gets one price unit of padding so a flat series
    still lands mid-canvas.
    """
    price_range = high - low
    padding = price_range * 0.1 if price_range > 0 else 1.0
    span = price_range + 2 * padding

    def to_y(price: float) -> float:
        return height - (price - low + padding) / span * height

    return to_y
