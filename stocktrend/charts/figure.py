"""Plotly conversion — turns a ``Chart`` of primitives into a figure.

The figure uses pixel-space axes matching the chart canvas (y reversed so
the origin is top-left) and draws every primitive as a layout shape.
Primitives carrying a tooltip get an invisible hover marker at their
centre so the browser chart stays interactive.
"""

import plotly.graph_objects as go

from stocktrend.charts.primitives import Chart, Circle, Line, Path, Rect, Shape


def _shape_kwargs(shape: Shape) -> dict:
    if isinstance(shape, Rect):
        return dict(
            type="rect",
            x0=shape.x, y0=shape.y,
            x1=shape.x + shape.width, y1=shape.y + shape.height,
            fillcolor=shape.fill, opacity=shape.opacity,
            line=dict(width=0),
        )
    if isinstance(shape, Line):
        return dict(
            type="line",
            x0=shape.x1, y0=shape.y1, x1=shape.x2, y1=shape.y2,
            opacity=shape.opacity,
            line=dict(color=shape.stroke, width=shape.stroke_width, dash=shape.dash),
        )
    if isinstance(shape, Circle):
        return dict(
            type="circle",
            x0=shape.cx - shape.r, y0=shape.cy - shape.r,
            x1=shape.cx + shape.r, y1=shape.cy + shape.r,
            fillcolor=shape.fill, opacity=shape.opacity,
            line=dict(width=0),
        )
    if isinstance(shape, Path):
        return dict(
            type="path",
            path=shape.d,
            opacity=shape.opacity,
            line=dict(color=shape.stroke, width=shape.stroke_width, dash=shape.dash),
        )
    raise TypeError(f"Unsupported primitive: {type(shape).__name__}")


def _hover_anchor(shape: Shape) -> tuple[float, float] | None:
    if isinstance(shape, Rect) and shape.title:
        return shape.x + shape.width / 2, shape.y + shape.height / 2
    if isinstance(shape, Circle) and shape.title:
        return shape.cx, shape.cy
    return None


def to_figure(chart: Chart) -> go.Figure:
    """Build a plotly figure reproducing *chart* on a pixel canvas."""
    fig = go.Figure()

    if chart.message:
        fig.add_annotation(
            text=chart.message,
            x=chart.width / 2, y=chart.height / 2,
            showarrow=False,
            font=dict(color="#6B7280", size=14),
        )
    else:
        for shape in chart.shapes:
            fig.add_shape(layer="below", **_shape_kwargs(shape))

        xs, ys, texts = [], [], []
        for shape in chart.shapes:
            anchor = _hover_anchor(shape)
            if anchor is not None:
                xs.append(anchor[0])
                ys.append(anchor[1])
                texts.append(shape.title.replace("\n", "<br>"))
        if xs:
            fig.add_trace(go.Scatter(
                x=xs, y=ys,
                mode="markers",
                marker=dict(size=8, opacity=0),
                hovertext=texts,
                hoverinfo="text",
                showlegend=False,
            ))

    fig.update_xaxes(range=[0, chart.width], visible=False)
    fig.update_yaxes(range=[chart.height, 0], visible=False)
    fig.update_layout(
        title=chart.title,
        template="plotly_white",
        width=chart.width,
        height=chart.height + 80,
        margin=dict(l=10, r=10, t=50, b=10),
    )
    return fig
