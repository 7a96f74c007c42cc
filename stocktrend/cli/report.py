"""CLI report — prints a series summary to the console."""

from stocktrend.analysis.indicators import IndicatorSummary, rsi_zone, volatility_label
from stocktrend.forecast.base import ForecastPoint


def _money(value) -> str:
    return f"${value:,.2f}" if value is not None else "N/A"


def format_report(
    symbol: str,
    bar_count: int,
    latest_close: float,
    summary: IndicatorSummary,
    forecasts: dict[str, list[ForecastPoint]],
) -> str:
    """Format and print the indicator summary and final forecast values.

    Args:
        symbol: Ticker shown in the header.
        bar_count: Number of bars the summary was computed from.
        latest_close: Last known close.
        summary: Output of ``summarize``.
        forecasts: Output of ``run_forecasts``, keyed by algorithm id.

    Returns:
        The formatted string (also printed to stdout).
    """
    rsi_str = (
        f"{summary.rsi:.1f} ({rsi_zone(summary.rsi)})"
        if summary.rsi is not None else "N/A"
    )
    vol_str = f"{summary.volatility:.1f}% ({volatility_label(summary.volatility)})"

    lines = [
        f"──────────────── StockTrend: {symbol} ────────────────",
        f"  Bars:              {bar_count}",
        f"  Latest Close:      {_money(latest_close)}",
        f"  Change:            {summary.price_change_pct:+.2f}%",
        f"  Range:             {_money(summary.lowest_price)} – {_money(summary.highest_price)}",
        f"  SMA 20:            {_money(summary.sma20)}",
        f"  SMA 50:            {_money(summary.sma50)}",
        f"  RSI 14:            {rsi_str}",
        f"  Volatility:        {vol_str}",
        f"  Avg Volume:        {summary.avg_volume / 1_000_000:.1f}M",
    ]
    for points in forecasts.values():
        if not points:
            continue
        last = points[-1]
        lines.append(
            f"  {last.algorithm + ':':<19}{_money(last.predicted)} on {last.date}"
        )
    lines.append("──────────────────────────────────────────────────")

    output = "\n".join(lines)
    print(output)
    return output
