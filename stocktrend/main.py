"""StockTrend — application entry point.

Boots the FastAPI dashboard server and provides the CLI entry point for
serve and report modes.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from stocktrend.api.routers import FETCH_ERROR_MESSAGE, router

app = FastAPI(title="StockTrend Dashboard API", version="0.1.0")
app.include_router(router)

_static_dir = os.path.join(os.path.dirname(__file__), "static")

logger = logging.getLogger("stocktrend")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def dashboard():
    """Serve the single-page dashboard.

    Served with ``no-cache`` so the browser always picks up edits to the
    page.
    """
    index = os.path.join(_static_dir, "index.html")
    if not os.path.isfile(index):
        return {"error": "Dashboard page not found."}
    with open(index, "r", encoding="utf-8") as f:
        html = f.read()
    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate mode."""
    import argparse

    from stocktrend.api.routers import configure_routers
    from stocktrend.auth.session import SessionStore
    from stocktrend.config import load_config
    from stocktrend.market.generator import PriceCache, StockDataService

    config = load_config()

    parser = argparse.ArgumentParser(description="StockTrend dashboard")
    parser.add_argument(
        "--mode",
        choices=["serve", "report"],
        default="serve",
        help="Run the dashboard server or print a text report (default: serve)",
    )
    parser.add_argument("--symbol", default=config.default_symbol, help="Ticker symbol")
    parser.add_argument("--start", default=config.default_start, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", default=config.default_end, help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--days", type=int, default=config.prediction_days,
        help="Forecast horizon in days",
    )
    parser.add_argument("--port", type=int, default=config.http_port, help="HTTP port")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    data_service = StockDataService(
        cache=PriceCache(ttl_seconds=config.cache_ttl_seconds),
        latency_seconds=config.fetch_latency_seconds,
    )

    if args.mode == "report":
        _run_report(data_service, args.symbol.upper(), args.start, args.end, args.days)
        return

    configure_routers(
        config=config,
        data_service=data_service,
        session_store=SessionStore(delay_seconds=config.auth_delay_seconds),
    )
    _serve(args.port)


def _serve(port: int) -> None:
    """Run the dashboard under uvicorn until interrupted."""
    import uvicorn

    logger.info("Dashboard available at http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


def _run_report(data_service, symbol: str, start: str, end: str, days: int) -> None:
    """Generate one series and print its indicators and forecasts.

    Exits with status 1 when the series cannot be produced.
    """
    import asyncio

    from stocktrend.analysis.indicators import summarize
    from stocktrend.cli.report import format_report
    from stocktrend.forecast.registry import run_forecasts
    from stocktrend.market.generator import DataFetchError

    try:
        bars = asyncio.run(data_service.fetch(symbol, start, end))
    except DataFetchError as exc:
        logger.error("Report for %s (%s to %s) failed: %s", symbol, start, end, exc)
        print(FETCH_ERROR_MESSAGE)
        raise SystemExit(1) from exc
    if not bars:
        logger.warning("No trading days between %s and %s", start, end)
        return

    format_report(
        symbol=symbol,
        bar_count=len(bars),
        latest_close=bars[-1].close,
        summary=summarize(bars),
        forecasts=run_forecasts(bars, days),
    )


if __name__ == "__main__":
    _run_cli()
