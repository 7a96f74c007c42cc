"""Internal API routers — /symbols, /stocks, /charts and /auth endpoints.

No business logic. Delegates to the data service, indicator and forecast
functions, chart renderers, and the session store.
"""

import json
import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from stocktrend.analysis.indicators import (
    price_range,
    rsi_zone,
    summarize,
    volatility_label,
)
from stocktrend.auth.session import SessionStore
from stocktrend.charts.candlestick import render_candlestick
from stocktrend.charts.figure import to_figure
from stocktrend.charts.heatmap import render_heatmap
from stocktrend.charts.histogram import render_histogram
from stocktrend.charts.prediction import render_prediction_chart
from stocktrend.config import Config, load_config
from stocktrend.forecast.registry import (
    FORECASTER_REGISTRY,
    average_confidence,
    run_forecasts,
)
from stocktrend.market.generator import (
    DataFetchError,
    PriceCache,
    StockDataService,
)
from stocktrend.market.models import POPULAR_SYMBOLS

logger = logging.getLogger("stocktrend.api")
router = APIRouter()

FETCH_ERROR_MESSAGE = "Failed to fetch stock data. Please try again."
CHART_KINDS = ("candlestick", "heatmap", "histogram", "prediction")

# ── Shared state (set during app startup) ────────────────────────────────

_config: Optional[Config] = None  # Set via configure_routers()
_data_service: Optional[StockDataService] = None  # Set via configure_routers()
_session_store: Optional[SessionStore] = None  # Set via configure_routers()


def configure_routers(
    config: Optional[Config] = None,
    data_service: Optional[StockDataService] = None,
    session_store: Optional[SessionStore] = None,
) -> None:
    """Inject dependencies from the application startup.

    Anything left as ``None`` is rebuilt lazily from ``load_config()`` on
    first use.

    Args:
        config: A loaded ``Config``.
        data_service: A ``StockDataService`` (or duck-type for tests).
        session_store: A ``SessionStore`` holding the current user.
    """
    global _config, _data_service, _session_store  # noqa: PLW0603
    _config = config
    _data_service = data_service
    _session_store = session_store


def _get_config() -> Config:
    global _config  # noqa: PLW0603
    if _config is None:
        _config = load_config()
    return _config


def _get_data_service() -> StockDataService:
    global _data_service  # noqa: PLW0603
    if _data_service is None:
        cfg = _get_config()
        _data_service = StockDataService(
            cache=PriceCache(ttl_seconds=cfg.cache_ttl_seconds),
            latency_seconds=cfg.fetch_latency_seconds,
        )
    return _data_service


def _get_session_store() -> SessionStore:
    global _session_store  # noqa: PLW0603
    if _session_store is None:
        _session_store = SessionStore(delay_seconds=_get_config().auth_delay_seconds)
    return _session_store


def _error(status_code: int, message: str) -> JSONResponse:
    if status_code >= 500:
        logger.warning("Responding %d: %s", status_code, message)
    return JSONResponse(status_code=status_code, content={"error": message})


async def _fetch(symbol: str, start: Optional[str], end: Optional[str]):
    cfg = _get_config()
    return await _get_data_service().fetch(
        symbol.upper(),
        start or cfg.default_start,
        end or cfg.default_end,
    )


# ── Market data ──────────────────────────────────────────────────────────


@router.get("/symbols")
async def get_symbols():
    """Return the quick-pick symbol list and the dashboard defaults."""
    cfg = _get_config()
    return {
        "symbols": POPULAR_SYMBOLS,
        "default_symbol": cfg.default_symbol,
        "default_start": cfg.default_start,
        "default_end": cfg.default_end,
        "prediction_days": cfg.prediction_days,
    }


@router.get("/stocks/{symbol}")
async def get_stock_data(
    symbol: str,
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
):
    """Return the daily bars for a symbol and date range."""
    try:
        bars = await _fetch(symbol, start, end)
    except DataFetchError:
        return _error(502, FETCH_ERROR_MESSAGE)
    return {
        "symbol": symbol.upper(),
        "bars": [asdict(b) for b in bars],
        "count": len(bars),
    }


@router.get("/stocks/{symbol}/indicators")
async def get_indicators(
    symbol: str,
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
):
    """Return technical indicators and price statistics for the series."""
    try:
        bars = await _fetch(symbol, start, end)
    except DataFetchError:
        return _error(502, FETCH_ERROR_MESSAGE)
    if not bars:
        return _error(400, "No data to process")

    summary = summarize(bars)
    return {
        "symbol": symbol.upper(),
        "indicators": asdict(summary),
        "volatility_label": volatility_label(summary.volatility),
        "rsi_zone": rsi_zone(summary.rsi),
        "price_range": price_range(bars),
    }


@router.get("/stocks/{symbol}/predictions")
async def get_predictions(
    symbol: str,
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    days: int = Query(default=30, ge=1, le=365),
    algorithm: str = Query(default="all"),
):
    """Run the forecasters and return their points.

    ``predictions`` always holds every algorithm's run; ``display`` is the
    flat list for the selected *algorithm* (or all of them). ``figure`` is
    the prediction chart drawn from that same ``display`` run.
    """
    if algorithm != "all" and algorithm not in FORECASTER_REGISTRY:
        return _error(404, f"Unknown algorithm: {algorithm}")
    try:
        bars = await _fetch(symbol, start, end)
    except DataFetchError:
        return _error(502, FETCH_ERROR_MESSAGE)
    if not bars:
        return _error(400, "No data to forecast")

    results = run_forecasts(bars, days)
    if algorithm == "all":
        display = [p for preds in results.values() for p in preds]
    else:
        display = results[algorithm]

    chart = render_prediction_chart(bars, display, symbol.upper())

    return {
        "symbol": symbol.upper(),
        "days": days,
        "algorithm": algorithm,
        "predictions": {k: [asdict(p) for p in v] for k, v in results.items()},
        "display": [asdict(p) for p in display],
        "average_confidence": round(average_confidence(results), 1),
        "total_predictions": sum(len(v) for v in results.values()),
        "current_price": bars[-1].close,
        "history_days": len(bars),
        "figure": json.loads(to_figure(chart).to_json()),
    }


@router.get("/stocks/{symbol}/charts/{kind}")
async def get_chart(
    symbol: str,
    kind: str,
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    days: int = Query(default=30, ge=1, le=365),
    algorithm: str = Query(default="all"),
):
    """Return a plotly figure (JSON) for one of the chart kinds.

    The ``prediction`` kind runs the forecasters again, so its points do
    not match an earlier ``/predictions`` call. The dashboard draws the
    ``figure`` returned by ``/predictions`` instead.
    """
    if kind not in CHART_KINDS:
        return _error(404, f"Unknown chart: {kind}. Available: {', '.join(CHART_KINDS)}")
    if kind == "prediction" and algorithm != "all" and algorithm not in FORECASTER_REGISTRY:
        return _error(404, f"Unknown algorithm: {algorithm}")
    try:
        bars = await _fetch(symbol, start, end)
    except DataFetchError:
        return _error(502, FETCH_ERROR_MESSAGE)

    label = symbol.upper()
    if kind == "candlestick":
        chart = render_candlestick(bars, label)
    elif kind == "heatmap":
        chart = render_heatmap(bars, label)
    elif kind == "histogram":
        chart = render_histogram(bars, label)
    else:
        forecasts = []
        if bars:
            results = run_forecasts(bars, days, algorithm)
            forecasts = [p for preds in results.values() for p in preds]
        chart = render_prediction_chart(bars, forecasts, label)

    stats = {k: v for k, v in chart.stats.items() if k != "bins"}
    return {
        "kind": kind,
        "figure": json.loads(to_figure(chart).to_json()),
        "stats": stats,
        "message": chart.message,
    }


# ── Session ──────────────────────────────────────────────────────────────


@router.post("/auth/login")
async def post_login(body: dict):
    """Start a session. Any email/password pair is accepted."""
    user = await _get_session_store().login(
        str(body.get("email", "")), str(body.get("password", "")),
    )
    return {"user": asdict(user), "is_authenticated": True}


@router.post("/auth/signup")
async def post_signup(body: dict):
    """Create a (fabricated) account and start a session."""
    user = await _get_session_store().signup(
        str(body.get("email", "")),
        str(body.get("password", "")),
        str(body.get("name", "")),
    )
    return {"user": asdict(user), "is_authenticated": True}


@router.post("/auth/logout")
async def post_logout():
    _get_session_store().logout()
    return {"user": None, "is_authenticated": False}


@router.get("/auth/session")
async def get_session():
    """Return the current session user, if any."""
    user = _get_session_store().current_user()
    return {
        "user": asdict(user) if user else None,
        "is_authenticated": user is not None,
    }
