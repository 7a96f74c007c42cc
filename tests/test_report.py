"""Tests for the CLI text report."""

import pytest

from stocktrend.analysis.indicators import IndicatorSummary
from stocktrend.cli.report import format_report
from stocktrend.forecast.base import ForecastPoint
from stocktrend.main import _run_cli


def _summary(**overrides) -> IndicatorSummary:
    fields = dict(
        sma20=101.5,
        sma50=None,
        rsi=72.0,
        volatility=18.0,
        price_change=5.0,
        price_change_pct=5.0,
        avg_volume=4_500_000,
        highest_price=110.0,
        lowest_price=95.0,
    )
    fields.update(overrides)
    return IndicatorSummary(**fields)


def test_report_lines(capsys):
    forecasts = {
        "ma": [ForecastPoint("2025-02-01", 102.25, 0.7, "Moving Average")],
        "lr": [],
    }
    out = format_report("AAPL", 40, 105.0, _summary(), forecasts)
    assert "StockTrend: AAPL" in out
    assert "Latest Close:      $105.00" in out
    assert "SMA 50:            N/A" in out
    assert "72.0 (overbought)" in out
    assert "18.0% (Moderate)" in out
    assert "Avg Volume:        4.5M" in out
    assert "$102.25 on 2025-02-01" in out
    assert "Linear Regression" not in out
    assert capsys.readouterr().out.strip() == out.strip()


def test_report_without_rsi():
    out = format_report("X", 3, 1.0, _summary(rsi=None), {})
    assert "RSI 14:            N/A" in out


def test_long_algorithm_label_keeps_column():
    forecasts = {
        "lr": [ForecastPoint("2025-02-01", 98.5, 0.8, "Linear Regression")],
        "ma": [ForecastPoint("2025-02-01", 102.25, 0.7, "Moving Average")],
    }
    out = format_report("AAPL", 40, 105.0, _summary(), forecasts)
    assert "  Linear Regression: $98.50 on 2025-02-01" in out
    assert "  Moving Average:    $102.25 on 2025-02-01" in out
    assert "  Latest Close:      $105.00" in out


# ── CLI report mode ──────────────────────────────────────────────────────


@pytest.fixture
def _quick_fetch(monkeypatch):
    monkeypatch.setenv("FETCH_LATENCY_SECONDS", "0")
    monkeypatch.setenv("DEFAULT_SYMBOL", "AAPL")


def test_cli_report_prints_summary(_quick_fetch, capsys):
    _run_cli(["--mode", "report", "--start", "2024-01-01", "--end", "2024-03-29", "--days", "5"])
    out = capsys.readouterr().out
    assert "StockTrend: AAPL" in out
    assert "Linear Regression: " in out


def test_cli_report_bad_date_exits_nonzero(_quick_fetch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["--mode", "report", "--start", "garbage"])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert out.count("Failed to fetch stock data. Please try again.") == 1
    assert "StockTrend:" not in out
