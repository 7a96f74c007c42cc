"""Tests for stocktrend.config — environment variable loading and validation."""

import pytest

from stocktrend.config import load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Ensure StockTrend env vars are cleared between tests."""
    for var in [
        "CACHE_TTL_SECONDS",
        "FETCH_LATENCY_SECONDS",
        "AUTH_DELAY_SECONDS",
        "DEFAULT_SYMBOL",
        "DEFAULT_START",
        "DEFAULT_END",
        "PREDICTION_DAYS",
        "LOG_LEVEL",
        "HTTP_PORT",
    ]:
        monkeypatch.delenv(var, raising=False)


def _no_dotenv(tmp_path):
    # A non-existent env_path keeps load_dotenv from reading a real .env file
    return str(tmp_path / "nonexistent.env")


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        cfg = load_config(env_path=_no_dotenv(tmp_path))
        assert cfg.cache_ttl_seconds == 300.0
        assert cfg.fetch_latency_seconds == 0.0
        assert cfg.auth_delay_seconds == 1.0
        assert cfg.default_symbol == "AAPL"
        assert cfg.default_start == "2024-01-01"
        assert cfg.default_end == "2025-08-30"
        assert cfg.prediction_days == 30
        assert cfg.log_level == "INFO"
        assert cfg.http_port == 8080

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("DEFAULT_SYMBOL", "NVDA")
        monkeypatch.setenv("PREDICTION_DAYS", "7")
        cfg = load_config(env_path=_no_dotenv(tmp_path))
        assert cfg.cache_ttl_seconds == 60.0
        assert cfg.default_symbol == "NVDA"
        assert cfg.prediction_days == 7

    def test_unparseable_number(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HTTP_PORT", "eighty")
        with pytest.raises(ValueError, match="HTTP_PORT"):
            load_config(env_path=_no_dotenv(tmp_path))

    def test_negative_delay_rejected(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTH_DELAY_SECONDS", "-1")
        with pytest.raises(ValueError, match="AUTH_DELAY_SECONDS"):
            load_config(env_path=_no_dotenv(tmp_path))

    def test_config_is_frozen(self, tmp_path):
        cfg = load_config(env_path=_no_dotenv(tmp_path))
        with pytest.raises(AttributeError):
            cfg.http_port = 9000
