"""StockTrend — application configuration.

Loads .env variables into a typed config object.
Validates numeric variables on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


_NON_NEGATIVE_VARS = [
    "CACHE_TTL_SECONDS",
    "FETCH_LATENCY_SECONDS",
    "AUTH_DELAY_SECONDS",
]


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    cache_ttl_seconds: float
    fetch_latency_seconds: float
    auth_delay_seconds: float
    default_symbol: str
    default_start: str  # YYYY-MM-DD
    default_end: str  # YYYY-MM-DD
    prediction_days: int
    log_level: str
    http_port: int


def _read_number(name: str, default: str, cast=float):
    raw = os.environ.get(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(
            f"Invalid value for environment variable {name}: {raw!r}"
        ) from None


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the offending variable when
    a numeric variable cannot be parsed or a delay / TTL is negative.
    """
    load_dotenv(dotenv_path=env_path)

    cfg = Config(
        cache_ttl_seconds=_read_number("CACHE_TTL_SECONDS", "300"),
        fetch_latency_seconds=_read_number("FETCH_LATENCY_SECONDS", "0.0"),
        auth_delay_seconds=_read_number("AUTH_DELAY_SECONDS", "1.0"),
        default_symbol=os.environ.get("DEFAULT_SYMBOL", "AAPL"),
        default_start=os.environ.get("DEFAULT_START", "2024-01-01"),
        default_end=os.environ.get("DEFAULT_END", "2025-08-30"),
        prediction_days=_read_number("PREDICTION_DAYS", "30", int),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        http_port=_read_number("HTTP_PORT", "8080", int),
    )

    negative = [
        v for v in _NON_NEGATIVE_VARS
        if getattr(cfg, v.lower()) < 0
    ]
    if negative:
        raise ValueError(
            f"Environment variable(s) must not be negative: {', '.join(negative)}"
        )
    return cfg
