"""Configuration module for the DealDesk application."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

from dealdesk.core.exceptions import ConfigurationError

load_dotenv()

DEFAULT_EXCHANGE_RATES = "EUR=0.92,GBP=0.79,CLP=950,MXN=17.1,COP=3900"


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_rate_pairs(raw: str) -> dict[str, float]:
    """Parse ``CODE=rate`` pairs separated by commas into a rate table."""
    rates: dict[str, float] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        code, sep, value = chunk.partition("=")
        if not sep or not code.strip():
            raise ConfigurationError(f"Malformed exchange rate entry: {chunk!r}")
        try:
            rates[code.strip().upper()] = float(value)
        except ValueError as exc:
            raise ConfigurationError(f"Exchange rate for {code.strip()} is not numeric.") from exc
    return rates


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    BASE_CURRENCY: str
    ERP_BASE_URL: str
    DRAFTING_MODEL: str
    LOG_LEVEL: str
    LOG_FILE: str
    DEFAULT_EXCHANGE_RATES: dict[str, float] = field(default_factory=dict)


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="DealDesk",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        BASE_CURRENCY=os.getenv("BASE_CURRENCY", "USD").strip().upper(),
        ERP_BASE_URL=os.getenv(
            "ERP_BASE_URL",
            "https://odoo.com/web#cids=1&menu_id=1&action=123&model=sale.order&view_type=form",
        ),
        DRAFTING_MODEL=os.getenv("DRAFTING_MODEL", "gemini-2.5-flash"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
        DEFAULT_EXCHANGE_RATES=parse_rate_pairs(os.getenv("EXCHANGE_RATES", DEFAULT_EXCHANGE_RATES)),
    )
    _validate_config(config)
    return config


def _validate_config(config: Config) -> None:
    if config.BASE_CURRENCY != "USD":
        raise ConfigurationError("BASE_CURRENCY must be USD; deal values are stored in USD.")
    for code, rate in config.DEFAULT_EXCHANGE_RATES.items():
        if not math.isfinite(rate) or rate <= 0:
            raise ConfigurationError(f"Exchange rate for {code} must be a positive number.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if not config.ERP_BASE_URL.startswith(("http://", "https://")):
        raise ConfigurationError("ERP_BASE_URL must be an http(s) URL.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
