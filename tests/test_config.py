from __future__ import annotations

import pytest

from dealdesk.core.config import _build_config, get_config, parse_rate_pairs
from dealdesk.core.exceptions import ConfigurationError


def test_default_config_loads(monkeypatch):
    monkeypatch.delenv("EXCHANGE_RATES", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    config = _build_config("development")
    assert config.APP_NAME == "DealDesk"
    assert config.BASE_CURRENCY == "USD"
    assert config.DEFAULT_EXCHANGE_RATES["CLP"] == 950


def test_production_disables_debug(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    assert _build_config("production").DEBUG is False


def test_parse_rate_pairs():
    assert parse_rate_pairs("eur=0.9, CLP=950,") == {"EUR": 0.9, "CLP": 950.0}


@pytest.mark.parametrize("raw", ["EUR", "=0.9", "EUR=abc"])
def test_malformed_rate_pairs(raw):
    with pytest.raises(ConfigurationError):
        parse_rate_pairs(raw)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("EXCHANGE_RATES", "EUR=-1"),
        ("EXCHANGE_RATES", "EUR=inf"),
        ("LOG_LEVEL", "CHATTY"),
        ("BASE_CURRENCY", "EUR"),
        ("ERP_BASE_URL", "ftp://erp"),
    ],
)
def test_invalid_settings_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        _build_config("development")


def test_get_config_is_cached():
    assert get_config() is get_config()
