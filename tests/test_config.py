"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from lumidb_sdk.config import LogLevel, Settings, get_settings
from lumidb_sdk.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LUMIDB_URL", "LUMIDB_API_KEY", "LUMIDB_POLL_INTERVAL", "LUMIDB_TIMEOUT", "LUMIDB_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.url is None
    assert settings.api_key is None
    assert settings.poll_interval == 5.0
    assert settings.verify_tls is True
    assert settings.sign_uploads is True
    assert settings.log_level is LogLevel.INFO


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("LUMIDB_API_KEY", "env-key")
    monkeypatch.setenv("LUMIDB_URL", "https://env.test")
    monkeypatch.setenv("LUMIDB_POLL_INTERVAL", "0.5")

    settings = get_settings()

    assert settings.api_key.get_secret_value() == "env-key"
    assert settings.url == "https://env.test"
    assert settings.poll_interval == 0.5


def test_summary_hides_api_key(monkeypatch):
    monkeypatch.setenv("LUMIDB_API_KEY", "env-key")
    summary = get_settings().get_config_summary()
    assert summary["api_key_set"] is True
    assert "env-key" not in str(summary)


@pytest.mark.parametrize(
    "name, value",
    [("LUMIDB_URL", "ftp://lumidb.test"), ("LUMIDB_TIMEOUT", "0"), ("LUMIDB_POLL_INTERVAL", "-1")],
)
def test_invalid_values_raise_configuration_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        get_settings()
