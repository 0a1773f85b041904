"""
Unit tests for layered settings loading.

Usage:
    pytest tests/unit/config/test_settings.py
"""

import pytest
from pydantic import ValidationError

from satstream.config.settings import Settings, load_config


@pytest.fixture
def secrets(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("JWT_SECRET_KEY", "unit-test-secret")


class TestLoadConfig:
    """YAML layering and environment overrides."""

    def test_environment_yaml_overrides_default(self, secrets):
        settings = load_config(env="test")

        assert settings.ENV == "test"
        assert settings.PAYMENT_TIMEOUT_SECONDS == 2
        assert settings.WITHDRAWAL_STALE_AFTER_MINUTES == 30
        assert settings.CB_FAILURE_THRESHOLD == 5

    def test_environment_variables_win(self, secrets, monkeypatch):
        monkeypatch.setenv("WITHDRAWAL_STALE_AFTER_MINUTES", "15")

        settings = load_config(env="test")

        assert settings.WITHDRAWAL_STALE_AFTER_MINUTES == 15

    def test_unknown_environment(self, secrets):
        with pytest.raises(ValueError):
            load_config(env="staging")


class TestSettingsValidation:
    """Field validators."""

    def test_network_normalized(self):
        settings = Settings(
            DATABASE_URL="sqlite+aiosqlite://",
            JWT_SECRET_KEY="k",
            PAYMENT_NETWORK="MAINNET",
        )

        assert settings.PAYMENT_NETWORK == "mainnet"

    def test_unknown_network_rejected(self):
        with pytest.raises(ValidationError):
            Settings(
                DATABASE_URL="sqlite+aiosqlite://",
                JWT_SECRET_KEY="k",
                PAYMENT_NETWORK="signet",
            )
