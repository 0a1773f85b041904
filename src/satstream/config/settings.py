"""
SatStream settings.

Values are layered, highest priority first:
1. Process environment (optionally seeded from .env.<env>)
2. config/<env>.yaml
3. config/default.yaml
4. Field defaults below
"""

import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
CONFIG_DIR = PROJECT_ROOT / "config"

ENVIRONMENTS = ("development", "test", "production")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
BITCOIN_NETWORKS = ("mainnet", "testnet")


class Settings(BaseSettings):
    """
    Service settings.

    DATABASE_URL and JWT_SECRET_KEY have no default and must be provided.
    Secrets belong in the environment, never in the YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "SatStream"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # JWT Authentication (from environment - REQUIRED in production)
    JWT_SECRET_KEY: str = Field(..., description="JWT secret key")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_HOURS: int = Field(default=24, ge=1)

    # Payment executor (Lightning node bridge)
    PAYMENT_NODE_URL: str = Field(
        default="http://lightning-node:9735",
        description="Lightning node bridge base URL",
    )
    PAYMENT_NODE_API_KEY: Optional[str] = Field(default=None)
    PAYMENT_NETWORK: str = Field(default="testnet")
    PAYMENT_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound on a single payment attempt",
    )

    # Resilience - Circuit Breaker
    CB_FAILURE_THRESHOLD: int = Field(
        default=5,
        description="Circuit breaker failure threshold",
    )
    CB_TIMEOUT_SECONDS: float = Field(
        default=60.0,
        description="Circuit breaker open state timeout",
    )

    # Withdrawals
    WITHDRAWAL_STALE_AFTER_MINUTES: int = Field(
        default=60,
        ge=1,
        description="Pending withdrawals older than this need reconciliation",
    )

    # Real-time relay
    RELAY_MAX_CLIENTS: int = Field(
        default=1000,
        ge=0,
        description="Maximum concurrent relay viewers (0 = unlimited)",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid LOG_LEVEL {v!r}. Must be one of: {LOG_LEVELS}")
        return v.upper()

    @field_validator("PAYMENT_NETWORK")
    @classmethod
    def validate_payment_network(cls, v: str) -> str:
        """Payouts on the wrong chain are unrecoverable, so reject typos early."""
        if v.lower() not in BITCOIN_NETWORKS:
            raise ValueError(
                f"Invalid PAYMENT_NETWORK {v!r}. Must be one of: {BITCOIN_NETWORKS}"
            )
        return v.lower()


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r") as f:
        return yaml.safe_load(f) or {}


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > <env>.yaml > default.yaml > field defaults

    Args:
        config_file: YAML file under config/ (default: "<env>.yaml")
        env_file: dotenv file at the project root (default: ".env.<env>")
        env: Environment name (default: $ENV, then "production")

    Returns:
        Settings instance

    Raises:
        ValueError: Unknown environment name
        pydantic.ValidationError: Missing or invalid values
    """
    environment = env or os.getenv("ENV", "production")
    if environment not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown environment {environment!r}. Must be one of: {ENVIRONMENTS}"
        )

    dotenv_path = PROJECT_ROOT / (env_file or f".env.{environment}")
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=True)

    values = _read_yaml(CONFIG_DIR / "default.yaml")
    values.update(_read_yaml(CONFIG_DIR / (config_file or f"{environment}.yaml")))
    values.setdefault("ENV", environment)

    # Environment variables win over YAML values
    return Settings(**{k: v for k, v in values.items() if k not in os.environ})


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    global _settings
    _settings = None
