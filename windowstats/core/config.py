"""
windowstats: Configuration Management

This module provides centralised configuration management for the
windowstats services. It loads configuration from environment variables
(optionally via a .env file), with strongly typed access via Pydantic
BaseSettings.

Key responsibilities:
- Load and validate configuration from environment variables
- Provide typed configuration objects for the upstream provider and logging
- Expose a cached global configuration accessor for convenience

External dependencies:
- pydantic: Data validation and settings management
- pydantic-settings: Environment variable integration for settings
- python-dotenv: Optional .env loading for local development

Thread safety: Thread-safe (configuration is immutable after initial load)
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# Data Models
# ============================================================================


class UpstreamConfig(BaseModel):
    """Connection settings for the upstream number/price provider.

    Attributes:
        base_url: Base URL of the evaluation service, without trailing
            slash. Number endpoints and ``/stocks`` hang off this URL.
        timeout_seconds: Per-request timeout for upstream calls.
    """

    base_url: str
    timeout_seconds: float = 5.0


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (e.g. "INFO", "DEBUG").
        file: Path to the primary log file.
    """

    level: str = "INFO"
    file: str = "windowstats.log"


class WindowStatsConfig(BaseSettings):
    """Main configuration loaded from environment variables.

    Environment variables use the following mapping by default:

    - UPSTREAM_BASE_URL / UPSTREAM_TIMEOUT_SECONDS for the provider
    - WINDOW_SIZE for the average calculator's window capacity
    - SERVICE_HOST / NUMBERS_PORT / STOCKS_PORT for process startup
    - LOG_LEVEL / LOG_FILE for logging
    - ENVIRONMENT for environment name (development/staging/production)
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Upstream provider
    upstream_base_url: str = Field(
        default="http://20.244.56.144/evaluation-service", alias="UPSTREAM_BASE_URL"
    )
    upstream_timeout_seconds: float = Field(default=5.0, alias="UPSTREAM_TIMEOUT_SECONDS")

    # Average calculator
    window_size: int = Field(default=8, alias="WINDOW_SIZE", ge=1)

    # Process startup
    service_host: str = Field(default="0.0.0.0", alias="SERVICE_HOST")
    numbers_port: int = Field(default=9876, alias="NUMBERS_PORT")
    stocks_port: int = Field(default=3000, alias="STOCKS_PORT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="windowstats.log", alias="LOG_FILE")

    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @property
    def upstream(self) -> UpstreamConfig:
        """Return configuration for the upstream provider."""

        return UpstreamConfig(
            base_url=self.upstream_base_url.rstrip("/"),
            timeout_seconds=self.upstream_timeout_seconds,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Return logging configuration."""

        return LoggingConfig(level=self.log_level, file=self.log_file)


# ============================================================================
# Public API
# ============================================================================


def load_config(env_file: Optional[Path] = None) -> WindowStatsConfig:
    """Load windowstats configuration.

    For local development this function will attempt to load a `.env` file
    from the working directory if one is present. Environment variables
    always take precedence over values from `.env`.

    Args:
        env_file: Optional explicit path to a `.env` file. If omitted,
            the function will look for `.env` in the current working
            directory.

    Returns:
        A fully populated :class:`WindowStatsConfig` instance.

    Raises:
        FileNotFoundError: If an explicit ``env_file`` is provided but
            does not exist.
    """

    if env_file is not None:
        if not env_file.exists():
            msg = f"Environment file not found: {env_file}"
            raise FileNotFoundError(msg)
        # An explicit env_file overrides existing values so tests and
        # local runs can control configuration.
        load_dotenv(env_file, override=True)
    else:
        default_env = Path(".env")
        if default_env.exists():
            load_dotenv(default_env)

    return WindowStatsConfig()  # type: ignore[call-arg]


_global_config: Optional[WindowStatsConfig] = None


def get_config() -> WindowStatsConfig:
    """Return the global configuration singleton.

    The configuration is loaded on first access and cached for
    subsequent calls.
    """

    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config
