"""Application configuration from environment variables."""

import os
from os.path import dirname, abspath, join
from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env in the root project directory
# Current file is backend/installer/config.py
base_dir = dirname(dirname(dirname(abspath(__file__))))
env_file_path = join(base_dir, ".env")

# Explicitly load .env
if os.path.exists(env_file_path):
    load_dotenv(env_file_path)

# Prefix shared by all operator plugin configuration variables
ENV_CONFIG_PREFIX = "INSTALLER_"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_CONFIG_PREFIX,
        env_file=env_file_path,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: str = "Operator Validation"
    debug: bool = False
    log_level: str = "INFO"

    # Validation
    validation_timeout_seconds: float | None = 120.0
    parallel_validation: bool = False

    # OpenTelemetry (optional)
    otel_endpoint: str | None = None
    otel_service_name: str = "installer-operators"

    # Logging sinks (optional)
    syslog_host: str | None = None
    syslog_port: int = 514


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
