"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is driven by environment variables."""

    # External query tool
    osquery_binary: str = "osqueryi"
    osquery_query_timeout_seconds: float = 30.0
    osquery_version_timeout_seconds: float = 5.0

    # Logging (always written to stderr)
    log_level: str = "INFO"
    log_json: bool = False

    # HTTP surface
    api_host: str = "127.0.0.1"
    api_port: int = 8765

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton – import this from anywhere
settings = Settings()
