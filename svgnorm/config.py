"""Process-level configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    dpi: float = 96.0
    log_level: str = "warning"

    model_config = SettingsConfigDict(env_prefix="SVGNORM_", env_file=".env", env_file_encoding="utf-8")


settings = Settings()
