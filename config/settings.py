"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interview.db")
    APP_CONFIG_PATH: str = Field(default="app_config.json")

    HINT_TEMPERATURE: float = Field(default=0.5, ge=0.0, le=2.0)
    PROBLEM_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    FOLLOW_UP_TEMPERATURE: float = Field(default=0.6, ge=0.0, le=2.0)
    REPORT_TEMPERATURE: Optional[float] = None

    SANDBOX_BASE_URL: str = "https://judge0-ce.p.rapidapi.com"
    SANDBOX_HOST: str = "judge0-ce.p.rapidapi.com"
    SANDBOX_API_KEY_ENV: str = "JUDGE0_API_KEY"
    SANDBOX_TIMEOUT_S: float = Field(default=10.0, ge=0.1)
    SANDBOX_POLL_INTERVAL_S: float = Field(default=0.25, ge=0.0)
    SANDBOX_MAX_POLLS: int = Field(default=120, ge=1)

    LOG_LEVEL: str = "INFO"
    ENABLE_FILE_LOGS: bool = True
    LOG_FILE: str = "logs/interview.log"
    LOG_MAX_BYTES: int = 5242880
    LOG_BACKUP_COUNT: int = 5

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
