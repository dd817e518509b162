# backend/game_completion/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

_BACKEND_ROOT = Path(__file__).resolve().parents[2]

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug("[CONFIG] Looking for .env at: %s (exists=%s)", env_path, env_path.exists())
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Runtime settings for the game completion package."""

    environment: Literal["local", "dev", "test", "stg", "prod"] = Field(
        default="local",
        description="Deployment environment name",
    )
    database_url: str = Field(
        default="sqlite:///./game_completion.db",
        description="SQLAlchemy URL of the store holding game, attempt and grade rows",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")
    log_level: str = Field(default="INFO", description="Root log level")
    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language used when resolving rule descriptions",
    )
    slow_operation_threshold_s: float = Field(
        default=1.0,
        description="Service operations slower than this are logged as warnings",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        env_prefix="GAME_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, value: object) -> object:
        if isinstance(value, str):
            cleaned = value.strip().lower().replace("-", "_")
            return cleaned or DEFAULT_LANGUAGE
        return value


settings = Settings()
