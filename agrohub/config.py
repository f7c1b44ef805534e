"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    api_base_url: str = "http://10.0.2.2:8080/api/"
    weather_base_url: str = "https://api.weatherapi.com/v1/"
    weather_api_key: str = ""
    request_timeout: float = 30.0
    token_db_path: str = ":memory:"
    forecast_days: int = 7
    # Cache sizing per repository: entries / seconds.
    feed_cache_size: int = 10
    feed_cache_ttl: float = 120
    user_cache_size: int = 100
    user_cache_ttl: float = 300
    post_cache_size: int = 100
    post_cache_ttl: float = 300
    weather_cache_size: int = 20
    weather_cache_ttl: float = 600

    @field_validator("weather_api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    @field_validator("api_base_url", "weather_base_url")
    @classmethod
    def trailing_slash(cls, v: str) -> str:
        """Relative endpoint paths are joined onto the base URL."""
        return v if v.endswith("/") else v + "/"

    @field_validator(
        "feed_cache_size",
        "feed_cache_ttl",
        "user_cache_size",
        "user_cache_ttl",
        "post_cache_size",
        "post_cache_ttl",
        "weather_cache_size",
        "weather_cache_ttl",
        "request_timeout",
        "forecast_days",
    )
    @classmethod
    def positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    if os.getenv("AGROHUB_API_URL"):
        raw["api_base_url"] = os.environ["AGROHUB_API_URL"]
    raw["weather_api_key"] = os.getenv("WEATHER_API_KEY", raw.get("weather_api_key", ""))
    return Settings(**raw)
