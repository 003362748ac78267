from __future__ import annotations

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class TestSettings(BaseSettings):
    # Tests build their own in-memory engine; this URL only has to be importable.
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_file=None)
