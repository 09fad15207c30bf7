# server/core/config.py

import logging
import secrets
from datetime import timedelta

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Runtime configuration for the expense server.

    Loaded from environment variables and the .env file. Built once by the
    application factory and stored on ``app.state``; nothing else reads the
    environment directly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    database_url: str = "sqlite:///./data/app.db"
    session_secret: str = Field(
        default="",
        validate_default=True,
        description="Key used to sign session cookies"
    )
    app_env: str = "development"
    session_max_age_hours: int = Field(default=24, gt=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    log_level: str = "INFO"
    port: int = 3400

    @field_validator("session_secret", mode="after")
    @classmethod
    def generate_missing_secret(cls, v: str) -> str:
        if not v:
            logger.warning("SESSION_SECRET is not set; sessions will not survive a restart")
            return secrets.token_hex(32)
        return v

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(hours=self.session_max_age_hours)
