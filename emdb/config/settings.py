"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    database_url: str = Field(default="sqlite:///./data/employees.db")
    database_username: Optional[str] = Field(default=None)
    database_password: Optional[str] = Field(default=None)
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def connection_url(self) -> str:
        """
        Database URL with the configured credentials merged in.

        Credentials given separately override any embedded in database_url.
        """
        if not (self.database_username or self.database_password):
            return self.database_url

        url = make_url(self.database_url)
        if self.database_username:
            url = url.set(username=self.database_username)
        if self.database_password:
            url = url.set(password=self.database_password)
        return url.render_as_string(hide_password=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
