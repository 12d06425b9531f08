"""
Configuration management for the role-permission layer.
Uses Pydantic Settings for environment variable handling and validation.
"""

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from rolekeeper.core.errors import ConfigurationError

# Environment variables that must be bound before the database can be reached
REQUIRED_DATABASE_VARIABLES = (
    "DATABASE_HOST",
    "DATABASE_USER",
    "DATABASE_PASSWORD",
    "DATABASE_NAME",
)

# Fixed connection pool size
DATABASE_POOL_SIZE = 5


def get_env(key: Optional[str]) -> str:
    """
    Return the value bound to ``key`` in the process environment.

    Args:
        key: Name of the environment variable

    Returns:
        The variable's value

    Raises:
        ConfigurationError: If the key is empty or no value is bound to it
    """
    if not key:
        raise ConfigurationError.missing(key)
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError.missing(key)
    return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_host: str = Field(description="Database server host")
    database_user: str = Field(description="Database user")
    database_password: str = Field(description="Database password")
    database_name: str = Field(description="Database name")
    database_port: Optional[int] = Field(default=5432)
    database_driver: str = Field(default="postgresql+psycopg2")
    database_pool_timeout: int = Field(default=30)
    database_pool_recycle: int = Field(default=3600)
    database_echo: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @field_validator("database_host", "database_user", "database_password", "database_name")
    @classmethod
    def not_blank(cls, v, info):
        """Reject empty strings for required connection values."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.upper()} must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v):
        """Normalize and check the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @property
    def database_url(self) -> URL:
        """Build the SQLAlchemy URL from the individual connection values."""
        return URL.create(
            drivername=self.database_driver,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )

    @property
    def database_url_safe(self) -> str:
        """Database URL with the password masked, for logging."""
        return self.database_url.render_as_string(hide_password=True)


def _describe_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "settings"
        parts.append(f"{field.upper()}: {error['msg']}")
    return "; ".join(parts)


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Load settings from the environment (and an optional ``.env`` file).

    Every required database variable is resolved through :func:`get_env`
    first, so a missing value fails before any connection is attempted.

    Raises:
        ConfigurationError: If a required variable is missing or a value is invalid
    """
    if env_file:
        load_dotenv(env_file, override=False)

    for key in REQUIRED_DATABASE_VARIABLES:
        get_env(key)

    try:
        return Settings(_env_file=env_file)
    except PydanticValidationError as e:
        raise ConfigurationError.invalid(_describe_validation_error(e)) from e


@lru_cache()
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return load_settings()
