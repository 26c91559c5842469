"""
Configuration management for sql_assembler.

Environment-based configuration using Pydantic BaseSettings. Values are read
from ``SQLA_``-prefixed environment variables and an optional ``.env`` file
in the working directory.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Environment variables are loaded with the SQLA_ prefix. For example,
    SQLA_QUERY_TIMEOUT=5 sets a five second default timeout for every call.
    LOG_LEVEL is also honored without the prefix.
    """

    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy async URL used when connect() gets no config",
        validation_alias=AliasChoices("SQLA_DATABASE_URL", "DATABASE_URL"),
    )
    dialect: Literal["mysql", "postgresql"] = Field(
        default="mysql",
        description="Identifier quoting dialect for compiled SQL",
    )
    default_driver: str = Field(
        default="mysql+aiomysql",
        description="SQLAlchemy drivername used when connect() gets a mapping",
    )
    query_timeout: Optional[float] = Field(
        default=None,
        description="Default per-call timeout in seconds (None = wait forever)",
    )
    pool_size: int = Field(default=5, description="Async engine pool size")
    echo_sql: bool = Field(
        default=False, description="Let SQLAlchemy echo every statement"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
        validation_alias=AliasChoices("SQLA_LOG_LEVEL", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_prefix="SQLA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("query_timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("query_timeout must be positive")
        return value

    @field_validator("database_url")
    @classmethod
    def _fix_postgres_scheme(cls, value: Optional[str]) -> Optional[str]:
        # SQLAlchemy rejects the deprecated postgres:// scheme
        if value and value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings instance with values loaded from environment
    """
    return Settings()
