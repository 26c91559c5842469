"""
Tests for environment-driven Settings.
"""

import pytest
from pydantic import ValidationError

from sql_assembler.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "SQLA_DATABASE_URL",
        "DATABASE_URL",
        "SQLA_DIALECT",
        "SQLA_QUERY_TIMEOUT",
        "SQLA_POOL_SIZE",
        "SQLA_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.database_url is None
        assert settings.dialect == "mysql"
        assert settings.default_driver == "mysql+aiomysql"
        assert settings.query_timeout is None
        assert settings.pool_size == 5
        assert settings.echo_sql is False
        assert settings.log_level == "INFO"

    def test_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("SQLA_DATABASE_URL", "mysql+aiomysql://app:pw@db/shop")
        monkeypatch.setenv("SQLA_DIALECT", "postgresql")
        monkeypatch.setenv("SQLA_QUERY_TIMEOUT", "2.5")
        monkeypatch.setenv("SQLA_POOL_SIZE", "10")

        settings = Settings(_env_file=None)

        assert settings.database_url == "mysql+aiomysql://app:pw@db/shop"
        assert settings.dialect == "postgresql"
        assert settings.query_timeout == 2.5
        assert settings.pool_size == 10

    def test_unprefixed_fallbacks(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///app.db")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///app.db"
        assert settings.log_level == "DEBUG"

    def test_postgres_scheme_is_normalized(self):
        settings = Settings(_env_file=None, database_url="postgres://u:p@db/app")
        assert settings.database_url == "postgresql://u:p@db/app"

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_timeout_must_be_positive(self, timeout):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, query_timeout=timeout)

    def test_unknown_dialect_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, dialect="oracle")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
