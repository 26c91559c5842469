"""Pytest configuration and shared fixtures.

Unit tests never touch a real database: they run the client against a
``RecordingExecutor`` that stores every (sql, params) pair it receives.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import pytest

from sql_assembler.client import QueryClient
from sql_assembler.config import Settings
from sql_assembler.io.connection import Database


class RecordingExecutor:
    """Executor test double: records calls, returns or raises on demand."""

    def __init__(self, result: Any = None, error: Optional[Exception] = None):
        self.calls: List[Tuple[str, List[Any]]] = []
        self.result = [] if result is None else result
        self.error = error

    async def execute(self, sql: str, params: Sequence[Any]) -> Any:
        self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> List[Any]:
        return self.calls[-1][1]


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any .env file in the working directory."""
    return Settings(_env_file=None, database_url=None, query_timeout=None)


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def database(settings: Settings, executor: RecordingExecutor) -> Database:
    return Database(settings=settings, executor=executor)


@pytest.fixture
def client(database: Database) -> QueryClient:
    return QueryClient(database, dialect="mysql")
