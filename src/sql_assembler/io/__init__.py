"""Database I/O: connection handles and statement executors."""

from .connection import Database, build_url
from .executor import ExecutionResult, Executor, Rows, SQLAlchemyExecutor

__all__ = [
    "Database",
    "build_url",
    "ExecutionResult",
    "Executor",
    "Rows",
    "SQLAlchemyExecutor",
]
