"""
Statement executors.

An executor runs one SQL statement with positional ``?`` parameters and
returns either the result rows (as dicts) or a ``MutationResult``. The
assembler only depends on the ``Executor`` protocol; ``SQLAlchemyExecutor``
is the implementation used by ``Database.connect``.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from sqlalchemy import text
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncEngine

from sql_assembler.exceptions import QueryValidationError
from sql_assembler.models import MutationResult
from sql_assembler.sql.core.parameters import to_named_binds

Rows = List[Dict[str, Any]]
ExecutionResult = Union[Rows, MutationResult]

_INSERT_PREFIXES = ("INSERT", "REPLACE")


class Executor(Protocol):
    """Anything that can run ``(sql, params)`` asynchronously."""

    async def execute(self, sql: str, params: Sequence[Any]) -> ExecutionResult: ...


def _last_insert_id(sql: str, result: CursorResult) -> Optional[int]:
    if not sql.lstrip().upper().startswith(_INSERT_PREFIXES):
        return None
    # Not every DBAPI driver reports lastrowid (asyncpg does not)
    try:
        return result.lastrowid
    except (AttributeError, NotImplementedError):
        return None


class SQLAlchemyExecutor:
    """
    Executor backed by a SQLAlchemy ``AsyncEngine``.

    Each statement checks out a pooled connection and runs inside
    ``engine.begin()``: committed on success, rolled back on error.

    Example:
        >>> from sqlalchemy.ext.asyncio import create_async_engine
        >>> engine = create_async_engine("mysql+aiomysql://app:pw@localhost/shop")
        >>> executor = SQLAlchemyExecutor(engine)
        >>> rows = await executor.execute("SELECT * FROM `users` WHERE `id` = ?", [7])
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def execute(self, sql: str, params: Sequence[Any]) -> ExecutionResult:
        try:
            statement, binds = to_named_binds(sql, params)
        except ValueError as exc:
            raise QueryValidationError(str(exc), field="params") from exc

        async with self.engine.begin() as conn:
            result = await conn.execute(text(statement), binds)
            if result.returns_rows:
                return [dict(row) for row in result.mappings().all()]
            return MutationResult(
                affected_rows=result.rowcount,
                last_insert_id=_last_insert_id(sql, result),
            )
