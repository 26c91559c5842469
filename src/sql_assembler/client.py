"""
QueryClient: every public operation bound to an explicit connection handle.

The client compiles a description with the statement builders, then hands
the compiled query to its ``Database``. Validation happens before the
database is touched; execution errors come back as ``QueryExecutionError``.

Example:
    >>> db = await Database().connect("mysql+aiomysql://app:pw@localhost/shop")
    >>> client = QueryClient(db)
    >>> await client.insert("users", {"name": "Ana", "age": 30})
    MutationResult(affected_rows=1, last_insert_id=1)
    >>> await client.find({"table": "users", "where": {"name": "Ana"}})
    [{'id': 1, 'name': 'Ana', 'age': 30}]
"""

from typing import Any, Mapping, Optional, Sequence, Union

from sql_assembler.exceptions import QueryValidationError
from sql_assembler.io.connection import Database
from sql_assembler.io.executor import ExecutionResult, Rows
from sql_assembler.models import CompiledQuery, MutationResult
from sql_assembler.presets import PresetsMixin
from sql_assembler.sql import (
    CreateTableBuilder,
    DeleteBuilder,
    Dialect,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
    get_dialect,
)
from sql_assembler.utils.logging import get_logger

logger = get_logger(__name__)


class QueryClient(PresetsMixin):
    """
    Query assembler bound to one ``Database`` handle.

    Args:
        database: Connection handle; need not be connected yet
        dialect: Dialect name or instance; defaults to ``settings.dialect``
    """

    def __init__(
        self,
        database: Database,
        dialect: Union[str, Dialect, None] = None,
    ) -> None:
        self.database = database
        self.dialect = get_dialect(dialect or database.settings.dialect)
        self.selects = SelectBuilder(self.dialect)
        self.inserts = InsertBuilder(self.dialect)
        self.updates = UpdateBuilder(self.dialect)
        self.deletes = DeleteBuilder(self.dialect)
        self.tables = CreateTableBuilder(self.dialect)

    async def _run(
        self, operation: str, query: CompiledQuery, timeout: Optional[float]
    ) -> ExecutionResult:
        logger.debug(
            "query.compiled",
            operation=operation,
            sql=query.sql,
            param_count=len(query.params),
        )
        return await self.database.execute(query, timeout=timeout)

    async def create_table(
        self,
        table: str,
        schema: Mapping[str, Any],
        timeout: Optional[float] = None,
    ) -> MutationResult:
        """
        Create a table if it does not exist yet.

        Completion is awaited; a driver failure raises ``QueryExecutionError``.
        """
        query = self.tables.build(table, schema)
        result = await self._run("create_table", query, timeout)
        logger.info("table.created", table=table, column_count=len(schema))
        return result

    async def insert(
        self,
        table: str,
        row: Mapping[str, Any],
        timeout: Optional[float] = None,
    ) -> MutationResult:
        """Insert one row; returns affected rows and the generated id."""
        return await self._run("insert", self.inserts.build(table, row), timeout)

    async def find(self, spec: Any, timeout: Optional[float] = None) -> Rows:
        """
        General-purpose select.

        Args:
            spec: Query description mapping (see ``QuerySpec``)
            timeout: Seconds to wait; ``None`` uses the configured default

        Returns:
            Rows as a list of dicts
        """
        return await self._run("find", self.selects.build(spec), timeout)

    async def update(self, spec: Any, timeout: Optional[float] = None) -> MutationResult:
        """Update rows described by ``spec`` (see ``UpdateSpec``)."""
        return await self._run("update", self.updates.build(spec), timeout)

    async def delete_records(
        self, spec: Any, timeout: Optional[float] = None
    ) -> MutationResult:
        """Delete rows described by ``spec`` (see ``DeleteSpec``)."""
        return await self._run("delete_records", self.deletes.build(spec), timeout)

    async def raw_query(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """
        Run caller-written SQL verbatim with ``?`` positional placeholders.

        Raises:
            QueryValidationError: If ``sql`` is not a non-empty string
        """
        if not isinstance(sql, str) or not sql.strip():
            raise QueryValidationError("A valid SQL query string is required", field="sql")
        if params is not None and (
            isinstance(params, (str, bytes)) or not isinstance(params, Sequence)
        ):
            raise QueryValidationError("Parameters must be a sequence", field="params")
        query = CompiledQuery(sql=sql, params=tuple(params or ()))
        return await self._run("raw_query", query, timeout)
