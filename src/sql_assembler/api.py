"""
Module-level convenience API over one process-wide default client.

    >>> import sql_assembler as sa
    >>> await sa.connect({"host": "localhost", "user": "app",
    ...                   "password": "pw", "database": "shop"})
    >>> await sa.find({"table": "users", "limit": 10})
    >>> await sa.disconnect()

The default handle is shared mutable state: do not run ``connect`` or
``disconnect`` concurrently with each other. Code that needs several
connections, or isolation in tests, should build its own
``QueryClient(Database(...))`` instead.
"""

from typing import Any, Mapping, Optional, Sequence

from sql_assembler.client import QueryClient
from sql_assembler.io.connection import ConnectionConfig, Database
from sql_assembler.io.executor import ExecutionResult, Rows
from sql_assembler.models import MutationResult

_default_client: Optional[QueryClient] = None


def get_client() -> QueryClient:
    """Return the process-wide default client, creating it on first use."""
    global _default_client
    if _default_client is None:
        _default_client = QueryClient(Database())
    return _default_client


def set_client(client: Optional[QueryClient]) -> None:
    """Replace the process-wide default client (``None`` resets it)."""
    global _default_client
    _default_client = client


async def connect(config: Optional[ConnectionConfig] = None) -> Database:
    """Connect the default handle; see ``Database.connect``."""
    return await get_client().database.connect(config)


async def disconnect() -> None:
    """Disconnect the default handle; a no-op with a warning when not connected."""
    await get_client().database.disconnect()


async def create_table(
    table: str, schema: Mapping[str, Any], timeout: Optional[float] = None
) -> MutationResult:
    return await get_client().create_table(table, schema, timeout=timeout)


async def insert(
    table: str, row: Mapping[str, Any], timeout: Optional[float] = None
) -> MutationResult:
    return await get_client().insert(table, row, timeout=timeout)


async def find(spec: Any, timeout: Optional[float] = None) -> Rows:
    return await get_client().find(spec, timeout=timeout)


async def update(spec: Any, timeout: Optional[float] = None) -> MutationResult:
    return await get_client().update(spec, timeout=timeout)


async def delete_records(spec: Any, timeout: Optional[float] = None) -> MutationResult:
    return await get_client().delete_records(spec, timeout=timeout)


async def raw_query(
    sql: str, params: Optional[Sequence[Any]] = None, timeout: Optional[float] = None
) -> ExecutionResult:
    return await get_client().raw_query(sql, params, timeout=timeout)


# Legacy selectors: same arguments as the QueryClient methods of the same name


async def find_all(table: str, *args: Any, **kwargs: Any) -> Rows:
    return await get_client().find_all(table, *args, **kwargs)


async def find_columns(table: str, *args: Any, **kwargs: Any) -> Rows:
    return await get_client().find_columns(table, *args, **kwargs)


async def find_by_where(table: str, *args: Any, **kwargs: Any) -> Rows:
    return await get_client().find_by_where(table, *args, **kwargs)


async def find_by_or(table: str, *args: Any, **kwargs: Any) -> Rows:
    return await get_client().find_by_or(table, *args, **kwargs)


async def find_group(table: str, group_by: list, **kwargs: Any) -> Rows:
    return await get_client().find_group(table, group_by, **kwargs)


async def find_group_by_or(table: str, group_by: list, **kwargs: Any) -> Rows:
    return await get_client().find_group_by_or(table, group_by, **kwargs)


async def find_group_by_or_and(table: str, group_by: list, **kwargs: Any) -> Rows:
    return await get_client().find_group_by_or_and(table, group_by, **kwargs)


async def find_group_by_and_or(table: str, group_by: list, **kwargs: Any) -> Rows:
    return await get_client().find_group_by_and_or(table, group_by, **kwargs)


async def find_with_order_asc(table: str, **kwargs: Any) -> Rows:
    return await get_client().find_with_order_asc(table, **kwargs)


async def find_with_order_asc_by_or(table: str, **kwargs: Any) -> Rows:
    return await get_client().find_with_order_asc_by_or(table, **kwargs)


async def find_with_order_desc(table: str, **kwargs: Any) -> Rows:
    return await get_client().find_with_order_desc(table, **kwargs)


async def find_with_order_desc_by_or(table: str, **kwargs: Any) -> Rows:
    return await get_client().find_with_order_desc_by_or(table, **kwargs)
