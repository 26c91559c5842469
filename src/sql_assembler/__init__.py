"""
sql_assembler: parameterized SQL assembly over an async database connection.

Turns plain query descriptions into SQL text plus positional parameters and
runs them through SQLAlchemy's asyncio engine.

Usage:
    >>> import sql_assembler as sa
    >>> await sa.connect("mysql+aiomysql://app:pw@localhost/shop")
    >>> await sa.find({"table": "users", "where": {"active": 1}, "limit": 10})
"""

from sql_assembler.api import (
    connect,
    create_table,
    delete_records,
    disconnect,
    find,
    find_all,
    find_by_or,
    find_by_where,
    find_columns,
    find_group,
    find_group_by_and_or,
    find_group_by_or,
    find_group_by_or_and,
    find_with_order_asc,
    find_with_order_asc_by_or,
    find_with_order_desc,
    find_with_order_desc_by_or,
    get_client,
    insert,
    raw_query,
    set_client,
    update,
)
from sql_assembler.client import QueryClient
from sql_assembler.exceptions import (
    DatabaseConnectionError,
    QueryAssemblerError,
    QueryExecutionError,
    QueryValidationError,
)
from sql_assembler.io import Database, Executor, SQLAlchemyExecutor
from sql_assembler.models import (
    ColumnDefinition,
    CompiledQuery,
    DeleteSpec,
    JoinSpec,
    MutationResult,
    QuerySpec,
    UpdateSpec,
)

__version__ = "0.3.0"

__all__ = [
    "connect",
    "disconnect",
    "create_table",
    "insert",
    "find",
    "update",
    "delete_records",
    "raw_query",
    "find_all",
    "find_columns",
    "find_by_where",
    "find_by_or",
    "find_group",
    "find_group_by_or",
    "find_group_by_or_and",
    "find_group_by_and_or",
    "find_with_order_asc",
    "find_with_order_asc_by_or",
    "find_with_order_desc",
    "find_with_order_desc_by_or",
    "get_client",
    "set_client",
    "QueryClient",
    "Database",
    "Executor",
    "SQLAlchemyExecutor",
    "QueryAssemblerError",
    "QueryValidationError",
    "DatabaseConnectionError",
    "QueryExecutionError",
    "ColumnDefinition",
    "CompiledQuery",
    "DeleteSpec",
    "JoinSpec",
    "MutationResult",
    "QuerySpec",
    "UpdateSpec",
]
