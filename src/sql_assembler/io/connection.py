"""
Database connection handle.

``Database`` owns one SQLAlchemy ``AsyncEngine`` (and its connection pool)
plus the executor bound to it. Handles are explicit objects: create as many
as needed and pass them to ``QueryClient``. The module-level API in
``sql_assembler.api`` keeps one process-wide default handle for callers who
prefer the connect()/disconnect() style.
"""

import asyncio
import time
from typing import Any, Mapping, Optional, Union

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sql_assembler.config import Settings, get_settings
from sql_assembler.exceptions import (
    DatabaseConnectionError,
    QueryAssemblerError,
    QueryExecutionError,
    QueryValidationError,
)
from sql_assembler.models import CompiledQuery
from sql_assembler.utils.logging import get_logger

from .executor import ExecutionResult, Executor, SQLAlchemyExecutor

logger = get_logger(__name__)

ConnectionConfig = Union[str, URL, Mapping[str, Any]]

# Keys accepted in a mapping-style connection config
_CONFIG_KEYS = frozenset({"driver", "host", "port", "user", "password", "database", "query"})


def build_url(config: ConnectionConfig, settings: Settings) -> URL:
    """
    Turn a connection config into a SQLAlchemy URL.

    Args:
        config: URL string, ``URL`` or mapping with host/port/user/password/
            database (and optional driver, query)
        settings: Supplies the default driver for mapping configs

    Raises:
        QueryValidationError: If the config is malformed
    """
    if isinstance(config, URL):
        return config
    if isinstance(config, str):
        try:
            return make_url(config)
        except ArgumentError as exc:
            raise QueryValidationError(f"Invalid database URL: {exc}", field="config") from exc
    if isinstance(config, Mapping):
        unknown = set(config) - _CONFIG_KEYS
        if unknown:
            raise QueryValidationError(
                f"Unknown connection option(s): {', '.join(sorted(unknown))}", field="config"
            )
        port = config.get("port")
        return URL.create(
            drivername=config.get("driver") or settings.default_driver,
            username=config.get("user"),
            password=config.get("password"),
            host=config.get("host"),
            port=int(port) if port is not None else None,
            database=config.get("database"),
            query=config.get("query") or {},
        )
    raise QueryValidationError(
        f"Connection config must be a URL or a mapping, got {type(config).__name__}",
        field="config",
    )


class Database:
    """
    A connection handle: engine, pool and executor.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
        executor: Pre-built executor; the handle counts as connected and
            ``connect()`` is not needed. Used to plug in other drivers.

    Example:
        >>> db = Database()
        >>> await db.connect({"host": "localhost", "user": "app",
        ...                   "password": "pw", "database": "shop"})
        >>> result = await db.execute(CompiledQuery("SELECT 1"))
        >>> await db.disconnect()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._engine: Optional[AsyncEngine] = None
        self._executor: Optional[Executor] = executor

    @property
    def is_connected(self) -> bool:
        return self._executor is not None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    async def connect(self, config: Optional[ConnectionConfig] = None) -> "Database":
        """
        Open the engine and verify connectivity with one round trip.

        Args:
            config: Connection config; ``None`` uses ``settings.database_url``

        Returns:
            This handle, connected

        Raises:
            QueryValidationError: If no usable config is available
            DatabaseConnectionError: On authentication or network failure
        """
        if config is None:
            config = self.settings.database_url
        if not config:
            raise QueryValidationError(
                "No connection config given and SQLA_DATABASE_URL is not set",
                field="config",
            )
        url = build_url(config, self.settings)

        engine_kwargs: dict = {"echo": self.settings.echo_sql}
        if url.get_backend_name() != "sqlite":
            engine_kwargs["pool_size"] = self.settings.pool_size
            engine_kwargs["pool_pre_ping"] = True

        try:
            engine = create_async_engine(url, **engine_kwargs)
        except (ArgumentError, ImportError) as exc:
            raise DatabaseConnectionError(f"Cannot create engine for {url.drivername}: {exc}") from exc

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            await engine.dispose()
            logger.error(
                "connection.open_failed",
                target=url.render_as_string(hide_password=True),
                error=str(exc),
            )
            raise DatabaseConnectionError(f"Could not connect to database: {exc}") from exc

        if self._engine is not None:
            logger.warning("connection.replaced")
            await self._engine.dispose()

        self._engine = engine
        self._executor = SQLAlchemyExecutor(engine)
        logger.info(
            "connection.opened",
            backend=url.get_backend_name(),
            driver=url.get_driver_name(),
            host=url.host,
            database=url.database,
        )
        return self

    async def disconnect(self) -> None:
        """
        Dispose of the engine and its pool.

        Disconnecting a handle that is not connected logs a warning and
        returns.

        Raises:
            DatabaseConnectionError: If disposing of the engine fails
        """
        if not self.is_connected:
            logger.warning("connection.disconnect_without_connection")
            return

        if self._engine is not None:
            try:
                await self._engine.dispose()
            except Exception as exc:
                logger.error("connection.close_failed", error=str(exc))
                raise DatabaseConnectionError(f"Could not close database connection: {exc}") from exc

        self._engine = None
        self._executor = None
        logger.info("connection.closed")

    async def execute(
        self, query: CompiledQuery, timeout: Optional[float] = None
    ) -> ExecutionResult:
        """
        Execute a compiled query.

        Args:
            query: SQL text and positional parameters
            timeout: Seconds to wait; ``None`` uses ``settings.query_timeout``

        Returns:
            List of dict rows, or ``MutationResult`` for statements without rows

        Raises:
            QueryExecutionError: If not connected, on driver error, or on timeout
        """
        if self._executor is None:
            logger.error("query.no_connection", sql=query.sql)
            raise QueryExecutionError("Database connection is not available", sql=query.sql)

        if timeout is None:
            timeout = self.settings.query_timeout

        logger.debug("query.executing", sql=query.sql, param_count=len(query.params))
        started = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self._executor.execute(query.sql, query.params), timeout
            )
        except asyncio.TimeoutError as exc:
            logger.error("query.timeout", sql=query.sql, timeout=timeout)
            raise QueryExecutionError(
                f"Query timed out after {timeout} seconds", sql=query.sql
            ) from exc
        except QueryAssemblerError:
            raise
        except Exception as exc:
            logger.error(
                "query.failed",
                sql=query.sql,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise QueryExecutionError(
                f"Query execution failed: {exc}", sql=query.sql
            ) from exc

        logger.debug(
            "query.executed",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            row_count=len(result) if isinstance(result, list) else None,
            affected_rows=None if isinstance(result, list) else result.affected_rows,
        )
        return result
