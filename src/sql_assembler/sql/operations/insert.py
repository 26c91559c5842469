"""
SQL INSERT statement builder.
"""

from typing import Any, Mapping

from sql_assembler.exceptions import QueryValidationError
from sql_assembler.models import CompiledQuery

from ..core.parameters import build_placeholders
from ..dialects import Dialect


class InsertBuilder:
    """
    High-level builder for single-row INSERT statements.

    Example:
        >>> from sql_assembler.sql import InsertBuilder, MySQLDialect
        >>> builder = InsertBuilder(MySQLDialect())
        >>> query = builder.build("users", {"name": "Ana", "age": 30})
        >>> query.sql
        'INSERT INTO `users` (`name`, `age`) VALUES (?, ?)'
        >>> query.params
        ('Ana', 30)
    """

    def __init__(self, dialect: Dialect):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect to use for identifier quoting
        """
        self.dialect = dialect

    def build(self, table: str, row: Mapping[str, Any]) -> CompiledQuery:
        """
        Build an INSERT statement for one row.

        Args:
            table: Target table name
            row: Column -> value mapping; column order follows mapping order

        Returns:
            CompiledQuery with one placeholder per column

        Raises:
            QueryValidationError: If table is empty or row is empty / not a mapping
        """
        if not table or not isinstance(table, str):
            raise QueryValidationError("Table name is required", field="table")
        if not isinstance(row, Mapping) or not row:
            raise QueryValidationError("Data mapping must be a non-empty mapping", field="row")

        columns = ", ".join(self.dialect.quote(column) for column in row)
        placeholders = ", ".join(build_placeholders(len(row)))
        sql = (
            f"INSERT INTO {self.dialect.qualify(table)} ({columns}) "
            f"VALUES ({placeholders})"
        )
        return CompiledQuery(sql=sql, params=tuple(row.values()))
