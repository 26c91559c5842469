"""
Exception hierarchy for the query assembler.

Every public operation fails with one of the three concrete kinds below.
Driver and pydantic errors are chained through ``__cause__`` so the original
failure stays inspectable.
"""

from typing import Dict, Optional


class QueryAssemblerError(Exception):
    """Base exception for all sql_assembler errors."""

    pass


class QueryValidationError(QueryAssemblerError):
    """
    Raised when a query description is missing or malformed.

    Raised before anything is sent to the database: missing table name,
    empty data mapping, empty SQL string, bad limit/offset, unknown
    operator, malformed schema entry.

    Args:
        message: Error description
        field: Name of the offending input field (optional)
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{message} (field='{field}')"
        super().__init__(message)


class DatabaseConnectionError(QueryAssemblerError):
    """Raised when opening or closing the database connection fails."""

    pass


class QueryExecutionError(QueryAssemblerError):
    """
    Raised when a statement cannot be executed.

    Covers a missing connection, a driver rejection and a per-call timeout.

    Args:
        message: Error description
        sql: The SQL text that was being executed (optional)
    """

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to structured dict for logging."""
        cause = self.__cause__
        return {
            "error_type": type(self).__name__,
            "message": str(self),
            "sql": self.sql,
            "original_error_type": type(cause).__name__ if cause else None,
            "original_error_message": str(cause) if cause else None,
        }
