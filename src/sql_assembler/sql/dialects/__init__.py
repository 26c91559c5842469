"""SQL dialects: identifier quoting per database family."""

from typing import Dict, Optional, Protocol, Type, Union

from .mysql import MySQLDialect
from .postgresql import PostgreSQLDialect


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def quote_ref(self, reference: str) -> str: ...
    def qualify(self, table: str, schema: Optional[str] = None) -> str: ...


DIALECTS: Dict[str, Type] = {
    MySQLDialect.name: MySQLDialect,
    PostgreSQLDialect.name: PostgreSQLDialect,
}


def get_dialect(dialect: Union[str, Dialect, None] = None) -> Dialect:
    """
    Resolve a dialect name (or instance) to a dialect object.

    ``None`` falls back to the configured default (``SQLA_DIALECT``).
    """
    if dialect is None:
        from sql_assembler.config import get_settings

        dialect = get_settings().dialect
    if isinstance(dialect, str):
        try:
            return DIALECTS[dialect]()
        except KeyError:
            raise ValueError(
                f"Unknown dialect '{dialect}'. Expected one of {sorted(DIALECTS)}"
            ) from None
    return dialect


__all__ = [
    "Dialect",
    "DIALECTS",
    "MySQLDialect",
    "PostgreSQLDialect",
    "get_dialect",
]
