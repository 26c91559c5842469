"""
MySQL-specific SQL dialect implementation.

Backtick identifier quoting. SQLite accepts the same quoting, so this is
also the dialect used against ``sqlite+aiosqlite`` in tests.
"""

from typing import Optional

from ..core.identifier import qualify_table, quote_identifier, quote_reference


class MySQLDialect:
    """MySQL SQL dialect implementation."""

    name = "mysql"

    def quote(self, identifier: str) -> str:
        """Quote a single identifier using backticks."""
        return quote_identifier(identifier, dialect=self.name)

    def quote_ref(self, reference: str) -> str:
        """Quote a dotted column reference (``users.id``) part by part."""
        return quote_reference(reference, dialect=self.name)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a fully qualified table reference."""
        return qualify_table(table, schema, dialect=self.name)
