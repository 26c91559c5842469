"""
PostgreSQL-specific SQL dialect implementation.

Double-quote identifier quoting. Placeholders stay ``?`` in compiled
queries; the executor rewrites them to named binds for every driver.
"""

from typing import Optional

from ..core.identifier import qualify_table, quote_identifier, quote_reference


class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"

    def quote(self, identifier: str) -> str:
        """Quote an identifier using PostgreSQL syntax (double quotes)."""
        return quote_identifier(identifier, dialect=self.name)

    def quote_ref(self, reference: str) -> str:
        """Quote a dotted column reference part by part."""
        return quote_reference(reference, dialect=self.name)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a fully qualified table reference."""
        return qualify_table(table, schema, dialect=self.name)
