"""
SQL UPDATE statement builder.

Clause order:

    UPDATE <table> [AS <alias>] [JOIN ...] SET c = ?, ... [WHERE ...]
    [ORDER BY ...] [LIMIT n]

SET values are bound before WHERE values.
"""

from typing import Any

from sql_assembler.models import CompiledQuery, UpdateSpec, parse_spec

from ..core.predicates import (
    StatementBuffer,
    render_joins,
    render_limit,
    render_order_by,
    render_table,
    render_where,
)
from ..dialects import Dialect


class UpdateBuilder:
    """High-level builder for UPDATE statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def build(self, spec: Any) -> CompiledQuery:
        """
        Compile an update description.

        Raises:
            QueryValidationError: If table or set is missing or empty
        """
        update = parse_spec(UpdateSpec, spec, "update")
        buffer = StatementBuffer(self.dialect)

        buffer.add(f"UPDATE {render_table(buffer, update.table, update.alias)}")
        render_joins(buffer, update.joins)

        assignments = [
            f"{self.dialect.quote_ref(column)} = {buffer.bind(value)}"
            for column, value in update.set_.items()
        ]
        buffer.add(f"SET {', '.join(assignments)}")

        render_where(buffer, update)
        render_order_by(buffer, update.order_by)
        render_limit(buffer, update.limit)
        return buffer.compile()
