"""
SQL DELETE statement builder.

Clause order:

    DELETE FROM <table> [AS <alias>] [JOIN ...] [WHERE ...] [ORDER BY ...]
    [LIMIT n] [OFFSET n]
"""

from typing import Any

from sql_assembler.models import CompiledQuery, DeleteSpec, parse_spec

from ..core.predicates import (
    StatementBuffer,
    render_joins,
    render_limit,
    render_order_by,
    render_table,
    render_where,
)
from ..dialects import Dialect


class DeleteBuilder:
    """High-level builder for DELETE statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def build(self, spec: Any) -> CompiledQuery:
        """
        Compile a delete description.

        A description without any predicate compiles to an unconditional
        ``DELETE FROM <table>``; callers wanting a guard must add one.

        Raises:
            QueryValidationError: If table is missing
        """
        delete = parse_spec(DeleteSpec, spec, "delete_records")
        buffer = StatementBuffer(self.dialect)

        buffer.add(f"DELETE FROM {render_table(buffer, delete.table, delete.alias)}")
        render_joins(buffer, delete.joins)
        render_where(buffer, delete)
        render_order_by(buffer, delete.order_by)
        render_limit(buffer, delete.limit, delete.offset)
        return buffer.compile()
