"""
SQL SELECT statement builder.

Walks a ``QuerySpec`` in a fixed clause order:

    [WITH ...] SELECT [DISTINCT] <select list> FROM <table> [AS <alias>]
    [JOIN ...] [WHERE ...] [GROUP BY ...] [HAVING ...] [WINDOW ...]
    [ORDER BY ...] [LIMIT n] [OFFSET n]
"""

from typing import Any, List

from sql_assembler.models import CompiledQuery, QuerySpec, parse_spec

from ..core.predicates import (
    StatementBuffer,
    render_condition,
    render_joins,
    render_limit,
    render_order_by,
    render_table,
    render_where,
)
from ..dialects import Dialect


class SelectBuilder:
    """
    High-level builder for SELECT statements.

    Example:
        >>> from sql_assembler.sql import MySQLDialect, SelectBuilder
        >>> builder = SelectBuilder(MySQLDialect())
        >>> query = builder.build({"table": "users", "where": {"a": 1, "b": 2}})
        >>> query.sql
        'SELECT * FROM `users` WHERE `a` = ? AND `b` = ?'
        >>> query.params
        (1, 2)
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def build(self, spec: Any) -> CompiledQuery:
        """
        Compile a select description.

        Args:
            spec: Mapping or ``QuerySpec``

        Returns:
            CompiledQuery with SQL text and positional parameters

        Raises:
            QueryValidationError: If the description is invalid
        """
        query = parse_spec(QuerySpec, spec, "find")
        buffer = StatementBuffer(self.dialect)

        if query.with_clause:
            buffer.add(f"WITH {query.with_clause}")

        select = "SELECT DISTINCT" if query.distinct else "SELECT"
        buffer.add(f"{select} {', '.join(self._select_list(query))}")
        buffer.add(f"FROM {render_table(buffer, query.table, query.alias)}")

        render_joins(buffer, query.joins)
        render_where(buffer, query)

        if query.group_by:
            buffer.add(
                "GROUP BY " + ", ".join(self.dialect.quote_ref(c) for c in query.group_by)
            )

        if query.having:
            parts = [
                render_condition(buffer, column, operator, value)
                for column, operator, value in query.having_conditions()
            ]
            buffer.add(f"HAVING {f' {query.having_combinator} '.join(parts)}")

        if query.window:
            buffer.add(f"WINDOW {query.window}")

        render_order_by(buffer, query.order_by)
        render_limit(buffer, query.limit, query.offset)
        return buffer.compile()

    def _select_list(self, query: QuerySpec) -> List[str]:
        # Columns are identifiers; functions and expressions are raw SQL text
        items = [self.dialect.quote_ref(column) for column in query.columns]
        items.extend(query.functions)
        items.extend(query.expressions)
        items.extend(
            f"({subquery}) AS {self.dialect.quote(alias)}"
            for alias, subquery in query.subqueries.items()
        )
        return items or ["*"]
