"""
Clause composition shared by the SELECT, UPDATE and DELETE builders.

A ``StatementBuffer`` collects SQL fragments and the values bound to their
placeholders. Every ``bind()`` call appends one value and returns one ``?``,
so parameter order always equals placeholder order as long as fragments are
rendered left to right.
"""

from typing import Any, Iterable, List, Mapping, Optional

from sql_assembler.models import CompiledQuery, JoinSpec, PredicateSpec

from ..dialects import Dialect
from .parameters import PLACEHOLDER


class StatementBuffer:
    """Accumulates SQL fragments and their positional parameters."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.parts: List[str] = []
        self.params: List[Any] = []

    def add(self, fragment: str) -> None:
        self.parts.append(fragment)

    def bind(self, value: Any) -> str:
        self.params.append(value)
        return PLACEHOLDER

    def compile(self) -> CompiledQuery:
        return CompiledQuery(sql=" ".join(self.parts), params=tuple(self.params))


def render_table(buffer: StatementBuffer, table: str, alias: Optional[str]) -> str:
    """Render ``table [AS alias]``."""
    rendered = buffer.dialect.qualify(table)
    if alias:
        rendered += f" AS {buffer.dialect.quote(alias)}"
    return rendered


def render_joins(buffer: StatementBuffer, joins: Iterable[JoinSpec]) -> None:
    """Append one JOIN fragment per complete join; incomplete joins are skipped."""
    dialect = buffer.dialect
    for join in joins:
        if not join.is_complete:
            continue
        buffer.add(
            f"{join.join_type} JOIN {dialect.qualify(join.table)} "
            f"ON {dialect.quote_ref(join.on.left)} = {dialect.quote_ref(join.on.right)}"
        )


def render_condition(
    buffer: StatementBuffer, column: str, operator: str, value: Any
) -> str:
    """Render one ``column operator ?`` condition; ``IS [NOT] None`` renders NULL inline."""
    quoted = buffer.dialect.quote_ref(column)
    if value is None and operator in ("IS", "IS NOT"):
        return f"{quoted} {operator} NULL"
    return f"{quoted} {operator} {buffer.bind(value)}"


def render_where(buffer: StatementBuffer, spec: PredicateSpec) -> None:
    """
    Append the WHERE clause built from ``where``, ``filters`` and ``or``.

    Composition: where-equalities (joined by the where combinator), then
    AND-joined filter conditions, then a parenthesized OR group of
    ``or`` equalities. An OR-joined where group is itself parenthesized when
    anything else follows it. Parameters are bound in exactly that order.
    """
    quote = buffer.dialect.quote_ref
    clauses: List[str] = []

    where_parts = [
        f"{quote(column)} = {buffer.bind(value)}" for column, value in spec.where.items()
    ]
    filter_parts = [
        render_condition(buffer, column, operator, value)
        for column, operator, value in spec.filter_conditions()
    ]

    if where_parts:
        joined = f" {spec.where_combinator} ".join(where_parts)
        if spec.where_combinator == "OR" and (filter_parts or spec.or_):
            joined = f"({joined})"
        clauses.append(joined)
    clauses.extend(filter_parts)

    if spec.or_:
        or_parts = [
            f"{quote(column)} = {buffer.bind(value)}" for column, value in spec.or_.items()
        ]
        clauses.append(f"({' OR '.join(or_parts)})")

    if clauses:
        buffer.add(f"WHERE {' AND '.join(clauses)}")


def render_order_by(buffer: StatementBuffer, order_by: Mapping[str, str]) -> None:
    if order_by:
        quote = buffer.dialect.quote_ref
        buffer.add(
            "ORDER BY "
            + ", ".join(f"{quote(column)} {direction}" for column, direction in order_by.items())
        )


def render_limit(
    buffer: StatementBuffer, limit: Optional[int], offset: Optional[int] = None
) -> None:
    # Values are validated integers, so plain interpolation is safe here
    if limit is not None:
        buffer.add(f"LIMIT {int(limit)}")
    if offset is not None:
        buffer.add(f"OFFSET {int(offset)}")
