"""
Single-purpose selectors kept for callers of the original API.

Every preset only fills in a query description and delegates to
``find``. Where / having combinators select AND or OR joining, which is the
only thing distinguishing the ``*_by_or`` and ``find_group_*`` variants.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sql_assembler.exceptions import QueryValidationError
from sql_assembler.io.executor import Rows


class PresetsMixin(ABC):
    """Mixin providing legacy selectors on top of ``find``."""

    @abstractmethod
    async def find(self, spec: Any, timeout: Optional[float] = None) -> Rows:
        """Run a select description; supplied by the concrete client."""

    async def find_all(
        self,
        table: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        """``SELECT * FROM table [LIMIT] [OFFSET]``."""
        return await self.find(
            {"table": table, "limit": limit, "offset": offset}, timeout=timeout
        )

    async def find_columns(
        self,
        table: str,
        columns: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        """Select the given columns (all columns when none are given)."""
        return await self.find(
            {
                "table": table,
                "columns": list(columns or ["*"]),
                "limit": limit,
                "offset": offset,
            },
            timeout=timeout,
        )

    async def find_by_where(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        """Equality conditions joined with AND."""
        return await self._find_where(table, where, "AND", limit, offset, timeout)

    async def find_by_or(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        """Equality conditions joined with OR."""
        return await self._find_where(table, where, "OR", limit, offset, timeout)

    async def find_group(self, table: str, group_by: List[str], **kwargs: Any) -> Rows:
        """
        Grouped select; where and having both joined with AND.

        Keyword Args:
            having: Column -> value or ``{operator: value}``
            where: Column -> value equality conditions
            selected: Raw select-list items, e.g. ``["dept", "COUNT(*) AS n"]``
            limit, offset, timeout: As for ``find``
        """
        return await self._find_group(table, group_by, "AND", "AND", **kwargs)

    async def find_group_by_or(self, table: str, group_by: List[str], **kwargs: Any) -> Rows:
        """Grouped select; where and having both joined with OR."""
        return await self._find_group(table, group_by, "OR", "OR", **kwargs)

    async def find_group_by_or_and(
        self, table: str, group_by: List[str], **kwargs: Any
    ) -> Rows:
        """Grouped select; where joined with OR, having with AND."""
        return await self._find_group(table, group_by, "OR", "AND", **kwargs)

    async def find_group_by_and_or(
        self, table: str, group_by: List[str], **kwargs: Any
    ) -> Rows:
        """Grouped select; where joined with AND, having with OR."""
        return await self._find_group(table, group_by, "AND", "OR", **kwargs)

    async def find_with_order_asc(self, table: str, **kwargs: Any) -> Rows:
        """
        Ordered select, ascending by default; where joined with AND.

        Keyword Args:
            where: Column -> value equality conditions
            order_by: Column to sort on (no ORDER BY when omitted)
            order: Direction override
            limit, offset, timeout: As for ``find``
        """
        return await self._find_with_order(table, "ASC", "AND", **kwargs)

    async def find_with_order_asc_by_or(self, table: str, **kwargs: Any) -> Rows:
        """Ordered select, ascending by default; where joined with OR."""
        return await self._find_with_order(table, "ASC", "OR", **kwargs)

    async def find_with_order_desc(self, table: str, **kwargs: Any) -> Rows:
        """Ordered select, descending by default; where joined with AND."""
        return await self._find_with_order(table, "DESC", "AND", **kwargs)

    async def find_with_order_desc_by_or(self, table: str, **kwargs: Any) -> Rows:
        """Ordered select, descending by default; where joined with OR."""
        return await self._find_with_order(table, "DESC", "OR", **kwargs)

    async def _find_where(
        self,
        table: str,
        where: Optional[Mapping[str, Any]],
        combinator: str,
        limit: Optional[int],
        offset: Optional[int],
        timeout: Optional[float],
    ) -> Rows:
        return await self.find(
            {
                "table": table,
                "where": dict(where or {}),
                "where_combinator": combinator,
                "limit": limit,
                "offset": offset,
            },
            timeout=timeout,
        )

    async def _find_group(
        self,
        table: str,
        group_by: List[str],
        where_combinator: str,
        having_combinator: str,
        having: Optional[Mapping[str, Any]] = None,
        where: Optional[Mapping[str, Any]] = None,
        selected: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        if not table or not group_by:
            raise QueryValidationError("Table name and group_by columns are required")
        spec: Dict[str, Any] = {
            "table": table,
            "columns": [],
            "expressions": list(selected or ["*"]),
            "where": dict(where or {}),
            "where_combinator": where_combinator,
            "group_by": list(group_by),
            "having": dict(having or {}),
            "having_combinator": having_combinator,
            "limit": limit,
            "offset": offset,
        }
        return await self.find(spec, timeout=timeout)

    async def _find_with_order(
        self,
        table: str,
        default_direction: str,
        where_combinator: str,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Rows:
        spec: Dict[str, Any] = {
            "table": table,
            "where": dict(where or {}),
            "where_combinator": where_combinator,
            "limit": limit,
            "offset": offset,
        }
        if order_by:
            spec["order_by"] = {order_by: order or default_direction}
        return await self.find(spec, timeout=timeout)
