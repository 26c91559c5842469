"""
Query description models.

Callers describe a statement with a plain mapping. The mapping is validated
into one of the pydantic models below before any SQL is assembled, so bad
input fails with ``QueryValidationError`` at the API boundary instead of at
the database.

Both the original camelCase keys (``orderBy``, ``groupBy``, ``withClause``)
and snake_case field names are accepted. Unknown keys are rejected.

Mapping order is significant: columns, predicates and parameters are emitted
in the insertion order of the dicts supplied.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from sql_assembler.exceptions import QueryValidationError

Combinator = Literal["AND", "OR"]

COMPARISON_OPERATORS = frozenset(
    {
        "=",
        "!=",
        "<>",
        "<",
        "<=",
        ">",
        ">=",
        "<=>",
        "LIKE",
        "NOT LIKE",
        "REGEXP",
        "NOT REGEXP",
        "RLIKE",
        "IS",
        "IS NOT",
    }
)

JOIN_TYPES = frozenset(
    {
        "INNER",
        "LEFT",
        "RIGHT",
        "CROSS",
        "FULL",
        "LEFT OUTER",
        "RIGHT OUTER",
        "FULL OUTER",
        "STRAIGHT",
    }
)

ORDER_DIRECTIONS = frozenset({"ASC", "DESC"})

_WHITESPACE = re.compile(r"\s+")


def normalize_operator(operator: Any) -> str:
    """
    Upper-case and whitespace-normalize a comparison operator.

    Raises:
        ValueError: If the operator is not a recognized comparison operator
    """
    if not isinstance(operator, str):
        raise ValueError(f"Operator must be a string, got {type(operator).__name__}")
    normalized = _WHITESPACE.sub(" ", operator.strip()).upper()
    if normalized not in COMPARISON_OPERATORS:
        raise ValueError(f"Unsupported comparison operator '{operator}'")
    return normalized


def _check_scalar(column: str, value: Any) -> Any:
    if isinstance(value, (Mapping, list, tuple, set)):
        raise ValueError(
            f"Value for '{column}' must be a scalar, got {type(value).__name__}"
        )
    return value


def _operator_condition(column: str, condition: Any) -> Tuple[str, Any]:
    """Split a filter/having value into (operator, value); bare values mean '='."""
    if isinstance(condition, Mapping):
        if len(condition) != 1:
            raise ValueError(
                f"Condition for '{column}' must have exactly one operator, "
                f"got {len(condition)}"
            )
        ((operator, value),) = condition.items()
        return normalize_operator(operator), _check_scalar(column, value)
    return "=", _check_scalar(column, condition)


def _coerce_row_count(value: Any) -> Any:
    # bool is an int subclass; True must not turn into LIMIT 1
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("must be an integer")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped.isdigit():
            raise ValueError(f"must be an integer, got '{value}'")
        return int(stripped)
    return value


class _SpecModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class JoinOn(_SpecModel):
    left: Optional[str] = None
    right: Optional[str] = None


class JoinSpec(_SpecModel):
    """One JOIN clause: ``<type> JOIN table ON left = right``."""

    join_type: str = Field(default="INNER", alias="type")
    table: Optional[str] = None
    on: Optional[JoinOn] = None

    @field_validator("join_type")
    @classmethod
    def _check_join_type(cls, value: str) -> str:
        normalized = _WHITESPACE.sub(" ", value.strip()).upper()
        if normalized not in JOIN_TYPES:
            raise ValueError(f"Unsupported join type '{value}'")
        return normalized

    @property
    def is_complete(self) -> bool:
        """Incomplete joins are skipped by the builders."""
        return bool(self.table and self.on and self.on.left and self.on.right)


class PredicateSpec(_SpecModel):
    """Fields shared by select, update and delete descriptions."""

    table: str = Field(min_length=1)
    alias: Optional[str] = None
    joins: List[JoinSpec] = Field(default_factory=list)
    where: Dict[str, Any] = Field(default_factory=dict)
    or_: Dict[str, Any] = Field(default_factory=dict, alias="or")
    filters: Dict[str, Any] = Field(default_factory=dict)
    order_by: Dict[str, str] = Field(default_factory=dict, alias="orderBy")
    limit: Optional[int] = Field(default=None, ge=0)
    where_combinator: Combinator = Field(default="AND", alias="whereCombinator")

    @field_validator("where", "or_")
    @classmethod
    def _check_equalities(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for column, condition in value.items():
            _check_scalar(column, condition)
        return value

    @field_validator("filters")
    @classmethod
    def _check_filters(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for column, condition in value.items():
            _operator_condition(column, condition)
        return value

    @field_validator("order_by")
    @classmethod
    def _check_order_by(cls, value: Dict[str, str]) -> Dict[str, str]:
        normalized = {}
        for column, direction in value.items():
            upper = direction.strip().upper()
            if upper not in ORDER_DIRECTIONS:
                raise ValueError(
                    f"Order direction for '{column}' must be ASC or DESC, got '{direction}'"
                )
            normalized[column] = upper
        return normalized

    @field_validator("limit", mode="before")
    @classmethod
    def _check_limit(cls, value: Any) -> Any:
        return _coerce_row_count(value)

    @field_validator("where_combinator", mode="before")
    @classmethod
    def _upper_where_combinator(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def filter_conditions(self) -> List[Tuple[str, str, Any]]:
        """Filters as ``(column, operator, value)`` triples in insertion order."""
        return [
            (column, *_operator_condition(column, condition))
            for column, condition in self.filters.items()
        ]


class QuerySpec(PredicateSpec):
    """Description of a SELECT statement."""

    columns: List[str] = Field(default_factory=lambda: ["*"])
    functions: List[str] = Field(default_factory=list)
    expressions: List[str] = Field(default_factory=list)
    subqueries: Dict[str, str] = Field(default_factory=dict)
    distinct: bool = False
    group_by: List[str] = Field(default_factory=list, alias="groupBy")
    having: Dict[str, Any] = Field(default_factory=dict)
    having_combinator: Combinator = Field(default="AND", alias="havingCombinator")
    window: Optional[str] = None
    with_clause: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("with", "withClause", "with_clause"),
    )
    offset: Optional[int] = Field(default=None, ge=0)

    @field_validator("having")
    @classmethod
    def _check_having(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        for column, condition in value.items():
            _operator_condition(column, condition)
        return value

    @field_validator("offset", mode="before")
    @classmethod
    def _check_offset(cls, value: Any) -> Any:
        return _coerce_row_count(value)

    @field_validator("having_combinator", mode="before")
    @classmethod
    def _upper_having_combinator(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def having_conditions(self) -> List[Tuple[str, str, Any]]:
        return [
            (column, *_operator_condition(column, condition))
            for column, condition in self.having.items()
        ]


class UpdateSpec(PredicateSpec):
    """Description of an UPDATE statement; ``set`` must be non-empty."""

    set_: Dict[str, Any] = Field(alias="set", min_length=1)


class DeleteSpec(PredicateSpec):
    """Description of a DELETE statement."""

    offset: Optional[int] = Field(default=None, ge=0)

    @field_validator("offset", mode="before")
    @classmethod
    def _check_offset(cls, value: Any) -> Any:
        return _coerce_row_count(value)


class RefColumn(_SpecModel):
    table: str = Field(min_length=1)
    column: str = Field(min_length=1)


class ColumnDefinition(_SpecModel):
    """Column descriptor accepted by ``create_table``."""

    type: str = Field(min_length=1)
    isnull: Optional[bool] = None
    isprimarykey: bool = False
    is_ref_key: bool = Field(default=False, alias="isRefKey")
    ref_col: Optional[RefColumn] = Field(default=None, alias="refCol")


@dataclass(frozen=True)
class CompiledQuery:
    """SQL text plus positional parameters, in placeholder order."""

    sql: str
    params: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))


@dataclass
class MutationResult:
    """Outcome of an INSERT, UPDATE, DELETE or DDL statement."""

    affected_rows: int
    last_insert_id: Optional[int] = None


SpecT = TypeVar("SpecT", bound=BaseModel)


def parse_spec(model: Type[SpecT], spec: Any, operation: str) -> SpecT:
    """
    Validate a caller-supplied mapping into a spec model.

    Args:
        model: Target pydantic model class
        spec: Mapping (or an already-built model instance)
        operation: Operation name used in the error message

    Raises:
        QueryValidationError: If the mapping is missing or malformed
    """
    if isinstance(spec, model):
        return spec
    if not isinstance(spec, Mapping):
        raise QueryValidationError(
            f"{operation} expects a mapping, got {type(spec).__name__}"
        )
    try:
        return model.model_validate(dict(spec))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or None
        raise QueryValidationError(
            f"Invalid {operation} spec: {first['msg']}", field=location
        ) from exc
