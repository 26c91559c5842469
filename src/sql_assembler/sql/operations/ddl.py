"""DDL SQL generation: CREATE TABLE IF NOT EXISTS from a column mapping.

Each schema entry is either a raw SQL type string or a column descriptor::

    {
        "id": "INT AUTO_INCREMENT PRIMARY KEY",
        "email": {"type": "VARCHAR(255)", "isnull": False},
        "team_id": {
            "type": "INT",
            "isRefKey": True,
            "refCol": {"table": "teams", "column": "id"},
        },
    }

Column clauses come first, in mapping order. FOREIGN KEY clauses follow, one
per referencing column, also in mapping order.
"""

from typing import Any, List, Mapping, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from sql_assembler.exceptions import QueryValidationError
from sql_assembler.models import ColumnDefinition, CompiledQuery

from ..dialects import Dialect

ColumnSchema = Union[str, ColumnDefinition]


def _parse_entry(column: str, entry: Any) -> ColumnSchema:
    if isinstance(entry, str):
        if not entry.strip():
            raise QueryValidationError("Column type must not be empty", field=column)
        return entry
    if isinstance(entry, ColumnDefinition):
        return entry
    if isinstance(entry, Mapping):
        try:
            return ColumnDefinition.model_validate(dict(entry))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            location = ".".join([column, *(str(part) for part in first["loc"])])
            raise QueryValidationError(
                f"Invalid column definition: {first['msg']}", field=location
            ) from exc
    raise QueryValidationError(
        f"Column definition must be a type string or a mapping, got {type(entry).__name__}",
        field=column,
    )


class CreateTableBuilder:
    """Builder for CREATE TABLE IF NOT EXISTS statements."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def build(self, table: str, schema: Mapping[str, Any]) -> CompiledQuery:
        """
        Generate the CREATE TABLE statement.

        Args:
            table: Table name
            schema: Column name -> type string or column descriptor

        Returns:
            CompiledQuery without parameters

        Raises:
            QueryValidationError: If table is empty, schema is empty or not a
                mapping, or an entry has an unrecognized shape
        """
        if not table or not isinstance(table, str):
            raise QueryValidationError("Table name is required", field="table")
        if not isinstance(schema, Mapping) or not schema:
            raise QueryValidationError("Schema must be a non-empty mapping", field="schema")

        entries: List[Tuple[str, ColumnSchema]] = [
            (column, _parse_entry(column, entry)) for column, entry in schema.items()
        ]

        clauses: List[str] = []
        for column, entry in entries:
            quoted = self.dialect.quote(column)
            if isinstance(entry, str):
                clauses.append(f"{quoted} {entry}")
                continue
            clause = f"{quoted} {entry.type}"
            if entry.isnull is False:
                clause += " NOT NULL"
            if entry.isprimarykey:
                clause += " PRIMARY KEY"
            clauses.append(clause)

        for column, entry in entries:
            if isinstance(entry, ColumnDefinition) and entry.is_ref_key and entry.ref_col:
                clauses.append(
                    f"FOREIGN KEY ({self.dialect.quote(column)}) "
                    f"REFERENCES {self.dialect.qualify(entry.ref_col.table)}"
                    f"({self.dialect.quote(entry.ref_col.column)})"
                )

        sql = f"CREATE TABLE IF NOT EXISTS {self.dialect.qualify(table)} ({', '.join(clauses)})"
        return CompiledQuery(sql=sql)
