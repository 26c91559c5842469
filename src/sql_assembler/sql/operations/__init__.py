"""Statement builders, one per SQL operation."""

from .ddl import CreateTableBuilder
from .delete import DeleteBuilder
from .insert import InsertBuilder
from .select import SelectBuilder
from .update import UpdateBuilder

__all__ = [
    "CreateTableBuilder",
    "DeleteBuilder",
    "InsertBuilder",
    "SelectBuilder",
    "UpdateBuilder",
]
