"""
SQL module for parameterized statement assembly.

This module provides the builders that turn query descriptions into SQL text
plus positional parameters, with identifier quoting per dialect.
"""

from .core.identifier import qualify_table, quote_identifier, quote_reference
from .core.parameters import build_indexed_params, to_named_binds
from .dialects import Dialect, MySQLDialect, PostgreSQLDialect, get_dialect
from .operations import (
    CreateTableBuilder,
    DeleteBuilder,
    InsertBuilder,
    SelectBuilder,
    UpdateBuilder,
)

__all__ = [
    "quote_identifier",
    "quote_reference",
    "qualify_table",
    "build_indexed_params",
    "to_named_binds",
    "Dialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "get_dialect",
    "CreateTableBuilder",
    "DeleteBuilder",
    "InsertBuilder",
    "SelectBuilder",
    "UpdateBuilder",
]
