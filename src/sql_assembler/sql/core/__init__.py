"""Core SQL utilities package."""

from .identifier import qualify_table, quote_identifier, quote_reference
from .parameters import build_indexed_params, build_placeholders, to_named_binds

__all__ = [
    "quote_identifier",
    "quote_reference",
    "qualify_table",
    "build_indexed_params",
    "build_placeholders",
    "to_named_binds",
]
