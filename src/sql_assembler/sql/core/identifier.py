"""
SQL identifier handling utilities.

Quoting keeps table and column names from colliding with reserved words
(``order``, ``group``, ``key``). It is NOT an injection defense: identifiers
are interpolated into the SQL text and must come from trusted code.
"""

from typing import Optional


def quote_identifier(name: str, dialect: str = "mysql") -> str:
    """
    Quote a single SQL identifier (table, column or alias name).

    Args:
        name: The identifier to quote
        dialect: Database dialect ("mysql", "postgresql")

    Returns:
        Properly quoted identifier

    Examples:
        >>> quote_identifier("order")
        '`order`'
        >>> quote_identifier("column`name")
        '`column``name`'
        >>> quote_identifier("user", dialect="postgresql")
        '"user"'
    """
    if dialect == "postgresql":
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
    # MySQL (and SQLite) accept backticks; escape internal ones by doubling
    escaped = name.replace("`", "``")
    return f"`{escaped}`"


def quote_reference(reference: str, dialect: str = "mysql") -> str:
    """
    Quote a possibly dotted column or table reference part by part.

    A bare ``*`` (or a trailing ``.*``) is left unquoted so that ``users.*``
    still selects every column of ``users``.

    Examples:
        >>> quote_reference("users.id")
        '`users`.`id`'
        >>> quote_reference("*")
        '*'
        >>> quote_reference("u.*")
        '`u`.*'
    """
    if reference == "*":
        return reference
    parts = reference.split(".")
    return ".".join(
        part if part == "*" else quote_identifier(part, dialect) for part in parts
    )


def qualify_table(
    table: str, schema: Optional[str] = None, dialect: str = "mysql"
) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Args:
        table: Table name (may itself be dotted, e.g. ``shop.users``)
        schema: Optional schema / database name
        dialect: Database dialect

    Returns:
        Qualified table name

    Examples:
        >>> qualify_table("users")
        '`users`'
        >>> qualify_table("users", schema="shop")
        '`shop`.`users`'
    """
    quoted_table = quote_reference(table, dialect)
    if schema:
        return f"{quote_identifier(schema, dialect)}.{quoted_table}"
    return quoted_table
