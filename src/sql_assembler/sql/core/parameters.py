"""
SQL parameter binding utilities.

Compiled queries use positional ``?`` placeholders. SQLAlchemy's ``text()``
construct binds by name, so before execution each placeholder is rewritten
to an indexed name (``:p_0``, ``:p_1``, ...) and the positional values are
remapped into a dict keyed by those names.
"""

from typing import Any, Dict, List, Sequence, Tuple

PLACEHOLDER = "?"
PARAM_PREFIX = "p_"

_QUOTES = ("'", '"', "`")
# MySQL string literals honor backslash escapes; identifiers do not
_BACKSLASH_QUOTES = ("'", '"')


def build_placeholders(count: int) -> List[str]:
    """
    Build a list of positional placeholders.

    Examples:
        >>> build_placeholders(3)
        ['?', '?', '?']
    """
    return [PLACEHOLDER] * count


def build_indexed_params(values: Sequence[Any]) -> Dict[str, Any]:
    """
    Map positional values to indexed parameter names.

    Examples:
        >>> build_indexed_params(["Ana", 30])
        {'p_0': 'Ana', 'p_1': 30}
    """
    return {f"{PARAM_PREFIX}{i}": value for i, value in enumerate(values)}


def to_named_binds(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite ``?`` placeholders to ``:p_N`` binds for ``sqlalchemy.text``.

    Placeholders inside quoted literals and quoted identifiers are left
    alone. A backslash inside a string literal escapes the next character,
    so ``'it\\'s ?'`` stays one literal. Every colon is escaped so that
    text such as ``'10:30'`` or a ``::int`` cast is not mistaken for a bind
    parameter.

    Args:
        sql: SQL text with positional placeholders
        values: Positional parameter values

    Returns:
        Tuple of (rewritten SQL, name -> value mapping)

    Raises:
        ValueError: If the placeholder count does not match ``len(values)``

    Examples:
        >>> to_named_binds("SELECT * FROM `t` WHERE `a` = ? AND `b` = '?'", [1])
        ("SELECT * FROM `t` WHERE `a` = :p_0 AND `b` = '?'", {'p_0': 1})
    """
    out: List[str] = []
    quote = None
    escaped = False
    index = 0
    for char in sql:
        if quote:
            if escaped:
                escaped = False
            elif char == "\\" and quote in _BACKSLASH_QUOTES:
                escaped = True
            elif char == quote:
                quote = None
            out.append("\\:" if char == ":" else char)
            continue
        if char in _QUOTES:
            quote = char
            out.append(char)
        elif char == PLACEHOLDER:
            out.append(f":{PARAM_PREFIX}{index}")
            index += 1
        elif char == ":":
            out.append("\\:")
        else:
            out.append(char)

    if index != len(values):
        raise ValueError(
            f"Placeholder count ({index}) does not match parameter count ({len(values)})"
        )
    return "".join(out), build_indexed_params(values)
