"""Configuration management for sql_assembler.

Usage:
    >>> from sql_assembler.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
    'mysql'
"""

from sql_assembler.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
