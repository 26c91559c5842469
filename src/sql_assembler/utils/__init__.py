"""Shared utilities for sql_assembler."""
