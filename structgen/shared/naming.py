"""Naming utilities for Go code generation."""

from __future__ import annotations

import json
from functools import lru_cache

ENCODER_PREFIX = "EncodeStruct"


@lru_cache(maxsize=1024)
def capitalize_first(value: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Unlike ``str.capitalize`` this keeps inner capitals, so the result
    matches Go's exported-identifier convention.

    Examples:
        >>> capitalize_first("user")
        'User'
        >>> capitalize_first("orderItems")
        'OrderItems'
    """
    return value[:1].upper() + value[1:]


def struct_name(table_name: str) -> str:
    """Name of the Go struct generated for a table or view."""
    return capitalize_first(table_name)


def field_name(column_name: str) -> str:
    """Name of the exported Go field generated for a column."""
    return capitalize_first(column_name)


def encoder_name(table_name: str) -> str:
    """Name of the Go decode-and-encode function for a table or view."""
    return f"{ENCODER_PREFIX}{struct_name(table_name)}"


@lru_cache(maxsize=1024)
def go_quote(value: str) -> str:
    """Quote a string as a Go interpreted string literal. Cached for performance."""
    return json.dumps(value)
