"""Naming utilities: case conversion, comments and the unique-name scope."""

from __future__ import annotations

from .casing import ACRONYMS, camel_case, comment, snake_case
from .scope import NameScope

__all__ = [
    "ACRONYMS",
    "NameScope",
    "camel_case",
    "comment",
    "snake_case",
]
