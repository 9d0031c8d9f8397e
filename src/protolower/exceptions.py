"""Exception hierarchy for protolower.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ProtolowerError for easy catching of any
protolower-specific error.
"""

from __future__ import annotations


class ProtolowerError(Exception):
    """Base exception for all protolower errors."""

    pass


class InvariantError(ProtolowerError):
    """Raised when an internal invariant of the lowering pass is violated.

    These are bugs (in the caller's validation or in protolower itself),
    never user errors, and are not meant to be caught.

    Examples:
        - Unknown data type reaching a type switch
        - Message name requested for a type that is not a user type
    """

    pass


class TagError(InvariantError):
    """Raised when ``rpc:tag`` metadata is present but is not a non-negative integer.

    Tags are expected to be validated before lowering runs.
    """

    pass


class SchemaError(ProtolowerError):
    """Raised when a model cannot be converted into an attribute graph.

    Examples:
        - Unsupported field annotation (enum, Union of several types, ...)
        - Field without a type annotation
    """

    pass
