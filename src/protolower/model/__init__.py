"""Attribute type model for protolower.

This module provides the attribute graph the lowering pass operates on and an
adapter building such graphs from Pydantic models.
"""

from __future__ import annotations

from .introspect import ModelIntrospector, attribute_from_model
from .types import (
    BOOLEAN,
    BYTES,
    EMPTY,
    FLOAT32,
    FLOAT64,
    INT,
    INT32,
    INT64,
    PRIMITIVES,
    STRING,
    UINT,
    UINT32,
    UINT64,
    Array,
    Attribute,
    DataType,
    Kind,
    Map,
    NamedAttribute,
    Object,
    Primitive,
    ResultType,
    UserType,
    dup_attribute,
    dup_type,
    is_array,
    is_empty,
    is_map,
    is_object,
    is_primitive,
)

__all__ = [
    # Types
    "Attribute",
    "Array",
    "DataType",
    "Kind",
    "Map",
    "NamedAttribute",
    "Object",
    "Primitive",
    "ResultType",
    "UserType",
    # Primitives
    "BOOLEAN",
    "BYTES",
    "FLOAT32",
    "FLOAT64",
    "INT",
    "INT32",
    "INT64",
    "PRIMITIVES",
    "STRING",
    "UINT",
    "UINT32",
    "UINT64",
    "EMPTY",
    # Helpers
    "dup_attribute",
    "dup_type",
    "is_array",
    "is_empty",
    "is_map",
    "is_object",
    "is_primitive",
    # Pydantic adapter
    "ModelIntrospector",
    "attribute_from_model",
]
