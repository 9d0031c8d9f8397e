"""protolower: Attribute models to Protocol Buffer schemas

A Python library lowering language-agnostic attribute type models (the shapes
API description tools use for requests and responses) into Protocol Buffer
message definitions, together with the Python types the protoc generated
bindings expose for them.

Key Features:
- Top-level primitives, collections and empty payloads become messages
- Nested arrays and maps are wrapped into named intermediate messages
- Recursive types are supported
- Identifiers are sanitized, reserved words escaped and names kept unique
- Pydantic models can be used as input

Quick Start:
    >>> from pydantic import BaseModel
    >>> from protolower import attribute_from_model, to_proto_schema
    >>>
    >>> class Matrix(BaseModel):
    ...     rows: list[list[float]]
    >>>
    >>> print(to_proto_schema(attribute_from_model(Matrix), "Matrix"))
    syntax = "proto3";

    message Matrix {
        repeated ArrayOfDouble rows = 1;
    }

    message ArrayOfDouble {
        repeated double field = 1;
    }
"""

from __future__ import annotations

from .config import LoweringConfig
from .exceptions import InvariantError, ProtolowerError, SchemaError, TagError
from .model import (
    EMPTY,
    Array,
    Attribute,
    Map,
    Object,
    ResultType,
    UserType,
    attribute_from_model,
    dup_attribute,
)
from .naming import NameScope
from .protobuf import (
    ProtoBufScope,
    collect_messages,
    field_name,
    flatten,
    full_message_name,
    make_message,
    materialize,
    message_def,
    message_name,
    native_full_type_name,
    native_full_type_ref,
    native_type_name,
    native_type_ref,
    protobufify,
    to_proto_schema,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "make_message",
    "materialize",
    "flatten",
    "message_name",
    "full_message_name",
    "message_def",
    "native_type_name",
    "native_full_type_name",
    "native_type_ref",
    "native_full_type_ref",
    "field_name",
    "protobufify",
    # Documents
    "to_proto_schema",
    "collect_messages",
    "ProtoBufScope",
    "LoweringConfig",
    # Model
    "Attribute",
    "Array",
    "Map",
    "Object",
    "UserType",
    "ResultType",
    "EMPTY",
    "dup_attribute",
    "attribute_from_model",
    # Naming
    "NameScope",
    # Exceptions
    "ProtolowerError",
    "InvariantError",
    "TagError",
    "SchemaError",
    # Version
    "__version__",
]
