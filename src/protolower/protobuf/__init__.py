"""Protocol buffer lowering for protolower.

This module turns attribute graphs into protocol buffer messages and renders
both the .proto text and the Python types of the protoc generated bindings.
"""

from __future__ import annotations

from .convert import ProtoBufScope, collect_messages, to_proto_schema
from .emit import (
    NATIVE_SCALARS,
    PROTO_SCALARS,
    TAG_META,
    full_message_name,
    message_def,
    message_name,
    native_full_type_name,
    native_full_type_ref,
    native_type_name,
    native_type_ref,
    rpc_tag,
)
from .identifiers import (
    FIELD_NAME_META,
    RESERVED_PROTOBUF,
    field_name,
    fix_reserved_protobuf,
    proto_field_name,
    protobufify,
    protobufify_att,
)
from .message import WRAPPED_FIELD_NAME, flatten, make_message, materialize, unwrap_attr, wrap_attr

__all__ = [
    # Lowering
    "make_message",
    "materialize",
    "flatten",
    "wrap_attr",
    "unwrap_attr",
    "WRAPPED_FIELD_NAME",
    # Identifiers
    "protobufify",
    "protobufify_att",
    "field_name",
    "proto_field_name",
    "fix_reserved_protobuf",
    "RESERVED_PROTOBUF",
    "FIELD_NAME_META",
    # Rendering
    "message_name",
    "full_message_name",
    "message_def",
    "native_type_name",
    "native_full_type_name",
    "native_type_ref",
    "native_full_type_ref",
    "rpc_tag",
    "TAG_META",
    "PROTO_SCALARS",
    "NATIVE_SCALARS",
    # Documents
    "ProtoBufScope",
    "collect_messages",
    "to_proto_schema",
]
