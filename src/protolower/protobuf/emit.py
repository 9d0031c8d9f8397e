"""Protocol buffer and native type rendering.

Two read-only walks over a lowered attribute graph share the naming rules of
:mod:`protolower.protobuf.identifiers` and the registry of a
:class:`~protolower.naming.NameScope`:

- :func:`message_def` renders the .proto text (field types and message bodies)
- :func:`native_type_name` / :func:`native_type_ref` render the Python type
  exposed by the bindings protoc generates from that .proto text

Because both read names from the same scope, a message is always called the
same in the schema and in the native references.
"""

from __future__ import annotations

import re

from ..exceptions import InvariantError, TagError
from ..model.types import Array, Attribute, Kind, Map, Object, Primitive, UserType, is_object
from ..naming.casing import comment
from ..naming.scope import NameScope
from .identifiers import proto_field_name, protobufify

TAG_META = "rpc:tag"

# Protocol buffer scalar types. Signed integers use the zigzag encodings.
PROTO_SCALARS: dict[Kind, str] = {
    Kind.BOOLEAN: "bool",
    Kind.INT: "sint32",
    Kind.INT32: "sint32",
    Kind.INT64: "sint64",
    Kind.UINT: "uint32",
    Kind.UINT32: "uint32",
    Kind.UINT64: "uint64",
    Kind.FLOAT32: "float",
    Kind.FLOAT64: "double",
    Kind.STRING: "string",
    Kind.BYTES: "bytes",
}

# Python types protoc's Python bindings expose for each scalar.
NATIVE_SCALARS: dict[Kind, str] = {
    Kind.BOOLEAN: "bool",
    Kind.INT: "int",
    Kind.INT32: "int",
    Kind.INT64: "int",
    Kind.UINT: "int",
    Kind.UINT32: "int",
    Kind.UINT64: "int",
    Kind.FLOAT32: "float",
    Kind.FLOAT64: "float",
    Kind.STRING: "str",
    Kind.BYTES: "bytes",
}

_TAG_RE = re.compile(r"[0-9]+")


def message_name(att: Attribute, scope: NameScope) -> str:
    """Return the protocol buffer message name of the user type of ``att``."""
    return full_message_name(att, "", scope)


def full_message_name(att: Attribute, pkg: str, scope: NameScope) -> str:
    """Return the message name of the user type of ``att`` qualified with ``pkg``.

    Raises:
        InvariantError: If ``att`` is not a user type
    """
    dt = att.type
    if not isinstance(dt, UserType):
        raise InvariantError(f"data type is not a user type: received {type(dt).__name__}")
    name = scope.hashed_unique(dt.uid, protobufify(dt.name, True))
    if pkg == "":
        return name
    return f"{pkg}.{name}"


def message_def(att: Attribute, scope: NameScope, *, comment_width: int = 80) -> str:
    """Return the proto3 text for ``att``.

    For an object this is the message body, i.e. the part that follows
    ``message Foo``::

         {
            // Identifier of the user
            string id = 1;
            repeated Role roles = 2;
        }

    For any other type it is the field type (``sint32``, ``repeated string``,
    ``map<string, Foo>``, ``Foo``).

    Raises:
        InvariantError: If an unknown data type is reached
        TagError: If a field carries a malformed ``rpc:tag``
    """
    dt = att.type
    if isinstance(dt, Primitive):
        return native_message_type_name(dt)
    if isinstance(dt, Array):
        return "repeated " + message_def(dt.elem_type, scope, comment_width=comment_width)
    if isinstance(dt, Map):
        key = message_def(dt.key_type, scope, comment_width=comment_width)
        elem = message_def(dt.elem_type, scope, comment_width=comment_width)
        return f"map<{key}, {elem}>"
    if isinstance(dt, UserType):
        return message_name(att, scope)
    if isinstance(dt, Object):
        lines = [" {"]
        for nat in dt:
            fn = proto_field_name(nat.attribute, nat.name)
            fnum = rpc_tag(nat.attribute)
            typ = message_def(nat.attribute, scope, comment_width=comment_width)
            desc = ""
            if nat.attribute.description:
                desc = comment(nat.attribute.description, comment_width).replace("\n", "\n\t") + "\n\t"
            lines.append(f"\t{desc}{typ} {fn} = {fnum};")
        lines.append("}")
        return "\n".join(lines)
    raise InvariantError(f"unknown data type {type(dt).__name__}")


def native_message_type_name(dt: Primitive) -> str:
    """Return the protocol buffer scalar type for a primitive."""
    try:
        return PROTO_SCALARS[dt.kind]
    except (AttributeError, KeyError):
        raise InvariantError(f"cannot compute protocol buffer type for {dt!r}") from None


def native_python_type_name(dt: Primitive) -> str:
    """Return the Python type the protoc bindings use for a primitive."""
    try:
        return NATIVE_SCALARS[dt.kind]
    except (AttributeError, KeyError):
        raise InvariantError(f"cannot compute native type for {dt!r}") from None


def native_type_name(att: Attribute, scope: NameScope) -> str:
    """Return the Python type name protoc generates for ``att``."""
    return native_full_type_name(att, "", scope)


def native_full_type_name(att: Attribute, pkg: str, scope: NameScope) -> str:
    """Return the Python type name protoc generates for ``att``, qualified with ``pkg``.

    Example:
        >>> native_full_type_name(Attribute(Map(Attribute(STRING), Attribute(user))), "pb", scope)
        'dict[str, Optional[pb.User]]'
    """
    dt = att.type
    if isinstance(dt, UserType):
        return full_message_name(att, pkg, scope)
    if isinstance(dt, Primitive):
        return native_python_type_name(dt)
    if isinstance(dt, Array):
        return f"list[{native_full_type_ref(dt.elem_type, pkg, scope)}]"
    if isinstance(dt, Map):
        key = native_full_type_ref(dt.key_type, pkg, scope)
        elem = native_full_type_ref(dt.elem_type, pkg, scope)
        return f"dict[{key}, {elem}]"
    if isinstance(dt, Object):
        return scope.native_type_def(att, lambda member: native_full_type_ref(member, pkg, scope))
    raise InvariantError(f"unknown data type {type(dt).__name__}")


def native_type_ref(att: Attribute, scope: NameScope) -> str:
    """Return the Python type reference for ``att``; see :func:`native_full_type_ref`."""
    return native_full_type_ref(att, "", scope)


def native_full_type_ref(att: Attribute, pkg: str, scope: NameScope) -> str:
    """Return the Python type reference for ``att`` qualified with ``pkg``.

    Message references use ``Optional[...]`` to mark a value owned by the
    enclosing message. This is a typing convention: the bindings return a
    default instance for an unset message field, never None. Scalars and
    collections are referenced by their bare type name.
    """
    name = native_full_type_name(att, pkg, scope)
    if is_object(att.type):
        return f"Optional[{name}]"
    return name


def rpc_tag(att: Attribute) -> int:
    """Return the field number recorded in the ``rpc:tag`` metadata, 0 if none.

    Raises:
        TagError: If the metadata is not a non-negative integer
    """
    values = att.meta.get(TAG_META)
    if values is None:
        return 0
    if not values or not _TAG_RE.fullmatch(values[0]):
        raise TagError(f"invalid {TAG_META} value {values!r}")
    return int(values[0])
