"""Protocol buffer identifiers.

Turns arbitrary design names into identifiers protoc accepts and that match
the names protoc itself derives for the generated bindings.
"""

from __future__ import annotations

import re

from ..model.types import Attribute
from ..naming.casing import camel_case, snake_case

# Reserved protocol buffer keywords and scalar type names, compared lower case.
RESERVED_PROTOBUF = frozenset(
    {
        # types
        "bool",
        "bytes",
        "double",
        "fixed32",
        "fixed64",
        "float",
        "int32",
        "int64",
        "sfixed32",
        "sfixed64",
        "sint32",
        "sint64",
        "string",
        "uint32",
        "uint64",
        # keywords
        "enum",
        "import",
        "map",
        "message",
        "oneof",
        "option",
        "package",
        "public",
        "repeated",
        "reserved",
        "returns",
        "rpc",
        "service",
        "syntax",
    }
)

FIELD_NAME_META = "struct:field:name"

_LEADING_NON_LETTERS = re.compile(r"^[^A-Za-z]+")


def identifier_token(name: str, first_upper: bool) -> str:
    """Return the compact CamelCase token for ``name`` without reserved-word escaping.

    Any transport specific suffix (``"name:transport_name"``) is dropped first.
    Acronyms are not upper-cased since protoc does not know about them
    (``"api"`` becomes ``"Api"``, not ``"API"``).
    """
    idx = name.find(":")
    if idx > 0:
        name = name[:idx]
    return camel_case(_LEADING_NON_LETTERS.sub("", name), first_upper, use_acronyms=False)


def protobufify(name: str, first_upper: bool) -> str:
    """Make a valid protocol buffer identifier out of any string.

    Characters that are neither letters nor digits are removed and the result
    is CamelCase. Names colliding with a reserved word get a trailing ``_``.

    Args:
        name: Arbitrary string
        first_upper: Whether the identifier starts with an upper case letter

    Returns:
        The identifier; ``"Val"`` (or ``"val"``) if no valid character is left

    Example:
        >>> protobufify("user-name", False)
        'userName'
        >>> protobufify("Enum", True)
        'Enum_'
    """
    if name == "":
        return ""
    token = identifier_token(name, first_upper)
    if token == "":
        return "Val" if first_upper else "val"
    return fix_reserved_protobuf(token)


def protobufify_att(att: Attribute, name: str, first_upper: bool) -> str:
    """Call :func:`protobufify` with the ``struct:field:name`` override of ``att`` if any."""
    override = att.meta_value(FIELD_NAME_META)
    if override:
        name = override
    return protobufify(name, first_upper)


def field_name(att: Attribute, name: str, first_upper: bool = False) -> str:
    """Return the name protoc's Python bindings use for a field.

    The bindings expose fields under their .proto name, so this is the name
    :func:`proto_field_name` writes into the message definition.

    Args:
        att: Field attribute, read for the ``struct:field:name`` override
        name: Member name in the attribute graph
        first_upper: Return the upper case form protoc uses for the
            ``<NAME>_FIELD_NUMBER`` class constant instead

    Example:
        >>> field_name(Attribute(STRING), "userName")
        'user_name'
        >>> field_name(Attribute(STRING), "userName", True)
        'USER_NAME'
    """
    fn = proto_field_name(att, name)
    if first_upper:
        return fn.upper()
    return fn


def proto_field_name(att: Attribute, name: str) -> str:
    """Return the lower_snake_case field identifier used in message definitions."""
    return snake_case(protobufify_att(att, name, False))


def fix_reserved_protobuf(word: str) -> str:
    """Append an underscore to protocol buffer reserved keywords."""
    if word.lower() in RESERVED_PROTOBUF:
        return word + "_"
    return word
