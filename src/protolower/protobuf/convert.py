"""Protobuf schema generation.

This module lowers attributes into complete .proto documents and provides the
naming context used by code that links the protoc generated bindings to the
attribute types.
"""

from __future__ import annotations

import re
from typing import Optional

from ..config import LoweringConfig
from ..logging import get_logger
from ..model.types import Array, Attribute, Map, Object, UserType
from ..naming.casing import comment
from ..naming.scope import NameScope
from .emit import message_def, message_name, native_full_type_name, native_full_type_ref
from .identifiers import field_name
from .message import make_message

logger = get_logger("protobuf.convert")

_BARE_OPTION_VALUE = re.compile(r"^(true|false|-?[0-9]+(\.[0-9]+)?|[A-Z][A-Z0-9_]*)$")


class ProtoBufScope:
    """Naming context for the types generated by compiling the .proto files.

    Example:
        >>> pb = ProtoBufScope()
        >>> pb.ref(user_att, "userpb")
        'Optional[userpb.User]'
    """

    def __init__(self, scope: Optional[NameScope] = None) -> None:
        self._scope = scope if scope is not None else NameScope()

    def name(self, att: Attribute, pkg: str = "") -> str:
        """Return the native type name of ``att``."""
        return native_full_type_name(att, pkg, self._scope)

    def ref(self, att: Attribute, pkg: str = "") -> str:
        """Return the native type reference of ``att``."""
        return native_full_type_ref(att, pkg, self._scope)

    def field(self, att: Attribute, name: str, first_upper: bool) -> str:
        """Return the field name exposed by the Python bindings; see :func:`~protolower.protobuf.field_name`."""
        return field_name(att, name, first_upper)

    @property
    def scope(self) -> NameScope:
        return self._scope


def collect_messages(att: Attribute) -> list[UserType]:
    """Return the user types defined by a lowered attribute.

    The root comes first, then the types reachable from it in field order.
    Each user type is listed once.
    """
    messages: list[UserType] = []
    seen: set[str] = set()

    def walk(a: Attribute) -> None:
        dt = a.type
        if isinstance(dt, UserType):
            if dt.uid in seen:
                return
            seen.add(dt.uid)
            if dt.attribute is None:
                return
            if isinstance(dt.attribute.type, Object):
                messages.append(dt)
            walk(dt.attribute)
        elif isinstance(dt, Array):
            walk(dt.elem_type)
        elif isinstance(dt, Map):
            walk(dt.elem_type)
        elif isinstance(dt, Object):
            for nat in dt:
                walk(nat.attribute)

    walk(att)
    return messages


def to_proto_schema(
    att: Attribute,
    name: str,
    scope: Optional[NameScope] = None,
    config: Optional[LoweringConfig] = None,
) -> str:
    """Generate a proto3 .proto document for an attribute.

    The attribute is lowered with :func:`~protolower.protobuf.make_message`
    and every message it defines is rendered.

    Args:
        att: Attribute to convert; it is not modified
        name: Name of the root message when one must be synthesized
        scope: Name scope shared with the rest of the generation run
        config: Package, options and formatting

    Returns:
        .proto schema as a string

    Example:
        >>> print(to_proto_schema(Attribute(STRING), "Result", config=LoweringConfig(package="demo")))
        syntax = "proto3";
        package demo;

        message Result {
            string field = 1;
        }
    """
    scope = scope if scope is not None else NameScope()
    config = config if config is not None else LoweringConfig()

    message = make_message(att, name, scope)

    lines = ['syntax = "proto3";']
    if config.package:
        lines.append(f"package {config.package};")
    for option, value in config.options.items():
        if not _BARE_OPTION_VALUE.match(value):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            value = f'"{escaped}"'
        lines.append(f"option {option} = {value};")
    lines.append("")

    messages = collect_messages(message)
    logger.debug("rendering %d messages for %r", len(messages), name)
    for ut in messages:
        if ut.description:
            lines.append(comment(ut.description, config.comment_width))
        body = message_def(ut.attribute, scope, comment_width=config.comment_width)
        lines.append(f"message {message_name(Attribute(ut), scope)}{body}")
        lines.append("")

    return "\n".join(lines)
