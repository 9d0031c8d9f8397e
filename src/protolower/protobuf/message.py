"""Protocol buffer messages from attributes.

Protocol buffers only accept messages at the top level and have no support
for nested collections: a repeated field cannot hold a repeated value and a
map value cannot be a map or a repeated value. This module rewrites a private
copy of an attribute graph so that it satisfies both rules:

1. :func:`materialize` makes the root a user type wrapping an object,
   wrapping primitives and collections into a single field named ``field``
   with tag 1.
2. :func:`flatten` walks the graph and wraps every nested collection into its
   own message (``ArrayOfSint32``, ``MapOfStringDouble``, ...).

Example:
    >>> att = make_message(Attribute(Array(Attribute(Array(Attribute(INT32))))), "Grid", scope)
    >>> print("message " + message_name(att, scope) + message_def(att.type.attribute, scope))
    message Grid {
        repeated ArrayOfSint32 field = 1;
    }
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import InvariantError
from ..logging import get_logger
from ..model.types import (
    Array,
    Attribute,
    Map,
    NamedAttribute,
    Object,
    Primitive,
    UserType,
    dup_attribute,
    is_empty,
)
from ..naming.scope import NameScope
from .emit import TAG_META, message_def
from .identifiers import identifier_token

logger = get_logger("protobuf.message")

WRAPPED_FIELD_NAME = "field"


def make_message(att: Attribute, tname: str, scope: NameScope) -> Attribute:
    """Return a copy of ``att`` that can be rendered as a protocol buffer message.

    The result's type is always a user type wrapping an object, and no field
    reachable from it holds a nested array or map.

    Args:
        att: Attribute to lower; it is not modified
        tname: Message name used when a user type must be synthesized
        scope: Name scope used to name the synthesized wrapper messages

    Returns:
        The lowered attribute
    """
    att = materialize(att, tname)
    flatten(att, "", scope)
    return att


def materialize(att: Attribute, tname: str) -> Attribute:
    """Return a copy of ``att`` whose type is a user type wrapping an object.

    - primitives, arrays and maps are wrapped into a user type named ``tname``
      with a single field named ``field`` and tag 1
    - the empty user type becomes a user type named ``tname`` wrapping an
      empty object so that a message definition is still generated
    - user types that do not wrap an object (e.g. result collections) get
      their attribute wrapped the same way
    - objects are wrapped into a user type named ``tname``

    Raises:
        InvariantError: If ``att`` has an unknown data type
    """
    att = dup_attribute(att)
    dt = att.type
    if isinstance(dt, Primitive):
        wrap_attr(att, tname)
    elif isinstance(dt, UserType):
        if is_empty(dt):
            att.type = UserType(tname, Attribute(Object()), uid=tname)
        elif not isinstance(dt.attribute.type, Object):
            wrap_attr(att, tname)
    elif isinstance(dt, (Array, Map)):
        wrap_attr(att, tname)
    elif isinstance(dt, Object):
        att.type = UserType(tname, dup_attribute(att), uid=tname)
    else:
        raise InvariantError(f"unknown data type {type(dt).__name__}")
    return att


def flatten(att: Attribute, name_hint: str, scope: NameScope) -> None:
    """Wrap nested arrays and maps reachable from ``att`` into their own messages.

    ``att`` is modified in place and must therefore be owned by the caller
    (e.g. the result of :func:`materialize`). Each user type is visited once,
    which makes recursive types safe. Map keys are never wrapped: protocol
    buffers only accept scalar keys.

    Args:
        att: Attribute to rewrite
        name_hint: Inserted into the names of the synthesized messages
        scope: Name scope used to name the element types
    """
    _Flattener(name_hint, scope).visit(att)


class _Flattener:
    def __init__(self, name_hint: str, scope: NameScope) -> None:
        self.name_hint = name_hint
        self.scope = scope
        self.seen: set[str] = set()

    def visit(self, att: Attribute) -> None:
        dt = att.type
        if isinstance(dt, Primitive):
            return
        if isinstance(dt, UserType):
            if dt.uid in self.seen:
                logger.debug("user type %r already visited", dt.uid)
                return
            self.seen.add(dt.uid)
            if dt.attribute is None:
                dt.set_attribute(Attribute(Object()))
            elif not isinstance(dt.attribute.type, Object):
                wrap_attr(Attribute(dt), dt.name)
            self.visit(dt.attribute)
        elif isinstance(dt, Array):
            self.visit(dt.elem_type)
            self.wrap(dt.elem_type)
        elif isinstance(dt, Map):
            self.visit(dt.elem_type)
            self.wrap(dt.elem_type)
        elif isinstance(dt, Object):
            for nat in dt:
                self.visit(nat.attribute)
        else:
            raise InvariantError(f"unknown data type {type(dt).__name__}")

    def wrap(self, att: Attribute) -> None:
        # Element types are flattened first so inner names are already resolved.
        # The uid keeps the rendered element types: tokens lose the reserved
        # word escaping, so "string" and "String_" share a token.
        dt = att.type
        if isinstance(dt, Array):
            elem = message_def(dt.elem_type, self.scope)
            wrap_attr(
                att,
                f"ArrayOf{self.name_hint}{identifier_token(elem, True)}",
                uid=f"ArrayOf{self.name_hint}:{elem}",
            )
        elif isinstance(dt, Map):
            key = message_def(dt.key_type, self.scope)
            elem = message_def(dt.elem_type, self.scope)
            wrap_attr(
                att,
                f"{self.name_hint}MapOf{identifier_token(key, True)}{identifier_token(elem, True)}",
                uid=f"{self.name_hint}MapOf:{key}:{elem}",
            )


def wrap_attr(att: Attribute, tname: str, *, uid: Optional[str] = None) -> None:
    """Make the type of ``att`` a user type with a single field named ``field``.

    If ``att`` already is a user type its attribute is replaced in place (the
    user type keeps its name and identity), otherwise ``att`` gets a new user
    type named ``tname``. The wrapped field has tag 1.

    A synthesized user type uses ``uid`` as identity, ``tname`` when not
    given. Wrappers with the same uid share one message definition and one
    name in a scope.
    """
    dt = att.type
    if isinstance(dt, UserType):
        dt.set_attribute(_wrap(dt.attribute))
        logger.debug("wrapped user type %r into field %r", dt.name, WRAPPED_FIELD_NAME)
    else:
        att.type = UserType(tname, _wrap(att), uid=uid if uid is not None else tname)
        logger.debug("synthesized message %r wrapping %s", tname, type(dt).__name__)


def _wrap(att: Attribute) -> Attribute:
    field = Attribute(att.type, meta={TAG_META: ["1"]})
    return Attribute(Object([NamedAttribute(WRAPPED_FIELD_NAME, field)]))


def unwrap_attr(att: Attribute) -> Attribute:
    """Return the attribute named ``field`` under ``att``, or ``att`` itself if there is none."""
    wrapped = att.find(WRAPPED_FIELD_NAME)
    if wrapped is not None:
        return wrapped
    return att
