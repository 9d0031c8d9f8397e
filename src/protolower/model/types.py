"""Attribute type model.

An attribute graph describes the shape of request and response payloads:
primitives, arrays, maps, anonymous objects and named user types. User types
carry an identity (``uid``) that is independent of their name; the lowering
pass uses it for cycle detection and for stable message naming.

Example:
    >>> from protolower.model import STRING, Attribute, Object, UserType, is_object
    >>> user = UserType("User", Attribute(Object()))
    >>> user.attribute.type.append("name", Attribute(STRING, meta={"rpc:tag": ["1"]}))
    >>> is_object(user)
    True
"""

from __future__ import annotations

import copy
import enum
import itertools
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, Union

from ..exceptions import InvariantError


class Kind(enum.Enum):
    """Discriminates the closed set of data types."""

    BOOLEAN = "boolean"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"
    USER = "user"


@dataclass(frozen=True)
class Primitive:
    """A scalar type. Instances are shared singletons and never duplicated."""

    kind: Kind
    name: str


BOOLEAN = Primitive(Kind.BOOLEAN, "Boolean")
INT = Primitive(Kind.INT, "Int")
INT32 = Primitive(Kind.INT32, "Int32")
INT64 = Primitive(Kind.INT64, "Int64")
UINT = Primitive(Kind.UINT, "UInt")
UINT32 = Primitive(Kind.UINT32, "UInt32")
UINT64 = Primitive(Kind.UINT64, "UInt64")
FLOAT32 = Primitive(Kind.FLOAT32, "Float32")
FLOAT64 = Primitive(Kind.FLOAT64, "Float64")
STRING = Primitive(Kind.STRING, "String")
BYTES = Primitive(Kind.BYTES, "Bytes")

PRIMITIVES: tuple[Primitive, ...] = (
    BOOLEAN,
    INT,
    INT32,
    INT64,
    UINT,
    UINT32,
    UINT64,
    FLOAT32,
    FLOAT64,
    STRING,
    BYTES,
)


@dataclass(eq=False)
class Attribute:
    """A typed, optionally documented node of the graph.

    Attributes:
        type: The data type of the attribute
        description: Human readable description, rendered as a comment
        meta: Ordered metadata, e.g. ``{"rpc:tag": ["1"]}`` or
            ``{"struct:field:name": ["Name"]}``
    """

    type: DataType
    description: str = ""
    meta: dict[str, list[str]] = field(default_factory=dict)

    def find(self, name: str) -> Optional[Attribute]:
        """Return the member attribute with the given name, looking through user types."""
        dt = self.type
        while isinstance(dt, UserType):
            if dt.attribute is None:
                return None
            dt = dt.attribute.type
        if isinstance(dt, Object):
            return dt.find(name)
        return None

    def meta_value(self, key: str) -> Optional[str]:
        """Return the first value recorded under ``key`` or None."""
        values = self.meta.get(key)
        if not values:
            return None
        return values[0]


@dataclass(eq=False)
class Array:
    """Ordered homogeneous collection."""

    kind: ClassVar[Kind] = Kind.ARRAY

    elem_type: Attribute


@dataclass(eq=False)
class Map:
    """Key to value collection. Keys are primitives (validated upstream)."""

    kind: ClassVar[Kind] = Kind.MAP

    key_type: Attribute
    elem_type: Attribute


@dataclass(eq=False)
class NamedAttribute:
    """A named member of an Object."""

    name: str
    attribute: Attribute


@dataclass(eq=False)
class Object:
    """Ordered sequence of named attributes."""

    kind: ClassVar[Kind] = Kind.OBJECT

    fields: list[NamedAttribute] = field(default_factory=list)

    def __iter__(self) -> Iterator[NamedAttribute]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def append(self, name: str, attribute: Attribute) -> None:
        """Add a member at the end of the object."""
        self.fields.append(NamedAttribute(name, attribute))

    def find(self, name: str) -> Optional[Attribute]:
        """Return the member attribute with the given name or None."""
        for nat in self.fields:
            if nat.name == name:
                return nat.attribute
        return None


_uids = itertools.count(1)


class UserType:
    """A named, identity-bearing type wrapping one attribute.

    Two user types with the same ``uid`` are the same type, whatever their
    name. A uid is allocated when none is given.
    """

    kind: ClassVar[Kind] = Kind.USER

    def __init__(
        self,
        type_name: str,
        attribute: Optional[Attribute] = None,
        *,
        description: str = "",
        uid: Optional[str] = None,
    ) -> None:
        self.type_name = type_name
        self.description = description
        self.uid = uid if uid is not None else f"{type_name}#{next(_uids)}"
        self._attribute = attribute

    @property
    def name(self) -> str:
        return self.type_name

    @property
    def attribute(self) -> Optional[Attribute]:
        return self._attribute

    def set_attribute(self, attribute: Attribute) -> None:
        """Replace the wrapped attribute in place."""
        self._attribute = attribute

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.type_name!r}, uid={self.uid!r})"


class ResultType(UserType):
    """A user type describing a response; a result collection wraps an Array."""

    def __init__(
        self,
        type_name: str,
        attribute: Optional[Attribute] = None,
        *,
        identifier: str = "",
        description: str = "",
        uid: Optional[str] = None,
    ) -> None:
        super().__init__(type_name, attribute, description=description, uid=uid)
        self.identifier = identifier


DataType = Union[Primitive, Array, Map, Object, UserType]

EMPTY = UserType(
    "Empty",
    Attribute(Object()),
    description="Empty represents empty values.",
    uid="protolower.Empty",
)


def _resolve(dt: DataType) -> DataType:
    # Follows user types down to the first anonymous type.
    seen: set[str] = set()
    while isinstance(dt, UserType):
        if dt.attribute is None or dt.uid in seen:
            return dt
        seen.add(dt.uid)
        dt = dt.attribute.type
    return dt


def is_primitive(dt: DataType) -> bool:
    return isinstance(dt, Primitive)


def is_array(dt: DataType) -> bool:
    """True for arrays and for user types (e.g. result collections) wrapping one."""
    return isinstance(_resolve(dt), Array)


def is_map(dt: DataType) -> bool:
    return isinstance(_resolve(dt), Map)


def is_object(dt: DataType) -> bool:
    """True for objects and for user types wrapping one."""
    return isinstance(_resolve(dt), Object)


def is_empty(dt: DataType) -> bool:
    """True for the Empty placeholder and for user types wrapping nothing."""
    if not isinstance(dt, UserType):
        return False
    return dt.uid == EMPTY.uid or dt.attribute is None


class _Dupper:
    """Deep copies an attribute graph, duplicating each user type once."""

    def __init__(self) -> None:
        self._user_types: dict[str, UserType] = {}

    def dup_attribute(self, att: Attribute) -> Attribute:
        return Attribute(
            type=self.dup_type(att.type),
            description=att.description,
            meta={key: list(values) for key, values in att.meta.items()},
        )

    def dup_type(self, dt: DataType) -> DataType:
        if isinstance(dt, Primitive):
            return dt
        if isinstance(dt, Array):
            return Array(self.dup_attribute(dt.elem_type))
        if isinstance(dt, Map):
            return Map(self.dup_attribute(dt.key_type), self.dup_attribute(dt.elem_type))
        if isinstance(dt, Object):
            return Object(
                [NamedAttribute(nat.name, self.dup_attribute(nat.attribute)) for nat in dt]
            )
        if isinstance(dt, UserType):
            if dt.uid in self._user_types:
                return self._user_types[dt.uid]
            dup = copy.copy(dt)
            self._user_types[dt.uid] = dup
            if dt.attribute is not None:
                dup.set_attribute(self.dup_attribute(dt.attribute))
            return dup
        raise InvariantError(f"unknown data type {type(dt).__name__}")


def dup_attribute(att: Attribute) -> Attribute:
    """Return a deep copy of ``att``; user type identities and cycles are preserved."""
    return _Dupper().dup_attribute(att)


def dup_type(dt: DataType) -> DataType:
    """Return a deep copy of ``dt``; see :func:`dup_attribute`."""
    return _Dupper().dup_type(dt)
