"""Attribute graphs from Pydantic models.

This module introspects Pydantic models and builds the equivalent attribute
graph: one user type per model class, one member per model field. Nested
models, self-referencing models, lists, sets, tuples and dicts are supported.

Field-level options are read from ``json_schema_extra``:

- ``"rpc:tag"``: explicit field number (default: 1-based field position)
- ``"struct:field:name"``: field name override
- ``"bits"`` / ``"signed"``: integer or float width

Example:
    >>> class Node(BaseModel):
    ...     value: int = Field(ge=0, le=255)
    ...     children: list[Node] = []
    >>> att = attribute_from_model(Node)
    >>> att.type.name
    'Node'
"""

from __future__ import annotations

import enum
import inspect
import types
from typing import Annotated, Any, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from .types import (
    BOOLEAN,
    BYTES,
    FLOAT32,
    FLOAT64,
    INT,
    INT32,
    INT64,
    STRING,
    UINT32,
    UINT64,
    Array,
    Attribute,
    DataType,
    Map,
    Object,
    UserType,
)

_UNION_TYPES: tuple[Any, ...] = (Union, types.UnionType)


def attribute_from_model(model_class: Type[BaseModel]) -> Attribute:
    """Build an attribute whose type is the user type describing ``model_class``.

    Args:
        model_class: Pydantic model class to introspect

    Returns:
        Attribute wrapping the model's user type

    Raises:
        SchemaError: If a field annotation cannot be represented
    """
    return Attribute(ModelIntrospector().user_type(model_class))


class ModelIntrospector:
    """Converts Pydantic model classes into user types.

    User types are cached per model class so that models referenced several
    times (or recursively) map to a single identity.
    """

    def __init__(self) -> None:
        self._user_types: dict[Type[BaseModel], UserType] = {}

    def user_type(self, model_class: Type[BaseModel]) -> UserType:
        """Return the user type for ``model_class``."""
        if model_class in self._user_types:
            return self._user_types[model_class]

        doc = model_class.__doc__
        ut = UserType(
            model_class.__name__,
            description=inspect.cleandoc(doc) if doc else "",
            uid=f"{model_class.__module__}.{model_class.__qualname__}",
        )
        # Registered before the fields are walked so recursive references resolve.
        self._user_types[model_class] = ut

        obj = Object()
        for position, (name, field_info) in enumerate(model_class.model_fields.items(), start=1):
            obj.append(name, self._field_attribute(name, field_info, position))
        ut.set_attribute(Attribute(obj))
        return ut

    def _field_attribute(self, name: str, field_info: FieldInfo, position: int) -> Attribute:
        """Extract the attribute describing one model field.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object
            position: 1-based position of the field, used as default tag

        Returns:
            Attribute with ``rpc:tag`` metadata
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        extra = field_info.json_schema_extra if isinstance(field_info.json_schema_extra, dict) else {}

        # Pydantic v2 stores constraints in metadata
        min_value, max_value = _bounds(field_info.metadata)

        tag = extra.get("rpc:tag", position)
        meta: dict[str, list[str]] = {"rpc:tag": [str(tag)]}
        if "struct:field:name" in extra:
            meta["struct:field:name"] = [str(extra["struct:field:name"])]

        dt = self._data_type(
            annotation,
            name,
            min_value=min_value,
            max_value=max_value,
            bits=extra.get("bits"),
            signed=extra.get("signed"),
        )
        return Attribute(dt, description=field_info.description or "", meta=meta)

    def _data_type(
        self,
        annotation: Any,
        name: str,
        *,
        min_value: Optional[int | float] = None,
        max_value: Optional[int | float] = None,
        bits: Any = None,
        signed: Any = None,
    ) -> DataType:
        origin = get_origin(annotation)
        args = get_args(annotation)

        # Element types carry their own constraints, e.g. list[Annotated[int, Field(ge=0)]]
        if origin is Annotated:
            constraints: list[Any] = []
            for meta in args[1:]:
                if isinstance(meta, FieldInfo):
                    constraints.extend(meta.metadata)
                    if isinstance(meta.json_schema_extra, dict):
                        bits = meta.json_schema_extra.get("bits", bits)
                        signed = meta.json_schema_extra.get("signed", signed)
                else:
                    constraints.append(meta)
            min_value, max_value = _bounds(constraints, min_value, max_value)
            return self._data_type(
                args[0],
                name,
                min_value=min_value,
                max_value=max_value,
                bits=bits,
                signed=signed,
            )

        # Optional[T] lowers to T: proto3 has no required fields.
        if origin in _UNION_TYPES:
            non_none_args = [arg for arg in args if arg is not type(None)]
            if len(non_none_args) != 1:
                raise SchemaError(f"Field {name}: complex Union types not supported")
            return self._data_type(
                non_none_args[0],
                name,
                min_value=min_value,
                max_value=max_value,
                bits=bits,
                signed=signed,
            )

        if origin in (list, set, frozenset):
            if not args:
                raise SchemaError(f"Field {name}: collection element type is required")
            return Array(Attribute(self._data_type(args[0], name)))

        if origin is tuple:
            if len(args) != 2 or args[1] is not Ellipsis:
                raise SchemaError(f"Field {name}: only homogeneous tuple[T, ...] is supported")
            return Array(Attribute(self._data_type(args[0], name)))

        if origin is dict:
            if len(args) != 2:
                raise SchemaError(f"Field {name}: dict key and value types are required")
            return Map(
                Attribute(self._data_type(args[0], name)),
                Attribute(self._data_type(args[1], name)),
            )

        # bool is a subclass of int, check it first
        if annotation is bool:
            return BOOLEAN
        if annotation is int:
            return _int_type(min_value, max_value, bits, signed)
        if annotation is float:
            return FLOAT32 if bits == 32 else FLOAT64
        if annotation is str:
            return STRING
        if annotation is bytes:
            return BYTES

        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return self.user_type(annotation)

        if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
            raise SchemaError(f"Field {name}: enum types are not supported")

        raise SchemaError(
            f"Field {name}: unsupported type {annotation}. "
            f"Supported: bool, int, float, str, bytes, list, set, tuple, dict, BaseModel."
        )


def _bounds(
    constraints: Any,
    min_value: Optional[int | float] = None,
    max_value: Optional[int | float] = None,
) -> tuple[Optional[int | float], Optional[int | float]]:
    """Read ``ge``/``le`` bounds from Pydantic v2 constraint metadata."""
    for constraint in constraints:
        if getattr(constraint, "ge", None) is not None:
            min_value = constraint.ge
        if getattr(constraint, "le", None) is not None:
            max_value = constraint.le
    return min_value, max_value


def _int_type(
    min_value: Optional[int | float],
    max_value: Optional[int | float],
    bits: Any,
    signed: Any,
) -> DataType:
    """Pick the integer width from explicit bits or from the field bounds."""
    if bits is not None:
        if signed:
            return INT32 if bits <= 32 else INT64
        return UINT32 if bits <= 32 else UINT64

    if min_value is not None and max_value is not None:
        min_val = int(min_value)
        max_val = int(max_value)

        # Unsigned types
        if min_val >= 0:
            if max_val <= 2**32 - 1:
                return UINT32
            return UINT64
        # Signed types
        if min_val >= -(2**31) and max_val <= 2**31 - 1:
            return INT32
        return INT64

    # No bounds, width left to the target
    return INT
