"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from protolower.model import INT32, STRING, Array, Attribute, DataType, Object, UserType
from protolower.naming import NameScope


def tagged(dt: DataType, tag: int, **kwargs: Any) -> Attribute:
    """Build an attribute carrying an ``rpc:tag``."""
    meta = {"rpc:tag": [str(tag)]}
    meta.update(kwargs.pop("meta", {}))
    return Attribute(dt, meta=meta, **kwargs)


@pytest.fixture
def scope() -> NameScope:
    """Fresh name scope for each test."""
    return NameScope()


@pytest.fixture
def user_type() -> UserType:
    """User type with an id and a name override."""
    obj = Object()
    obj.append("Id", tagged(STRING, 1))
    obj.append("user-name", tagged(STRING, 2, meta={"struct:field:name": ["Name"]}))
    return UserType("User", Attribute(obj))


@pytest.fixture
def recursive_type() -> UserType:
    """User type with a field referencing itself through an array."""
    node = UserType("Node")
    obj = Object()
    obj.append("value", tagged(INT32, 1))
    obj.append("children", tagged(Array(Attribute(node)), 2))
    node.set_attribute(Attribute(obj))
    return node
