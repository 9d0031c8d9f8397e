"""Unit tests for the attribute type model."""

from __future__ import annotations

import pytest

from protolower.exceptions import InvariantError
from protolower.model import (
    EMPTY,
    INT32,
    STRING,
    Array,
    Attribute,
    Map,
    Object,
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


class TestPredicates:
    """Test data type predicates."""

    def test_primitive(self) -> None:
        """Test primitive detection."""
        assert is_primitive(STRING)
        assert not is_primitive(Array(Attribute(STRING)))

    def test_array_through_user_type(self) -> None:
        """Test that result collections are arrays."""
        collection = ResultType("Users", Attribute(Array(Attribute(STRING))))
        assert is_array(collection)
        assert not is_object(collection)

    def test_map(self) -> None:
        """Test map detection."""
        assert is_map(Map(Attribute(STRING), Attribute(INT32)))
        assert not is_map(Object())

    def test_object_through_user_type(self, user_type: UserType) -> None:
        """Test that user types wrapping objects are objects."""
        assert is_object(user_type)
        assert is_object(Object())
        assert not is_object(STRING)

    def test_empty(self) -> None:
        """Test empty placeholder detection."""
        assert is_empty(EMPTY)
        assert is_empty(UserType("Nothing"))
        assert not is_empty(UserType("Something", Attribute(Object())))
        assert not is_empty(Object())

    def test_recursive_predicate_terminates(self) -> None:
        """Test predicates on a user type aliasing itself."""
        alias = UserType("Alias")
        alias.set_attribute(Attribute(alias))
        assert not is_object(alias)


class TestUserType:
    """Test user type identity."""

    def test_uids_are_distinct(self) -> None:
        """Test that allocated uids differ for types with the same name."""
        assert UserType("User").uid != UserType("User").uid

    def test_explicit_uid(self) -> None:
        """Test that an explicit uid is kept."""
        assert UserType("User", uid="svc.User").uid == "svc.User"

    def test_find_through_user_type(self, user_type: UserType) -> None:
        """Test member lookup through the user type."""
        att = Attribute(user_type)
        found = att.find("Id")
        assert found is not None
        assert found.type is STRING
        assert att.find("missing") is None
        assert Attribute(STRING).find("Id") is None

    def test_meta_value(self) -> None:
        """Test metadata lookup."""
        att = Attribute(STRING, meta={"rpc:tag": ["3"], "empty": []})
        assert att.meta_value("rpc:tag") == "3"
        assert att.meta_value("empty") is None
        assert att.meta_value("missing") is None


class TestDup:
    """Test deep duplication."""

    def test_dup_is_deep(self, user_type: UserType) -> None:
        """Test that the duplicate shares no mutable node with the original."""
        att = Attribute(user_type, description="payload", meta={"k": ["v"]})
        dup = dup_attribute(att)

        assert dup is not att
        assert dup.type is not user_type
        assert dup.type.uid == user_type.uid
        assert dup.description == "payload"
        assert dup.meta == {"k": ["v"]}

        dup.meta["k"].append("w")
        dup.type.attribute.type.append("extra", Attribute(STRING))
        assert att.meta == {"k": ["v"]}
        assert len(user_type.attribute.type) == 2

    def test_primitives_are_shared(self) -> None:
        """Test that primitives are not copied."""
        assert dup_type(STRING) is STRING

    def test_dup_preserves_cycles(self, recursive_type: UserType) -> None:
        """Test that a recursive type duplicates into a recursive type."""
        dup = dup_type(recursive_type)
        children = dup.attribute.find("children")
        assert children is not None
        assert children.type.elem_type.type is dup
        assert dup is not recursive_type

    def test_dup_shares_user_type_within_copy(self, user_type: UserType) -> None:
        """Test that two references to one user type stay one user type."""
        obj = Object()
        obj.append("a", Attribute(user_type))
        obj.append("b", Attribute(user_type))
        dup = dup_type(obj)
        assert dup.fields[0].attribute.type is dup.fields[1].attribute.type

    def test_dup_keeps_result_type(self) -> None:
        """Test that subclasses survive duplication."""
        rt = ResultType("Users", Attribute(Array(Attribute(STRING))), identifier="app/users")
        dup = dup_type(rt)
        assert isinstance(dup, ResultType)
        assert dup.identifier == "app/users"

    def test_dup_unknown_type(self) -> None:
        """Test that unknown data types are rejected."""
        with pytest.raises(InvariantError, match="unknown data type"):
            dup_type("string")  # type: ignore[arg-type]
