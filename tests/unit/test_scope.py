"""Unit tests for the name scope."""

from __future__ import annotations

import logging
import threading

import pytest

from protolower.exceptions import InvariantError
from protolower.model import STRING, Attribute, Object
from protolower.naming import NameScope


class TestHashedUnique:
    """Test unique name registration."""

    def test_same_key_same_name(self, scope: NameScope) -> None:
        """Test that a key always gets its first name back."""
        assert scope.hashed_unique("a", "User") == "User"
        assert scope.hashed_unique("a", "User") == "User"
        assert scope.hashed_unique("a", "Other") == "User"

    def test_collision(self, scope: NameScope) -> None:
        """Test that colliding names get counters."""
        assert scope.hashed_unique("a", "User") == "User"
        assert scope.hashed_unique("b", "User") == "User2"
        assert scope.hashed_unique("c", "User") == "User3"

    def test_collision_with_suffix(self, scope: NameScope) -> None:
        """Test that the suffix is tried before counters."""
        assert scope.hashed_unique("a", "User", "Result") == "User"
        assert scope.hashed_unique("b", "User", "Result") == "UserResult"
        assert scope.hashed_unique("c", "User", "Result") == "UserResult2"

    def test_counter_skips_taken_names(self, scope: NameScope) -> None:
        """Test that a counter never reuses a name registered verbatim."""
        assert scope.hashed_unique("a", "User2") == "User2"
        assert scope.hashed_unique("b", "User") == "User"
        assert scope.hashed_unique("c", "User") == "User3"

    def test_concurrent_registration(self, scope: NameScope) -> None:
        """Test that concurrent callers never get the same name."""
        results: list[str] = []
        lock = threading.Lock()

        def register(i: int) -> None:
            name = scope.hashed_unique(f"key{i}", "Shared")
            with lock:
                results.append(name)

        threads = [threading.Thread(target=register, args=(i,)) for i in range(32)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(results)) == 32

    def test_collision_is_logged(self, scope: NameScope, caplog: pytest.LogCaptureFixture) -> None:
        """Test that renamed collisions are logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="protolower"):
            scope.hashed_unique("a", "User")
            scope.hashed_unique("b", "User")
        assert "'User' taken" in caplog.text
        assert "'User2'" in caplog.text


class TestNativeTypeDef:
    """Test native rendering of inline objects."""

    def test_typed_dict(self, scope: NameScope) -> None:
        """Test the TypedDict expression."""
        obj = Object()
        obj.append("id", Attribute(STRING))
        obj.append("count", Attribute(STRING))
        rendered = scope.native_type_def(Attribute(obj), lambda a: "str")
        assert rendered == 'TypedDict("Object", {"id": str, "count": str})'

    def test_not_an_object(self, scope: NameScope) -> None:
        """Test that non objects are rejected."""
        with pytest.raises(InvariantError):
            scope.native_type_def(Attribute(STRING), lambda a: "str")
