"""Name scope guaranteeing unique generated identifiers."""

from __future__ import annotations

import threading
from typing import Callable

from ..exceptions import InvariantError
from ..logging import get_logger
from ..model.types import Attribute, Object

logger = get_logger("naming.scope")


class NameScope:
    """Registry of generated names shared by all generators of one run.

    Names are keyed by an identity (for user types, their ``uid``): the same
    key always gets the same name back, and two different keys never share a
    name even when they propose the same one. The first key to propose a name
    gets it unchanged; later keys get the optional suffix appended and then a
    numeric counter (``Name2``, ``Name3``, ...).

    The scope is safe for concurrent use.

    Example:
        >>> scope = NameScope()
        >>> scope.hashed_unique("a", "User")
        'User'
        >>> scope.hashed_unique("b", "User")
        'User2'
        >>> scope.hashed_unique("a", "Other")
        'User'
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._names: dict[str, str] = {}
        self._counts: dict[str, int] = {}

    def hashed_unique(self, key: str, name: str, suffix: str = "") -> str:
        """Return the unique name registered for ``key``, registering ``name`` if new.

        Args:
            key: Identity the name belongs to
            name: Proposed name
            suffix: Appended before resorting to a counter when ``name`` is taken

        Returns:
            The name for ``key``
        """
        with self._lock:
            if key in self._names:
                return self._names[key]

            proposed = name
            if name in self._counts and suffix:
                name += suffix
            if name in self._counts:
                i = self._counts[name]
                candidate = f"{name}{i + 1}"
                while candidate in self._counts:
                    i += 1
                    candidate = f"{name}{i + 1}"
                self._counts[name] = i + 1
                name = candidate
            self._counts.setdefault(name, 1)
            self._names[key] = name

        if name != proposed:
            logger.debug("name %r taken, %r registered as %r", proposed, key, name)
        return name

    def native_type_def(self, att: Attribute, field_ref: Callable[[Attribute], str]) -> str:
        """Render an inline object as a native (Python typing) composite definition.

        Args:
            att: Attribute whose type is an Object
            field_ref: Renders the native type reference of each member

        Returns:
            A functional ``TypedDict`` expression, e.g.
            ``TypedDict("Object", {"id": str})``
        """
        obj = att.type
        if not isinstance(obj, Object):
            raise InvariantError(f"expected an object, received {type(obj).__name__}")
        members = ", ".join(f'"{nat.name}": {field_ref(nat.attribute)}' for nat in obj)
        return f'TypedDict("Object", {{{members}}})'
