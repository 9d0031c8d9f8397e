"""Configuration for .proto document rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_OPTION_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")


@dataclass
class LoweringConfig:
    """Options controlling how a lowered attribute is rendered as a .proto file.

    Attributes:
        package: Protobuf package name (e.g. ``"acme.orders.v1"``); empty means
            no ``package`` statement.
        options: File-level options rendered as ``option <name> = "<value>";``
            in insertion order (e.g. ``{"go_package": "acme/orderspb"}``).
        comment_width: Column at which field description comments wrap.

    Examples:
        ```python
        from protolower import LoweringConfig, to_proto_schema

        config = LoweringConfig(package="acme.orders", options={"java_multiple_files": "true"})
        proto = to_proto_schema(order, "Order", config=config)
        ```
    """

    package: str = ""
    options: dict[str, str] = field(default_factory=dict)
    comment_width: int = 80

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.package and not _PACKAGE_RE.match(self.package):
            raise ValueError(f"package must be a dotted identifier, got {self.package!r}")

        for name in self.options:
            if not _OPTION_RE.match(name):
                raise ValueError(f"invalid option name {name!r}")

        if self.comment_width <= 0:
            raise ValueError(f"comment_width must be > 0, got {self.comment_width}")
