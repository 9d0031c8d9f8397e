#!/usr/bin/env python3
"""Protobuf schema generation example for protolower.

This example demonstrates:
1. Generating a .proto schema from Pydantic models
2. Nested collections lowered into wrapper messages
3. Referencing the protoc generated Python types
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from protolower import (
    LoweringConfig,
    NameScope,
    ProtoBufScope,
    attribute_from_model,
    make_message,
    to_proto_schema,
)
from protolower.model import STRING, Attribute


class Waypoint(BaseModel):
    """A position the vehicle must reach."""

    latitude: float = Field(description="Latitude in decimal degrees")
    longitude: float = Field(description="Longitude in decimal degrees")
    depth_m: int = Field(ge=0, le=6000, description="Target depth in meters")


class Mission(BaseModel):
    """Survey mission plan."""

    mission_id: str = Field(description="Unique mission identifier")
    vehicle_id: int = Field(ge=0, le=255)
    legs: list[list[Waypoint]] = Field(default=[], description="Waypoints grouped per survey leg")
    parameters: dict[str, float] = {}
    tags: dict[str, list[str]] = {}
    fallback: Optional[Mission] = None


def main() -> None:
    """Run the protobuf schema generation example."""
    print("=" * 60)
    print("protolower Protobuf Schema Generation Example")
    print("=" * 60)
    print()

    scope = NameScope()
    config = LoweringConfig(package="survey.v1", options={"go_package": "acme/surveypb"})

    # Generate proto schema
    print("1. Generating .proto schema...")
    mission = attribute_from_model(Mission)
    proto_schema = to_proto_schema(mission, "Mission", scope, config)

    print()
    print("=" * 60)
    print("Generated .proto schema:")
    print("=" * 60)
    print(proto_schema)
    print("=" * 60)
    print()

    # Top-level values that are not messages are wrapped
    print("2. Lowering a bare string response...")
    print()
    print(to_proto_schema(Attribute(STRING), "MissionName", scope, config))

    # Native references share the scope, hence the message names
    print("3. Python types of the generated bindings:")
    print()
    pb = ProtoBufScope(scope)
    lowered = make_message(mission, "Mission", scope)
    for name in ("mission_id", "legs", "parameters", "tags", "fallback"):
        att = lowered.find(name)
        print(f"   {pb.field(att, name, False):12s} {pb.ref(att, 'surveypb')}")
    print()


if __name__ == "__main__":
    main()
