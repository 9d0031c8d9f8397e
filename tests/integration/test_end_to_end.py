"""End-to-end integration tests.

Models are converted into complete .proto documents and the native type
references are checked against the names used in the documents.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from protolower import (
    LoweringConfig,
    NameScope,
    ProtoBufScope,
    attribute_from_model,
    make_message,
    to_proto_schema,
)
from protolower.model import STRING, Array, Attribute, Map


class LineItem(BaseModel):
    """A product and its quantity."""

    sku: str
    quantity: int = Field(ge=0, le=1000)


class Order(BaseModel):
    """An order placed by a customer."""

    id: str = Field(description="Unique order identifier")
    items: list[LineItem] = []
    totals: dict[str, float] = {}
    batches: list[list[LineItem]] = []
    labels: dict[str, list[str]] = {}


EXPECTED_ORDER_PROTO = "\n".join(
    [
        'syntax = "proto3";',
        "package shop.v1;",
        'option go_package = "acme/shoppb";',
        "",
        "// An order placed by a customer.",
        "message Order {",
        "\t// Unique order identifier",
        "\tstring id = 1;",
        "\trepeated LineItem items = 2;",
        "\tmap<string, double> totals = 3;",
        "\trepeated ArrayOfLineItem batches = 4;",
        "\tmap<string, ArrayOfString> labels = 5;",
        "}",
        "",
        "// A product and its quantity.",
        "message LineItem {",
        "\tstring sku = 1;",
        "\tuint32 quantity = 2;",
        "}",
        "",
        "message ArrayOfLineItem {",
        "\trepeated LineItem field = 1;",
        "}",
        "",
        "message ArrayOfString {",
        "\trepeated string field = 1;",
        "}",
        "",
    ]
)


class TestEndToEnd:
    """End-to-end workflow tests."""

    def test_model_to_proto(self) -> None:
        """Test the complete document of a model."""
        config = LoweringConfig(package="shop.v1", options={"go_package": "acme/shoppb"})
        proto = to_proto_schema(attribute_from_model(Order), "Order", config=config)
        assert proto == EXPECTED_ORDER_PROTO

    def test_native_references_match_schema(self) -> None:
        """Test that binding references use the document's message names."""
        scope = NameScope()
        pb = ProtoBufScope(scope)
        lowered = make_message(attribute_from_model(Order), "Order", scope)
        proto = to_proto_schema(attribute_from_model(Order), "Order", scope)

        assert pb.ref(lowered, "shoppb") == "Optional[shoppb.Order]"
        assert pb.ref(lowered.find("items"), "shoppb") == "list[Optional[shoppb.LineItem]]"
        assert pb.ref(lowered.find("totals"), "shoppb") == "dict[str, float]"
        assert pb.ref(lowered.find("batches"), "shoppb") == "list[Optional[shoppb.ArrayOfLineItem]]"
        assert pb.ref(lowered.find("labels"), "shoppb") == "dict[str, Optional[shoppb.ArrayOfString]]"
        for name in ("Order", "LineItem", "ArrayOfLineItem", "ArrayOfString"):
            assert f"message {name} {{" in proto

    def test_top_level_collection(self) -> None:
        """Test a response that is a map of lists."""
        att = Attribute(Map(Attribute(STRING), Attribute(Array(Attribute(STRING)))))
        proto = to_proto_schema(att, "Index")
        assert proto == "\n".join(
            [
                'syntax = "proto3";',
                "",
                "message Index {",
                "\tmap<string, ArrayOfString> field = 1;",
                "}",
                "",
                "message ArrayOfString {",
                "\trepeated string field = 1;",
                "}",
                "",
            ]
        )
