"""
Tests for the schema parser (phase 1).
"""

import pytest

from schema_struct.pipeline.errors import ConflictingArrayShape, SchemaError
from schema_struct.pipeline.schema_ast import (
    ArrayNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaParser,
    TupleNode,
)


def parse(schema):
    return SchemaParser().parse(schema)


class TestSchemaParser:
    def test_object_properties_and_required(self):
        ast = parse(
            {
                "title": "Person",
                "type": "object",
                "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
                "required": ["name"],
            }
        )
        root = ast.root_node
        assert isinstance(root, ObjectNode)
        assert root.title == "Person"
        assert [p.name for p in root.properties] == ["name", "age"]
        assert [p.is_required for p in root.properties] == [True, False]
        assert root.properties[1].source_path == "#/properties/age"

    def test_properties_without_type_is_object(self):
        ast = parse({"title": "Loose", "properties": {"a": {"type": "string"}}})
        assert isinstance(ast.root_node, ObjectNode)

    def test_primitive_types(self):
        for type_name in ("string", "integer", "number", "boolean", "null"):
            node = parse({"type": type_name}).root_node
            assert isinstance(node, PrimitiveNode)
            assert node.type_name == type_name

    def test_annotations_and_default(self):
        node = parse({"type": "integer", "title": "Count", "description": "How many", "default": 3}).root_node
        assert node.title == "Count"
        assert node.description == "How many"
        assert node.has_default
        assert node.default == 3

    def test_null_default_is_recorded(self):
        node = parse({"type": "null", "default": None}).root_node
        assert node.has_default
        assert node.default is None

    def test_enum_takes_priority_over_string_type(self):
        node = parse({"type": "string", "enum": ["a", "b"]}).root_node
        assert isinstance(node, EnumNode)
        assert node.values == ["a", "b"]

    @pytest.mark.parametrize(
        "schema",
        [
            {"enum": []},
            {"enum": ["a", 1]},
            {"enum": ["a", "a"]},
            {"type": "integer", "enum": ["a"]},
        ],
    )
    def test_invalid_enums(self, schema):
        with pytest.raises(SchemaError):
            parse(schema)

    def test_ref_takes_priority(self):
        node = parse({"$ref": "#/$defs/x", "type": "string", "description": "see x"}).root_node
        assert isinstance(node, RefNode)
        assert node.ref_path == "#/$defs/x"
        assert node.description == "see x"

    def test_array_items(self):
        node = parse({"type": "array", "items": {"type": "string"}}).root_node
        assert isinstance(node, ArrayNode)
        assert isinstance(node.items, PrimitiveNode)
        assert node.items.source_path == "#/items"

    def test_prefix_items_tuple(self):
        node = parse({"type": "array", "prefixItems": [{"type": "string"}, {"type": "number"}]}).root_node
        assert isinstance(node, TupleNode)
        assert [e.source_path for e in node.elements] == ["#/prefixItems/0", "#/prefixItems/1"]

    def test_prefix_items_closed_with_items_false(self):
        node = parse({"type": "array", "prefixItems": [{"type": "string"}], "items": False}).root_node
        assert isinstance(node, TupleNode)

    def test_items_and_prefix_items_conflict(self):
        with pytest.raises(ConflictingArrayShape) as excinfo:
            parse(
                {
                    "type": "object",
                    "properties": {
                        "bad": {"type": "array", "items": {"type": "string"}, "prefixItems": [{"type": "string"}]}
                    },
                }
            )
        assert excinfo.value.path == "#/properties/bad"

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "array"},
            {"type": "array", "items": [{"type": "string"}]},
            {"type": "array", "prefixItems": []},
        ],
    )
    def test_invalid_arrays(self, schema):
        with pytest.raises(SchemaError):
            parse(schema)

    def test_missing_type(self):
        with pytest.raises(SchemaError) as excinfo:
            parse({"type": "object", "properties": {"x": {"description": "untyped"}}})
        assert excinfo.value.path == "#/properties/x"
        assert "value type not specified" in str(excinfo.value)

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "date"},
            {"type": ["string", "null"]},
            {"type": "object", "properties": []},
            {"type": "object", "properties": {}, "required": "a"},
            {"type": "string", "title": 3},
            {"type": "integer", "minimum": "0"},
            {"type": "object", "properties": {"a": True}},
        ],
    )
    def test_malformed_fragments(self, schema):
        with pytest.raises(SchemaError):
            parse(schema)

    def test_non_object_document(self):
        with pytest.raises(SchemaError):
            parse(["not", "a", "schema"])

    def test_bounds(self):
        node = parse({"type": "number", "minimum": 0, "exclusiveMinimum": 1.5}).root_node
        assert node.minimum == 0
        assert node.exclusive_minimum == 1.5

    def test_draft4_exclusive_minimum_flag(self):
        node = parse({"type": "integer", "minimum": 5, "exclusiveMinimum": True}).root_node
        assert node.minimum is None
        assert node.exclusive_minimum == 5

    def test_definitions_in_declaration_order(self):
        ast = parse(
            {
                "title": "Root",
                "type": "object",
                "$defs": {"b": {"type": "string"}, "a/x": {"type": "integer"}},
                "definitions": {"legacy": {"type": "boolean"}},
            }
        )
        assert [d.name for d in ast.definitions] == ["b", "a/x", "legacy"]
        assert [d.source_path for d in ast.definitions] == ["#/$defs/b", "#/$defs/a~1x", "#/definitions/legacy"]
