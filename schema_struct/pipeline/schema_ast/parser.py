"""
JSON Schema parser that builds an AST.

Phase 1 of the pipeline: Parse JSON Schema into an AST without
resolving references or naming anything.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import ConflictingArrayShape, SchemaError
from .nodes import (
    ArrayNode,
    DefinitionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaAST,
    SchemaNode,
    TupleNode,
)

logger = logging.getLogger(__name__)

# Keywords holding named subschemas, in lookup order
DEFINITION_KEYWORDS = ("$defs", "definitions")


def escape_pointer_segment(segment: str) -> str:
    """Escape a JSON pointer segment (RFC 6901)."""
    return segment.replace("~", "~0").replace("/", "~1")


def unescape_pointer_segment(segment: str) -> str:
    """Unescape a JSON pointer segment (RFC 6901)."""
    return segment.replace("~1", "/").replace("~0", "~")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class SchemaParser:
    """Parses JSON Schema into an AST."""

    # Primitive type names
    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean", "null"}

    def parse(self, schema: dict[str, Any]) -> SchemaAST:
        """
        Parse a JSON Schema into an AST.

        Args:
            schema: The JSON Schema dictionary

        Returns:
            SchemaAST with the root node and named subschemas in declaration order
        """
        if not isinstance(schema, dict):
            raise SchemaError(f"schema document must be a JSON object, got {type(schema).__name__}", "#")

        ast = SchemaAST(raw_schema=schema)

        for keyword in DEFINITION_KEYWORDS:
            definitions = schema.get(keyword)
            if definitions is None:
                continue
            if not isinstance(definitions, dict):
                raise SchemaError(f"'{keyword}' must be an object", f"#/{keyword}")

            for name, def_schema in definitions.items():
                path = f"#/{keyword}/{escape_pointer_segment(name)}"
                def_node = DefinitionNode(
                    name=name,
                    body=self._parse_schema_node(def_schema, path),
                    source_path=path,
                )
                ast.definitions.append(def_node)

        ast.root_node = self._parse_schema_node(schema, "#")

        logger.debug("Parsed schema with %d named subschemas", len(ast.definitions))
        return ast

    def _parse_schema_node(self, schema: Any, path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if isinstance(schema, bool):
            raise SchemaError("boolean schemas are not supported", path)
        if not isinstance(schema, dict):
            raise SchemaError(f"schema must be a JSON object, got {type(schema).__name__}", path)

        # Handle $ref (siblings other than annotations are ignored)
        if "$ref" in schema:
            node = self._parse_ref_node(schema, path)

        # Handle enum (takes priority over "type": "string")
        elif "enum" in schema:
            node = self._parse_enum_node(schema, path)

        elif "type" in schema:
            node = self._parse_type_node(schema, path)

        # Handle object with properties but no type
        elif "properties" in schema:
            node = self._parse_object_node(schema, path)

        else:
            raise SchemaError("value type not specified (expected 'type', 'enum', '$ref' or 'properties')", path)

        self._extract_annotations(schema, node, path)
        return node

    def _extract_annotations(self, schema: dict[str, Any], node: SchemaNode, path: str) -> None:
        """Copy title, description and default onto the node."""
        for key in ("title", "description"):
            value = schema.get(key)
            if value is not None and not isinstance(value, str):
                raise SchemaError(f"'{key}' must be a string", path)

        node.title = schema.get("title")
        node.description = schema.get("description")
        if "default" in schema:
            node.default = schema["default"]
            node.has_default = True

    def _parse_ref_node(self, schema: dict[str, Any], path: str) -> RefNode:
        """Parse a $ref node."""
        ref_path = schema["$ref"]
        if not isinstance(ref_path, str):
            raise SchemaError("'$ref' must be a string", path)
        return RefNode(ref_path=ref_path, source_path=path)

    def _parse_enum_node(self, schema: dict[str, Any], path: str) -> EnumNode:
        """Parse an enum node."""
        type_value = schema.get("type", "string")
        if type_value != "string":
            raise SchemaError(f"only string enums are supported, got type {type_value!r}", path)

        values = schema["enum"]
        if not isinstance(values, list) or not values:
            raise SchemaError("'enum' must be a non-empty array", path)
        for value in values:
            if not isinstance(value, str):
                raise SchemaError(f"enum values must be strings, got {value!r}", path)
        if len(set(values)) != len(values):
            raise SchemaError("enum values must be unique", path)

        return EnumNode(values=list(values), source_path=path)

    def _parse_type_node(self, schema: dict[str, Any], path: str) -> SchemaNode:
        """Parse a type-based node."""
        type_value = schema["type"]
        if not isinstance(type_value, str):
            raise SchemaError(f"'type' must be a string, got {type_value!r}", path)

        # Handle array type
        if type_value == "array":
            return self._parse_array_node(schema, path)

        # Handle object type
        if type_value == "object":
            return self._parse_object_node(schema, path)

        if type_value in self.PRIMITIVE_TYPES:
            return self._parse_primitive_node(schema, type_value, path)

        raise SchemaError(f"unsupported type {type_value!r}", path)

    def _parse_array_node(self, schema: dict[str, Any], path: str) -> ArrayNode | TupleNode:
        """Parse an array type node: ``items`` gives a list, ``prefixItems`` a tuple."""
        items_schema = schema.get("items")
        prefix_items = schema.get("prefixItems")

        # "items": false only closes a tuple, it does not describe a second shape
        if items_schema is False and prefix_items is not None:
            items_schema = None

        if items_schema is not None and prefix_items is not None:
            raise ConflictingArrayShape("array declares both 'items' and 'prefixItems'", path)

        if prefix_items is not None:
            if not isinstance(prefix_items, list) or not prefix_items:
                raise SchemaError("'prefixItems' must be a non-empty array", path)
            elements = [self._parse_schema_node(item, f"{path}/prefixItems/{i}") for i, item in enumerate(prefix_items)]
            return TupleNode(elements=elements, source_path=path)

        if items_schema is not None:
            if isinstance(items_schema, list):
                raise SchemaError("array-form 'items' is not supported, use 'prefixItems'", path)
            return ArrayNode(items=self._parse_schema_node(items_schema, f"{path}/items"), source_path=path)

        raise SchemaError("array schema needs 'items' or 'prefixItems'", path)

    def _parse_object_node(self, schema: dict[str, Any], path: str) -> ObjectNode:
        """Parse an object type node."""
        properties_schema = schema.get("properties", {})
        if not isinstance(properties_schema, dict):
            raise SchemaError("'properties' must be an object", path)

        required_fields = schema.get("required", [])
        if not isinstance(required_fields, list) or not all(isinstance(r, str) for r in required_fields):
            raise SchemaError("'required' must be an array of strings", path)

        for name in required_fields:
            if name not in properties_schema:
                logger.debug("%s: required property %r is not declared, ignoring", path, name)

        properties = []
        for prop_name, prop_schema in properties_schema.items():
            prop_path = f"{path}/properties/{escape_pointer_segment(prop_name)}"
            prop_node = self._parse_schema_node(prop_schema, prop_path)

            prop_def = PropertyDef(
                name=prop_name,
                type_node=prop_node,
                is_required=prop_name in required_fields,
                source_path=prop_path,
                description=prop_node.description,
                default=prop_node.default,
                has_default=prop_node.has_default,
            )
            properties.append(prop_def)

        return ObjectNode(
            properties=properties,
            required=list(required_fields),
            source_path=path,
        )

    def _parse_primitive_node(self, schema: dict[str, Any], type_name: str, path: str) -> PrimitiveNode:
        """Parse a primitive type node."""
        node = PrimitiveNode(type_name=type_name, source_path=path)

        if type_name not in ("integer", "number"):
            return node

        minimum = schema.get("minimum")
        if minimum is not None and not _is_number(minimum):
            raise SchemaError("'minimum' must be a number", path)

        exclusive = schema.get("exclusiveMinimum")
        if isinstance(exclusive, bool):
            # Draft-04 form: the flag turns "minimum" into an exclusive bound
            if exclusive and minimum is not None:
                node.exclusive_minimum = minimum
                minimum = None
        elif exclusive is not None:
            if not _is_number(exclusive):
                raise SchemaError("'exclusiveMinimum' must be a number", path)
            node.exclusive_minimum = exclusive

        node.minimum = minimum
        return node
